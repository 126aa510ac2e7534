"""Layer representation.

A layer is one horizontal slice of a model: a Z height plus the contours
cut at that height. Layers are the unit of work for the cleanup pipeline
and of the layer file format.
"""

from dataclasses import dataclass, field
from typing import Any

from slicegeom.domain.contour_set import ContourSet


@dataclass
class Layer:
    """A single slice with its contours.

    Attributes:
        z: Slice height in microns
        contours: Contours of the slice
    """

    z: int
    contours: ContourSet = field(default_factory=ContourSet)

    def is_empty(self) -> bool:
        """Check if the layer has no contours."""
        return len(self.contours) == 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary representation of the layer
        """
        return {"z": self.z, "contours": self.contours.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Layer":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a layer

        Returns:
            Layer instance
        """
        return cls(z=int(data["z"]), contours=ContourSet.from_dict(data["contours"]))


@dataclass
class LayerParts:
    """Result of cleaning and decomposing one layer.

    Attributes:
        z: Slice height in microns
        parts: Parts of the layer, each outline first followed by its holes
    """

    z: int
    parts: list[ContourSet] = field(default_factory=list)

    @property
    def contour_count(self) -> int:
        return sum(len(part) for part in self.parts)

    def to_dict(self) -> dict[str, Any]:
        return {"z": self.z, "parts": [p.to_dict() for p in self.parts]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LayerParts":
        return cls(z=int(data["z"]), parts=[ContourSet.from_dict(p) for p in data["parts"]])
