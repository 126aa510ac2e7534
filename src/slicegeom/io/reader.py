"""Layer file reader.

Layer files are JSON documents::

    {"version": 1, "layers": [{"z": 200, "contours": [[[x, y], ...], ...]}]}

Coordinates are integer microns.
"""

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from slicegeom.domain import Contour, ContourSet, Layer
from slicegeom.exceptions import LayerFormatError, LayerLoadError

FORMAT_VERSION = 1


def _is_int(value: Any) -> bool:
    # JSON true/false load as bool, which is an int subclass
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_contour(raw: Any, path: Path, z: int) -> Contour:
    if not isinstance(raw, list):
        raise LayerFormatError(str(path), f"contour at z={z} is not a list of points")
    points = []
    for point in raw:
        if not isinstance(point, (list, tuple)) or len(point) != 2:
            raise LayerFormatError(str(path), f"invalid point {point!r} at z={z}")
        x, y = point
        if not _is_int(x) or not _is_int(y):
            raise LayerFormatError(str(path), f"non-integer coordinate {point!r} at z={z}")
        points.append((x, y))
    return Contour.from_tuples(points)


class LayerReader:
    """Loads layer files into domain models.

    Example:
        reader = LayerReader(Path("model.layers.json"))
        reader.load()
        for layer in reader.iter_layers():
            print(layer.z, len(layer.contours))
    """

    def __init__(self, path: Path) -> None:
        """Initialize the layer reader.

        Args:
            path: Path to the layer file
        """
        self._path = path
        self._data: dict[str, Any] | None = None

    def load(self) -> None:
        """Load and validate the layer file envelope.

        Raises:
            LayerLoadError: If the file is missing or is not valid JSON
            LayerFormatError: If the JSON does not describe layers
        """
        if not self._path.exists():
            raise LayerLoadError(str(self._path), "file not found")

        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise LayerLoadError(str(self._path), str(e)) from e

        if not isinstance(data, dict) or not isinstance(data.get("layers"), list):
            raise LayerFormatError(str(self._path), "missing 'layers' list")

        version = data.get("version", FORMAT_VERSION)
        if version != FORMAT_VERSION:
            raise LayerFormatError(str(self._path), f"unsupported version {version}")

        self._data = data

    def _require_loaded(self) -> dict[str, Any]:
        if self._data is None:
            raise RuntimeError("Layers not loaded. Call load() first.")
        return self._data

    @property
    def layer_count(self) -> int:
        """Return the number of layers in the file.

        Raises:
            RuntimeError: If the file has not been loaded yet
        """
        return len(self._require_loaded()["layers"])

    def iter_layers(self) -> Iterator[Layer]:
        """Iterate over all layers in file order.

        Yields:
            Layer domain models

        Raises:
            LayerFormatError: If a layer entry is malformed
        """
        for entry in self._require_loaded()["layers"]:
            if not isinstance(entry, dict) or "z" not in entry:
                raise LayerFormatError(str(self._path), "layer entry without 'z'")
            z = entry["z"]
            if not _is_int(z):
                raise LayerFormatError(str(self._path), f"non-integer z {z!r}")
            contours = ContourSet(
                contours=[_parse_contour(raw, self._path, z) for raw in entry.get("contours", [])]
            )
            yield Layer(z=z, contours=contours)

    def read_all(self) -> list[Layer]:
        """Load the file (if needed) and return every layer."""
        if self._data is None:
            self.load()
        return list(self.iter_layers())
