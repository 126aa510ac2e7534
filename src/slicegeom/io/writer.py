"""Layer file writers.

Writes cleaned layers (plain contour lists) or decomposed layers (parts,
outline first in each) in the same JSON envelope the reader accepts.
"""

import json
from pathlib import Path
from typing import Any

from slicegeom.domain import Layer, LayerParts
from slicegeom.exceptions import LayerSaveError
from slicegeom.io.reader import FORMAT_VERSION


class LayerWriter:
    """Saves layers to a JSON layer file.

    Example:
        writer = LayerWriter(Path("model-parts.json"))
        writer.save_parts(results)
    """

    def __init__(self, path: Path) -> None:
        """Initialize the writer.

        Args:
            path: Output path
        """
        self._path = path

    @staticmethod
    def get_parts_path(input_path: Path) -> Path:
        """Generate the default output path for a parts file.

        Args:
            input_path: Input layer file path

        Returns:
            Path with "-parts" appended to the stem (e.g., model-parts.json)
        """
        return input_path.with_name(f"{input_path.stem}-parts{input_path.suffix or '.json'}")

    def _write(self, payload: dict[str, Any]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, "w", encoding="utf-8") as f:
                json.dump(payload, f, separators=(",", ":"))
        except OSError as e:
            raise LayerSaveError(str(self._path), str(e)) from e

    def save_layers(self, layers: list[Layer]) -> None:
        """Write layers as plain contour lists.

        Raises:
            LayerSaveError: If the file cannot be written
        """
        self._write({
            "version": FORMAT_VERSION,
            "layers": [
                {"z": layer.z, "contours": layer.contours.to_tuples()}
                for layer in layers
            ],
        })

    def save_parts(self, results: list[LayerParts]) -> None:
        """Write decomposed layers; each part lists its outline first.

        Raises:
            LayerSaveError: If the file cannot be written
        """
        self._write({
            "version": FORMAT_VERSION,
            "layers": [
                {"z": result.z, "parts": [part.to_tuples() for part in result.parts]}
                for result in results
            ],
        })
