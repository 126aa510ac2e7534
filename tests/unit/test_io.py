"""Unit tests for the layer file I/O layer.

Tests for LayerReader, LayerWriter and the HTML/SVG debug dump.
"""

import json
from pathlib import Path

import pytest

from slicegeom.domain import Contour, ContourSet, Layer, LayerParts
from slicegeom.exceptions import LayerFormatError, LayerLoadError, LayerSaveError
from slicegeom.io import LayerReader, LayerWriter, render_debug_svg, write_debug_html


def write_json(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture
def layer_file(tmp_path: Path) -> Path:
    """Create a layer file with two layers, one of them empty."""
    return write_json(
        tmp_path / "model.layers.json",
        {
            "version": 1,
            "layers": [
                {
                    "z": 200,
                    "contours": [
                        [[0, 0], [3000, 0], [3000, 3000], [0, 3000]],
                        [[1000, 1000], [1000, 2000], [2000, 2000], [2000, 1000]],
                    ],
                },
                {"z": 400, "contours": []},
            ],
        },
    )


class TestLayerReader:
    """Tests for LayerReader class."""

    def test_read_all(self, layer_file: Path, square_with_hole: ContourSet) -> None:
        """Test loading every layer."""
        layers = LayerReader(layer_file).read_all()
        assert [layer.z for layer in layers] == [200, 400]
        assert layers[0].contours == square_with_hole
        assert layers[1].is_empty()

    def test_layer_count(self, layer_file: Path) -> None:
        """Test counting layers after load."""
        reader = LayerReader(layer_file)
        reader.load()
        assert reader.layer_count == 2

    def test_layer_count_before_load(self, layer_file: Path) -> None:
        """Test accessing layers before loading raises RuntimeError."""
        reader = LayerReader(layer_file)
        with pytest.raises(RuntimeError, match="Layers not loaded"):
            _ = reader.layer_count

    def test_iter_layers_before_load(self, layer_file: Path) -> None:
        """Test iterating layers before loading raises RuntimeError."""
        reader = LayerReader(layer_file)
        with pytest.raises(RuntimeError, match="Layers not loaded"):
            list(reader.iter_layers())

    def test_load_nonexistent_file(self, tmp_path: Path) -> None:
        """Test loading a nonexistent file raises LayerLoadError."""
        reader = LayerReader(tmp_path / "missing.json")
        with pytest.raises(LayerLoadError) as exc_info:
            reader.load()
        assert exc_info.value.reason == "file not found"

    def test_load_invalid_json(self, tmp_path: Path) -> None:
        """Test that malformed JSON raises LayerLoadError."""
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(LayerLoadError):
            LayerReader(path).load()

    def test_missing_layers_list(self, tmp_path: Path) -> None:
        """Test that a document without layers raises LayerFormatError."""
        path = write_json(tmp_path / "empty.json", {"version": 1})
        with pytest.raises(LayerFormatError, match="missing 'layers' list"):
            LayerReader(path).load()

    def test_unsupported_version(self, tmp_path: Path) -> None:
        """Test that an unknown format version is rejected."""
        path = write_json(tmp_path / "v2.json", {"version": 2, "layers": []})
        with pytest.raises(LayerFormatError, match="unsupported version 2"):
            LayerReader(path).load()

    def test_non_integer_coordinate(self, tmp_path: Path) -> None:
        """Test that float coordinates are rejected."""
        path = write_json(
            tmp_path / "floats.json",
            {"version": 1, "layers": [{"z": 0, "contours": [[[0.5, 0], [1, 0], [1, 1]]]}]},
        )
        with pytest.raises(LayerFormatError, match="non-integer coordinate"):
            LayerReader(path).read_all()

    def test_boolean_coordinate(self, tmp_path: Path) -> None:
        """Test that true/false are not accepted as coordinates."""
        path = write_json(
            tmp_path / "bools.json",
            {"version": 1, "layers": [{"z": 0, "contours": [[[True, 0], [1, 0], [1, 1]]]}]},
        )
        with pytest.raises(LayerFormatError, match="non-integer coordinate"):
            LayerReader(path).read_all()

    def test_boolean_z(self, tmp_path: Path) -> None:
        """Test that a boolean Z height is rejected."""
        path = write_json(tmp_path / "boolz.json", {"version": 1, "layers": [{"z": False}]})
        with pytest.raises(LayerFormatError, match="non-integer z"):
            LayerReader(path).read_all()

    def test_malformed_point(self, tmp_path: Path) -> None:
        """Test that points must be pairs."""
        path = write_json(
            tmp_path / "triples.json",
            {"version": 1, "layers": [{"z": 0, "contours": [[[0, 0, 0]]]}]},
        )
        with pytest.raises(LayerFormatError, match="invalid point"):
            LayerReader(path).read_all()

    def test_missing_z(self, tmp_path: Path) -> None:
        """Test that every layer needs a Z height."""
        path = write_json(tmp_path / "noz.json", {"version": 1, "layers": [{"contours": []}]})
        with pytest.raises(LayerFormatError, match="without 'z'"):
            LayerReader(path).read_all()


class TestLayerWriter:
    """Tests for LayerWriter class."""

    def test_get_parts_path(self) -> None:
        """Test default output path generation."""
        assert LayerWriter.get_parts_path(Path("/a/model.json")) == Path("/a/model-parts.json")
        assert LayerWriter.get_parts_path(Path("model")) == Path("model-parts.json")

    def test_save_layers_round_trip(self, tmp_path: Path, square_with_hole: ContourSet) -> None:
        """Test that saved layers load back unchanged."""
        path = tmp_path / "out" / "layers.json"
        LayerWriter(path).save_layers([Layer(z=200, contours=square_with_hole)])

        layers = LayerReader(path).read_all()
        assert len(layers) == 1
        assert layers[0].z == 200
        assert layers[0].contours == square_with_hole

    def test_save_parts(self, tmp_path: Path, square_with_hole: ContourSet) -> None:
        """Test the parts document layout."""
        path = tmp_path / "parts.json"
        island = ContourSet()
        island.add(Contour.from_tuples([(5000, 0), (6000, 0), (6000, 1000)]))
        LayerWriter(path).save_parts([LayerParts(z=200, parts=[square_with_hole, island])])

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["version"] == 1
        layer = data["layers"][0]
        assert layer["z"] == 200
        assert len(layer["parts"]) == 2
        assert layer["parts"][0][0] == [[0, 0], [3000, 0], [3000, 3000], [0, 3000]]
        assert layer["parts"][1] == [[[5000, 0], [6000, 0], [6000, 1000]]]

    def test_save_to_unwritable_path(self, tmp_path: Path) -> None:
        """Test that write failures raise LayerSaveError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(LayerSaveError):
            LayerWriter(blocker / "parts.json").save_parts([])


class TestDebugHtml:
    """Tests for the debug dump."""

    def test_empty_set(self) -> None:
        """Test rendering nothing."""
        svg = render_debug_svg(ContourSet())
        assert svg.startswith("<svg")
        assert svg.endswith("</svg>")
        assert "<polygon" not in svg

    def test_outline_gray_hole_red(self, square_with_hole: ContourSet, nesting_engine) -> None:
        """Test that outlines and holes get different fills."""
        svg = render_debug_svg(square_with_hole, engine=nesting_engine)
        assert svg.count("<polygon") == 2
        assert svg.count("fill:gray") == 1
        assert svg.count("fill:red") == 1
        assert "<circle" not in svg

    def test_scaled_to_canvas(self, square_with_hole: ContourSet, nesting_engine) -> None:
        """Test that the model is scaled to the 500px canvas."""
        svg = render_debug_svg(square_with_hole, engine=nesting_engine)
        assert "500.000000,500.000000" in svg
        assert "166.666667,166.666667" in svg

    def test_dot_the_vertices(self, square_with_hole: ContourSet, nesting_engine) -> None:
        """Test drawing a dot per vertex."""
        svg = render_debug_svg(square_with_hole, dot_the_vertices=True, engine=nesting_engine)
        assert svg.count("<circle") == 8

    def test_write_debug_html(
        self, tmp_path: Path, square_with_hole: ContourSet, nesting_engine
    ) -> None:
        """Test writing the HTML page."""
        path = tmp_path / "debug.html"
        write_debug_html(square_with_hole, path, engine=nesting_engine)
        html = path.read_text(encoding="utf-8")
        assert html.startswith("<!DOCTYPE html>")
        assert "<svg" in html
