"""Tests for forest decomposition into parts and the cleanup pipeline."""

import pytest

from slicegeom.config import CleanupConfig
from slicegeom.core import LayerCleaner, forest_to_parts, split_into_parts
from slicegeom.domain import Contour, ContourNode, ContourSet, FillRule, Layer, Point


def square(x0: int, y0: int, size: int, clockwise: bool = False) -> Contour:
    """Axis-aligned square contour."""
    coords = [(x0, y0), (x0 + size, y0), (x0 + size, y0 + size), (x0, y0 + size)]
    if clockwise:
        coords.reverse()
    return Contour.from_tuples(coords)


@pytest.fixture
def nested_forest() -> tuple[ContourNode, dict[str, Contour]]:
    """Create a forest with two outlines, holes, and an island in a hole.

    outline_a
      hole_a1
        island
          island_hole
      hole_a2
    outline_b
    """
    contours = {
        "outline_a": square(0, 0, 10_000),
        "hole_a1": square(1000, 1000, 5000, clockwise=True),
        "island": square(2000, 2000, 3000),
        "island_hole": square(3000, 3000, 1000, clockwise=True),
        "hole_a2": square(7000, 7000, 2000, clockwise=True),
        "outline_b": square(20_000, 0, 1000),
    }
    root = ContourNode()
    outline_a = root.add_child(contours["outline_a"])
    hole_a1 = outline_a.add_child(contours["hole_a1"])
    island = hole_a1.add_child(contours["island"])
    island.add_child(contours["island_hole"])
    outline_a.add_child(contours["hole_a2"])
    root.add_child(contours["outline_b"])
    return root, contours


class TestForestToParts:
    """Tests for forest_to_parts."""

    def test_empty_forest(self) -> None:
        """Test that an empty root yields no parts."""
        assert forest_to_parts(ContourNode()) == []

    def test_single_outline(self) -> None:
        """Test an outline without holes."""
        root = ContourNode()
        root.add_child(square(0, 0, 1000))
        parts = forest_to_parts(root)
        assert len(parts) == 1
        assert parts[0].to_tuples() == [square(0, 0, 1000).to_tuples()]

    def test_holes_grouped_with_outline(self, nested_forest) -> None:
        """Test that direct holes share the part of their outline."""
        root, c = nested_forest
        parts = forest_to_parts(root)
        part_a = next(part for part in parts if part[0] == c["outline_a"])
        assert [ct.to_tuples() for ct in part_a] == [
            c["outline_a"].to_tuples(),
            c["hole_a1"].to_tuples(),
            c["hole_a2"].to_tuples(),
        ]

    def test_islands_start_new_parts(self, nested_forest) -> None:
        """Test that an island inside a hole becomes its own part with its hole."""
        root, c = nested_forest
        parts = forest_to_parts(root)

        assert len(parts) == 3
        island_part = [part for part in parts if part[0] == c["island"]]
        assert len(island_part) == 1
        assert [ct.to_tuples() for ct in island_part[0]] == [
            c["island"].to_tuples(),
            c["island_hole"].to_tuples(),
        ]

    def test_nested_parts_come_first(self, nested_forest) -> None:
        """Test traversal order: islands are emitted before their enclosing part."""
        root, c = nested_forest
        parts = forest_to_parts(root)
        assert [part[0] for part in parts] == [c["island"], c["outline_a"], c["outline_b"]]

    def test_parts_do_not_share_contours(self, nested_forest) -> None:
        """Test that parts hold copies of the forest's contours."""
        root, c = nested_forest
        parts = forest_to_parts(root)
        parts[0][0][0] = Point(-1, -1)
        assert root.children[0].children[0].children[0].contour == square(2000, 2000, 3000)


class TestSplitIntoParts:
    """Tests for split_into_parts."""

    def test_even_odd_by_default(self, square_with_hole: ContourSet, nesting_engine) -> None:
        """Test the fill rule used without union_all."""
        parts = split_into_parts(square_with_hole, engine=nesting_engine)
        assert len(parts) == 1
        assert nesting_engine.calls == [("union_to_forest", FillRule.EVEN_ODD)]

    def test_union_all_uses_non_zero(self, square_with_hole: ContourSet, nesting_engine) -> None:
        """Test the fill rule used with union_all."""
        split_into_parts(square_with_hole, union_all=True, engine=nesting_engine)
        assert nesting_engine.calls == [("union_to_forest", FillRule.NON_ZERO)]


class TestLayerCleaner:
    """Tests for the cleanup pipeline."""

    @pytest.fixture
    def noisy_layer(self) -> Layer:
        """Create a layer with a spike, a short edge, and a speck."""
        contours = ContourSet.from_tuples([
            [
                (0, 0), (1000, 0), (1000, 3), (1000, 1000),
                (500, 1000), (500, 1500), (500, 1000), (0, 1000),
            ],
            [(5000, 0), (5100, 0), (5100, 100), (5000, 100)],
        ])
        return Layer(z=200, contours=contours)

    def test_default_steps(self, noisy_layer: Layer, nesting_engine) -> None:
        """Test that the default config removes degenerate vertices and simplifies."""
        steps: list[str] = []
        cleaner = LayerCleaner(CleanupConfig(), engine=nesting_engine)
        cleaner.clean(noisy_layer.contours, on_step=lambda name, _: steps.append(name))
        assert steps == ["remove_degenerate", "simplify"]

    def test_all_steps(self, noisy_layer: Layer, nesting_engine) -> None:
        """Test that enabling every step runs them in order."""
        steps: list[str] = []
        config = CleanupConfig(smooth_remove_length=10, min_area_mm2=0.1)
        cleaner = LayerCleaner(config, engine=nesting_engine)
        result = cleaner.clean(noisy_layer.contours, on_step=lambda name, _: steps.append(name))

        assert steps == ["remove_degenerate", "smooth", "simplify", "remove_small_areas"]
        # The 0.01 mm² speck is gone and the spike flattened
        assert len(result) == 1
        assert result.bounding_max() == Point(1000, 1000)

    def test_clean_leaves_input_untouched(self, noisy_layer: Layer, nesting_engine) -> None:
        """Test that cleaning works on a copy."""
        before = noisy_layer.contours.copy()
        LayerCleaner(CleanupConfig(min_area_mm2=1.0), engine=nesting_engine).clean(
            noisy_layer.contours
        )
        assert noisy_layer.contours == before

    def test_disabled_steps(self, noisy_layer: Layer, nesting_engine) -> None:
        """Test that zeroed settings skip every step."""
        steps: list[str] = []
        config = CleanupConfig(remove_degenerate=False, simplify_error_distance=0)
        result = LayerCleaner(config, engine=nesting_engine).clean(
            noisy_layer.contours, on_step=lambda name, _: steps.append(name)
        )
        assert steps == []
        assert result == noisy_layer.contours

    def test_process_builds_layer_parts(self, noisy_layer: Layer, nesting_engine) -> None:
        """Test the full clean-and-split of a layer."""
        result = LayerCleaner(CleanupConfig(), engine=nesting_engine).process(noisy_layer)
        assert result.z == 200
        assert len(result.parts) == 2
        assert all(len(part) == 1 for part in result.parts)
