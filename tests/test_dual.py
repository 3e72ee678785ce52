"""Tests for the dual tiling overlay."""

import pytest

from polytiling import Model, Shape
from polytiling.dual import Overlay, dual_overlay


def _ringed_hexagon():
    model = Model(512, 512, 64.0)
    model.add(Shape(6))
    squares = model.add_multi(range(0, 1), range(0, 6), Shape(4))
    model.add_multi(squares, range(1, 2), Shape(3))
    return model


def _signed_area(points):
    n = len(points)
    return sum(
        points[i][0] * points[(i + 1) % n][1] - points[(i + 1) % n][0] * points[i][1]
        for i in range(n)
    ) / 2.0


class TestDualBasic:
    def test_returns_overlay(self):
        overlay = dual_overlay(_ringed_hexagon())
        assert isinstance(overlay, Overlay)
        assert overlay.kind == "dual"

    def test_sites_equal_polygon_count(self):
        model = _ringed_hexagon()
        overlay = dual_overlay(model)
        assert len(overlay.points) == len(model) == 13
        assert overlay.points[0].source_polygon_id == 0
        assert (overlay.points[0].x, overlay.points[0].y) == (0.0, 0.0)

    def test_one_segment_per_dual_edge(self):
        model = _ringed_hexagon()
        overlay = dual_overlay(model)
        # 6 hexagon-square pairs and 12 square-triangle pairs
        assert len(overlay.segments) == len(model.dual_edges()) == 18
        pairs = {seg.source_polygon_ids for seg in overlay.segments}
        assert pairs == model.dual_edges()

    def test_metadata_populated(self):
        overlay = dual_overlay(_ringed_hexagon())
        assert overlay.metadata["n_sites"] == 13
        assert overlay.metadata["n_segments"] == 18
        assert overlay.metadata["n_regions"] == len(overlay.regions)

    def test_single_polygon_has_no_faces(self):
        model = Model(256, 256, 64.0)
        model.add(Shape(4))
        overlay = dual_overlay(model)
        assert len(overlay.points) == 1
        assert overlay.segments == []
        assert overlay.regions == []


class TestDualFaces:
    def test_faces_only_at_complete_vertices(self):
        overlay = dual_overlay(_ringed_hexagon())
        # Only the six hexagon vertices are fully surrounded.
        assert len(overlay.regions) == 6
        for region in overlay.regions:
            assert len(region.points) == 4
            assert 0 in region.source_polygon_ids

    def test_faces_wind_counter_clockwise(self):
        overlay = dual_overlay(_ringed_hexagon())
        for region in overlay.regions:
            assert _signed_area(region.points) > 0.0

    def test_tiled_model_faces(self):
        from polytiling.recipes import build_3636

        model = build_3636(width=512, height=512, scale=64.0)
        overlay = dual_overlay(model)
        assert len(overlay.regions) > 0
        # Every 3.6.3.6 vertex joins two triangles and two hexagons.
        for region in overlay.regions:
            sides = sorted(model.polygon(pid).sides for pid in region.source_polygon_ids)
            assert sides == [3, 3, 6, 6]

    def test_source_vertex_is_shared(self):
        model = _ringed_hexagon()
        overlay = dual_overlay(model)
        for region in overlay.regions:
            vx, vy = region.source_vertex
            for pid in region.source_polygon_ids:
                assert any(
                    abs(px - vx) < 1e-6 and abs(py - vy) < 1e-6
                    for px, py in model.vertices(pid)
                )

    def test_model_unchanged(self):
        model = _ringed_hexagon()
        before = model.to_dict()
        dual_overlay(model)
        assert model.to_dict() == before


@pytest.mark.parametrize("name", ["3.4.6.4", "3.3.4.3.4"])
def test_dual_regions_from_recipes(name):
    from polytiling.recipes import build_recipe

    model = build_recipe(name, width=512, height=512, scale=64.0)
    overlay = dual_overlay(model)
    expected = len(name.split("."))
    assert overlay.regions
    assert all(len(region.points) == expected for region in overlay.regions)
