"""Tests for the built-in tilings."""

import pytest

from polytiling.diagnostics import double_claims, uncovered_edges
from polytiling.recipes import RECIPES, RECIPE_PALETTES, build_recipe


class TestRecipeCatalogue:
    def test_names(self):
        assert set(RECIPES) == {"3.4.6.4", "3.6.3.6", "3.3.4.3.4", "3.3.3.3.6", "3.3.3.3.3.3"}
        assert set(RECIPE_PALETTES) == set(RECIPES)

    def test_unknown_recipe(self):
        with pytest.raises(KeyError):
            build_recipe("4.8.8")


class TestMotifs:
    @pytest.mark.parametrize(
        "name, count",
        [
            ("3.4.6.4", 19),
            ("3.6.3.6", 13),
            ("3.3.4.3.4", 25),
            ("3.3.3.3.6", 25),
            ("3.3.3.3.3.3", 10),
        ],
    )
    def test_motif_size(self, name, count):
        model = build_recipe(name, repeat=False)
        assert len(model) == count
        assert model.validate() == []

    def test_palette_applied(self):
        model = build_recipe("3.4.6.4", repeat=False)
        palette = RECIPE_PALETTES["3.4.6.4"]
        assert model.polygon(0).fill == palette.fill_0
        assert model.polygon(1).fill == palette.fill_1
        assert all(p.stroke == palette.stroke for p in model.polygons)


@pytest.mark.parametrize("name", sorted(RECIPES))
def test_recipe_tiles_canvas(name):
    model = build_recipe(name, width=768, height=640, scale=96.0)
    assert model.validate() == []
    assert double_claims(model) == []
    assert uncovered_edges(model) == []
    assert len(model) < 10000


@pytest.mark.parametrize("name", sorted(RECIPES))
def test_vertex_configuration(name):
    """Every fully surrounded vertex has the tiling's vertex configuration."""
    from polytiling.dual import dual_overlay

    model = build_recipe(name, width=512, height=512, scale=64.0)
    expected = sorted(int(s) for s in name.split("."))
    overlay = dual_overlay(model)
    assert overlay.regions
    for region in overlay.regions:
        sides = sorted(model.polygon(pid).sides for pid in region.source_polygon_ids)
        assert sides == expected
