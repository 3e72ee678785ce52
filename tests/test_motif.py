"""Tests for translation inference and motif replication."""

import math

import pytest

from polytiling import (
    DegenerateMotifError,
    Model,
    Shape,
    TilingConfig,
    TilingError,
)
from polytiling.diagnostics import coverage_ratio, double_claims, uncovered_edges
from polytiling.motif import derive_translations, replicate


def _intro_model(config=None, width=1024, height=1024, scale=128.0):
    model = Model(width, height, scale, config=config)
    model.add(Shape(6))
    squares = model.add_multi(range(0, 1), range(0, 6), Shape(4))
    model.add_multi(squares, range(1, 2), Shape(3))
    hexagons = model.add_multi(squares, range(2, 3), Shape(6))
    return model, hexagons


class TestDeriveTranslations:
    def test_hexagon_ring_gives_six_vectors(self):
        model, hexagons = _intro_model()
        translations = derive_translations(model.graph, hexagons)
        assert len(translations) == 6
        for tx, ty in translations:
            assert math.hypot(tx, ty) == pytest.approx(1.0 + math.sqrt(3.0))

    def test_inverses_included(self):
        model, hexagons = _intro_model()
        translations = derive_translations(model.graph, hexagons[:1])
        assert len(translations) == 2
        (ax, ay), (bx, by) = translations
        assert ax == pytest.approx(-bx)
        assert ay == pytest.approx(-by)

    def test_empty_seed_range(self):
        model, _ = _intro_model()
        with pytest.raises(DegenerateMotifError):
            derive_translations(model.graph, range(0, 0))

    def test_seed_without_boundary(self):
        model = Model(512, 512, 64.0)
        model.add(Shape(6))
        model.add_multi(range(0, 1), range(0, 6), Shape(4))
        with pytest.raises(DegenerateMotifError):
            model.repeat(range(0, 1))
        assert len(model) == 7

    def test_seed_with_no_copy(self):
        model = Model(512, 512, 64.0)
        model.add(Shape(6))
        with pytest.raises(DegenerateMotifError):
            model.repeat(range(0, 1))
        assert len(model) == 1


class TestRepeat:
    def test_no_gaps_inside_canvas(self):
        model, hexagons = _intro_model()
        model.repeat(hexagons)
        assert uncovered_edges(model) == []
        assert double_claims(model) == []

    def test_canvas_covered(self):
        model, hexagons = _intro_model()
        model.repeat(hexagons)
        assert coverage_ratio(model, samples=16) == pytest.approx(1.0)

    def test_second_repeat_on_enclosed_seeds(self):
        model, hexagons = _intro_model()
        model.repeat(hexagons)
        count = len(model)
        # The seed hexagons are now fully surrounded.
        with pytest.raises(DegenerateMotifError):
            model.repeat(hexagons)
        assert len(model) == count
        assert uncovered_edges(model) == []

    def test_larger_canvas_gets_more_polygons(self):
        small, hexagons = _intro_model(width=512, height=512)
        small.repeat(hexagons)
        large, hexagons = _intro_model(width=2048, height=2048)
        large.repeat(hexagons)
        assert len(large) > len(small)

    def test_wide_canvas(self):
        model, hexagons = _intro_model(width=2000, height=300, scale=100.0)
        model.repeat(hexagons)
        assert uncovered_edges(model) == []
        assert model.validate() == []

    def test_max_insertions_rolls_back(self):
        model, hexagons = _intro_model(config=TilingConfig(max_insertions=5))
        with pytest.raises(TilingError):
            model.repeat(hexagons)
        assert len(model) == 19

    def test_strict_config(self):
        model, hexagons = _intro_model(config=TilingConfig(epsilon=1e-9))
        model.repeat(hexagons)
        assert model.validate() == []
        assert uncovered_edges(model) == []

    def test_replicate_without_translations(self):
        model, _ = _intro_model()
        assert replicate(model.graph, [], model.canvas_bounds()) == []
        assert len(model) == 19

    def test_replicate_returns_new_ids(self):
        model, hexagons = _intro_model()
        translations = derive_translations(model.graph, hexagons)
        with model.graph.transaction():
            inserted = replicate(model.graph, translations, model.canvas_bounds())
        assert inserted == list(range(19, len(model)))
