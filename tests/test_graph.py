"""Tests for the tiling graph (insertion, adjacency, rollback)."""

import pytest

from polytiling.errors import IndexOutOfRange, OverlapError
from polytiling.geometry import attach_transform
from polytiling.graph import TilingGraph
from polytiling.models import EdgeRef


def _attach(graph, parent_id, edge, sides):
    center, orientation = attach_transform(graph[parent_id], edge, sides)
    return graph.insert(sides, center, orientation)


@pytest.fixture
def hex_graph():
    graph = TilingGraph()
    graph.insert(6, (0.0, 0.0), 0.0)
    return graph


class TestInsert:
    def test_sequential_ids(self, hex_graph):
        assert _attach(hex_graph, 0, 0, 4) == 1
        assert _attach(hex_graph, 0, 1, 4) == 2
        assert [p.id for p in hex_graph] == [0, 1, 2]

    def test_attached_edge_is_partnered(self, hex_graph):
        square = _attach(hex_graph, 0, 3, 4)
        assert hex_graph.edge_partner(EdgeRef(square, 0)) == EdgeRef(0, 3)
        assert hex_graph.edge_partner(EdgeRef(0, 3)) == EdgeRef(square, 0)
        assert hex_graph.edge_partner(EdgeRef(square, 2)) is None

    def test_incidental_adjacency_recorded(self, hex_graph):
        left = _attach(hex_graph, 0, 0, 4)
        right = _attach(hex_graph, 0, 1, 4)
        # Fills the 60 degree gap at hexagon vertex 1.
        triangle = _attach(hex_graph, right, 1, 3)
        assert hex_graph.neighbors(triangle) == [left, right]
        assert hex_graph.edge_partner(EdgeRef(left, 3)) is not None

    def test_overlap_raises_and_leaves_graph(self, hex_graph):
        with pytest.raises(OverlapError):
            hex_graph.insert(4, (0.3, 0.0), 0.0)
        assert len(hex_graph) == 1

    def test_rotated_duplicate_overlaps(self, hex_graph):
        with pytest.raises(OverlapError):
            hex_graph.insert(6, (0.0, 0.0), 0.2)

    def test_claimed_edge_raises(self, hex_graph):
        _attach(hex_graph, 0, 0, 4)
        center, orientation = attach_transform(hex_graph[0], 0, 3)
        with pytest.raises(OverlapError):
            hex_graph.insert(3, center, orientation)
        assert len(hex_graph) == 2

    def test_getitem_out_of_range(self, hex_graph):
        with pytest.raises(IndexOutOfRange) as excinfo:
            hex_graph[5]
        assert "model shapes" in str(excinfo.value)


class TestTransaction:
    def test_rollback_on_error(self, hex_graph):
        with pytest.raises(RuntimeError):
            with hex_graph.transaction():
                _attach(hex_graph, 0, 0, 4)
                _attach(hex_graph, 0, 1, 3)
                raise RuntimeError("boom")
        assert len(hex_graph) == 1
        assert hex_graph.edge_partner(EdgeRef(0, 0)) is None
        assert hex_graph.boundary_edges() == [EdgeRef(0, i) for i in range(6)]
        center, orientation = attach_transform(hex_graph[0], 0, 4)
        assert hex_graph.index.find_coincident_polygon(center, orientation, 4) is None

    def test_commit_without_error(self, hex_graph):
        with hex_graph.transaction():
            _attach(hex_graph, 0, 0, 4)
        assert len(hex_graph) == 2

    def test_ids_reused_after_rollback(self, hex_graph):
        with pytest.raises(OverlapError):
            with hex_graph.transaction():
                _attach(hex_graph, 0, 0, 12)
                _attach(hex_graph, 0, 1, 12)
        assert _attach(hex_graph, 0, 2, 4) == 1


class TestQueries:
    def test_dual_edges_and_boundary(self, hex_graph):
        _attach(hex_graph, 0, 0, 4)
        assert hex_graph.dual_edges() == {(0, 1)}
        assert len(hex_graph.boundary_edges()) == 6 + 4 - 2

    def test_dual_edges_symmetric_with_neighbors(self, hex_graph):
        squares = [_attach(hex_graph, 0, e, 4) for e in range(6)]
        for s in squares:
            _attach(hex_graph, s, 1, 3)
        for a, b in hex_graph.dual_edges():
            assert a < b
            assert b in hex_graph.neighbors(a)
            assert a in hex_graph.neighbors(b)

    def test_face_adjacency(self, hex_graph):
        _attach(hex_graph, 0, 0, 4)
        _attach(hex_graph, 0, 3, 4)
        assert hex_graph.face_adjacency() == {0: [1, 2], 1: [0], 2: [0]}

    def test_adjacency_pairs_sorted(self, hex_graph):
        _attach(hex_graph, 0, 4, 4)
        _attach(hex_graph, 0, 1, 4)
        pairs = hex_graph.adjacency_pairs()
        assert pairs == [
            (EdgeRef(0, 1), EdgeRef(2, 0)),
            (EdgeRef(0, 4), EdgeRef(1, 0)),
        ]

    def test_validate_clean(self, hex_graph):
        squares = [_attach(hex_graph, 0, e, 4) for e in range(6)]
        for s in squares:
            _attach(hex_graph, s, 1, 3)
        assert hex_graph.validate() == []
