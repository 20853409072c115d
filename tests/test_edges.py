"""
Tests for edge detection.
"""

from py_layers.core.edges import identify_edges
from py_layers.core.height_field import Column, HeightField


class TestIdentifyEdges:
    """Test the 8-neighbour drop rule."""

    def test_flat_field_has_no_edges(self):
        field = HeightField.from_grid([[5, 5, 5], [5, 5, 5], [5, 5, 5]])
        assert identify_edges(field, 1) == set()

    def test_only_higher_side_is_edge(self):
        field = HeightField.from_grid([[2, 1]])
        assert identify_edges(field, 1) == {(Column(0, 0), 2)}

    def test_threshold_tie_counts(self):
        field = HeightField.from_grid([[3, 2, 0]])
        edges = identify_edges(field, 2)

        # 3 -> 2 is below the threshold, 2 -> 0 matches it exactly
        assert edges == {(Column(1, 0), 2)}

    def test_diagonal_neighbors(self):
        field = HeightField.from_grid([[5, 5], [5, 4]])
        edges = identify_edges(field, 1)

        assert edges == {(Column(0, 0), 5), (Column(1, 0), 5), (Column(0, 1), 5)}

    def test_missing_neighbors_are_ignored(self):
        field = HeightField.from_grid([[5, None], [None, None]])
        assert identify_edges(field, 1) == set()

    def test_edges_carry_their_own_elevation(self):
        field = HeightField.from_grid([[9, 7, 4]])
        edges = identify_edges(field, 1)

        assert (Column(0, 0), 9) in edges
        assert (Column(1, 0), 7) in edges
        assert all(field.elevation(column) == y for column, y in edges)
