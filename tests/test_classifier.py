"""
Tests for per-elevation H/E/L classification.
"""

import pytest

from py_layers.core.classifier import (
    EDGE, HIGHER, LOW, LevelClassification, classify_level, classify_levels, output_levels,
)
from py_layers.core.edges import identify_edges
from py_layers.core.height_field import Column, HeightField


def step_grid():
    """5 rows: x=0 at 3, x 1..4 at 2, x=5 at 1."""
    return [[3, 2, 2, 2, 2, 1] for _ in range(5)]


class TestClassifyLevels:
    """Test the descending fold over elevations."""

    @pytest.fixture
    def fields(self):
        unfiltered = HeightField.from_grid(step_grid())
        return unfiltered, unfiltered

    @pytest.fixture
    def levels(self, fields):
        unfiltered, filtered = fields
        edges = identify_edges(unfiltered, 1)
        return classify_levels(unfiltered, filtered, edges)

    def test_levels_descend(self, levels):
        assert [level.elevation for level in levels] == [3, 2, 1]

    def test_top_level(self, levels):
        top = levels[0]
        assert top.higher == set()
        assert top.edge == {Column(0, z) for z in range(5)}
        assert top.low == set()

    def test_middle_level(self, levels):
        middle = levels[1]

        assert middle.higher == {Column(0, z) for z in range(5)}
        assert middle.low == {Column(x, z) for x in range(1, 4) for z in range(1, 4)}

        # Border rows touch holes, x=4 drops to the bottom level
        expected_edge = {Column(x, z) for x in range(1, 5) for z in (0, 4)}
        expected_edge |= {Column(4, z) for z in range(1, 4)}
        assert middle.edge == expected_edge

    def test_previous_edges_become_higher(self, levels):
        assert levels[2].higher == levels[1].edge

    def test_sets_are_disjoint(self, levels):
        for level in levels:
            assert not level.higher & level.edge
            assert not level.higher & level.low
            assert not level.edge & level.low

    def test_classify_lookup(self, levels):
        middle = levels[1]
        assert middle.classify(Column(0, 2)) == HIGHER
        assert middle.classify(Column(4, 2)) == EDGE
        assert middle.classify(Column(2, 2)) == LOW
        assert middle.classify(Column(5, 2)) is None

    def test_unfiltered_columns_are_never_low(self, fields):
        unfiltered, _ = fields
        filtered = unfiltered.restricted_to(unfiltered.columns() - {Column(2, 2)})
        levels = classify_levels(unfiltered, filtered, identify_edges(unfiltered, 1))

        assert Column(2, 2) not in levels[1].low
        assert levels[1].classify(Column(2, 2)) is None

    def test_output_levels_drop_highest_and_lowest(self, levels):
        assert output_levels(levels) == [levels[1]]
        assert output_levels(levels[:2]) == []

    def test_empty_field(self):
        field = HeightField()
        assert classify_levels(field, field, set()) == []


class TestClassifyLevel:
    """Test a single level in isolation."""

    def test_higher_wins_over_hole_rule(self):
        unfiltered = HeightField.from_grid([[4, 4]])
        column = Column(0, 0)

        level = classify_level(
            4, {column}, unfiltered, unfiltered, set(), unfiltered.columns_at(4)
        )

        assert level.higher == {column}
        assert column not in level.edge
        # The other column borders holes
        assert level.edge == {Column(1, 0)}

    def test_previous_edges_below_level_are_ignored(self):
        unfiltered = HeightField.from_grid([[2, 5]])
        level = classify_level(
            5, {Column(0, 0)}, unfiltered, unfiltered, set(), unfiltered.columns_at(5)
        )
        assert level.higher == set()

    def test_empty_level(self):
        assert LevelClassification(3).is_empty
