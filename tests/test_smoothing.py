"""
Tests for layer smoothing.
"""

import pytest

from py_layers.config.layer_settings import LayerConfig, RoundingMode, SmoothingPriority
from py_layers.core.classifier import LevelClassification
from py_layers.core.height_field import Column
from py_layers.core.smoothing import (
    neighbor_contributions, round_average, smooth_layers, smoothed_value,
)


def row_level(higher=(), edge=(), low=()):
    level = LevelClassification(10)
    level.higher = {Column(x, 0) for x in higher}
    level.edge = {Column(x, 0) for x in edge}
    level.low = {Column(x, 0) for x in low}
    return level


class TestRounding:
    """Test average rounding."""

    @pytest.mark.parametrize("average,mode,expected", [
        (4.2, RoundingMode.UP, 5),
        (4.8, RoundingMode.DOWN, 4),
        (4.5, RoundingMode.NEAREST, 5),
        (4.49, RoundingMode.NEAREST, 4),
        (2.5, RoundingMode.NEAREST, 3),
    ])
    def test_round_average(self, average, mode, expected):
        assert round_average(average, mode) == expected


class TestSmoothedValue:
    """Test the per-column relaxation rule."""

    def test_needs_two_contributors(self):
        assert smoothed_value([8], RoundingMode.NEAREST) is None

    def test_stays_below_highest_contributor(self):
        assert smoothed_value([8, 8], RoundingMode.NEAREST) == 7
        assert smoothed_value([3, 3], RoundingMode.NEAREST) == 2

    def test_clamped_to_minimum(self):
        assert smoothed_value([0, 0], RoundingMode.NEAREST) == 1

    def test_contributions(self):
        level = row_level(higher=[0], edge=[2], low=[1])
        contributions, has_edge = neighbor_contributions(Column(1, 0), level, {})

        assert sorted(contributions) == [0, 8]
        assert has_edge

    def test_low_neighbors_without_value_do_not_count(self):
        level = row_level(higher=[0], low=[1, 2])
        contributions, has_edge = neighbor_contributions(Column(1, 0), level, {})

        assert contributions == [8]
        assert not has_edge


class TestSmoothLayers:
    """Test smoothing passes."""

    def test_zero_cycles_keeps_values(self):
        level = row_level(higher=[0], edge=[3], low=[1, 2])
        values = {Column(1, 0): 1, Column(2, 0): 1}

        result = smooth_layers([level], values, LayerConfig(smoothing_cycles=0))

        assert result == values
        assert result is not values

    def test_updates_are_applied_after_each_pass(self):
        level = row_level(higher=[0], edge=[3], low=[1, 2])
        values = {Column(1, 0): 1, Column(2, 0): 1}

        one = smooth_layers([level], values, LayerConfig(smoothing_cycles=1))
        # Column 2 still sees column 1 at its old value
        assert one == {Column(1, 0): 5, Column(2, 0): 1}

        two = smooth_layers([level], values, LayerConfig(smoothing_cycles=2))
        assert two == {Column(1, 0): 5, Column(2, 0): 3}

        # Input is left untouched
        assert values == {Column(1, 0): 1, Column(2, 0): 1}

    def test_up_priority_never_lowers(self):
        level = row_level(higher=[0], edge=[2], low=[1])
        values = {Column(1, 0): 7}

        result = smooth_layers([level], values, LayerConfig(smoothing_priority=SmoothingPriority.UP))

        assert result[Column(1, 0)] == 7

    def test_down_priority_lowers_next_to_edge(self):
        level = row_level(higher=[0], edge=[2], low=[1])
        values = {Column(1, 0): 7}

        config = LayerConfig(smoothing_cycles=1, smoothing_priority=SmoothingPriority.DOWN)
        result = smooth_layers([level], values, config)

        assert result[Column(1, 0)] == 4

    def test_single_contributor_is_skipped(self):
        level = row_level(higher=[0], low=[1])
        values = {Column(1, 0): 3}

        assert smooth_layers([level], values, LayerConfig())[Column(1, 0)] == 3

    def test_values_stay_in_range(self):
        level = row_level(higher=[0, 6], low=[1, 2, 3, 4, 5])
        values = {Column(x, 0): v for x, v in zip(range(1, 6), [6, 5, 4, 5, 6])}

        result = smooth_layers([level], values, LayerConfig(smoothing_cycles=20))

        assert all(1 <= v <= 7 for v in result.values())
        assert all(result[c] >= values[c] for c in values)
