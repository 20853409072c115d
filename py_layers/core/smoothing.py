"""
Relaxation of spread layer values.

Each pass recomputes every L column from its four cardinal neighbours:
H counts as 8, E as 0, and an L neighbour with a value as that value. The
new values of a pass are computed from the previous pass only and applied
together at the end.
"""

import math
from typing import Dict, Iterable, List, Optional, Tuple

import structlog

from ..config.layer_settings import LayerConfig, RoundingMode, SmoothingPriority
from .classifier import LevelClassification
from .gradients import MAX_LAYER, MIN_LAYER
from .height_field import Column
from .spreader import LayerValues

logger = structlog.get_logger()

HIGHER_CONTRIBUTION = MAX_LAYER + 1
EDGE_CONTRIBUTION = 0
MIN_CONTRIBUTORS = 2


def round_average(average: float, rounding_mode: RoundingMode) -> int:
    if rounding_mode == RoundingMode.UP:
        return math.ceil(average)
    if rounding_mode == RoundingMode.DOWN:
        return math.floor(average)
    # Half rounds up
    return math.floor(average + 0.5)


def neighbor_contributions(
    column: Column, level: LevelClassification, values: LayerValues
) -> Tuple[List[int], bool]:
    """
    Collect the values the cardinal neighbours contribute.

    Returns:
        (contributions, has_edge_neighbor)
    """
    contributions = []
    has_edge_neighbor = False

    for neighbor in column.cardinals():
        if neighbor in level.higher:
            contributions.append(HIGHER_CONTRIBUTION)
        elif neighbor in level.edge:
            contributions.append(EDGE_CONTRIBUTION)
            has_edge_neighbor = True
        elif neighbor in level.low and neighbor in values:
            contributions.append(values[neighbor])

    return contributions, has_edge_neighbor


def smoothed_value(contributions: List[int], rounding_mode: RoundingMode) -> Optional[int]:
    """Rounded, clamped average kept strictly below the highest neighbour."""
    if len(contributions) < MIN_CONTRIBUTORS:
        return None

    value = round_average(sum(contributions) / len(contributions), rounding_mode)
    value = max(MIN_LAYER, min(MAX_LAYER, value))

    highest = max(contributions)
    if value >= highest:
        value = max(MIN_LAYER, highest - 1)
    return value


def smooth_pass(
    level: LevelClassification, values: LayerValues, config: LayerConfig
) -> Dict[Column, int]:
    """Compute one pass of updates for a level without applying them."""
    updates = {}

    for column in level.low:
        contributions, has_edge_neighbor = neighbor_contributions(column, level, values)
        value = smoothed_value(contributions, config.rounding_mode)
        if value is None:
            continue

        current = values.get(column, 0)
        if value > current:
            updates[column] = value
        elif (
            config.smoothing_priority == SmoothingPriority.DOWN
            and has_edge_neighbor
            and value != current
        ):
            updates[column] = value

    return updates


def smooth_layers(
    levels: Iterable[LevelClassification], values: LayerValues, config: LayerConfig
) -> LayerValues:
    """
    Run ``config.smoothing_cycles`` relaxation passes.

    Args:
        levels: Levels allowed to produce output
        values: Layer values from spreading (left untouched)
        config: Generation settings

    Returns:
        New layer value map
    """
    smoothed = dict(values)
    levels = list(levels)
    changed = 0

    for cycle in range(config.smoothing_cycles):
        updates: Dict[Column, int] = {}
        for level in levels:
            updates.update(smooth_pass(level, smoothed, config))

        if not updates:
            logger.debug("Smoothing settled", cycle=cycle)
            break

        smoothed.update(updates)
        changed += len(updates)

    logger.info(
        "Smoothing completed",
        cycles=config.smoothing_cycles,
        rounding=config.rounding_mode.value,
        priority=config.smoothing_priority.value,
        updates=changed,
    )
    return smoothed
