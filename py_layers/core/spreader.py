"""
Gradient spreading from higher terrain.

Every H column of a level casts a ray in each cardinal direction. The ray
walks over L columns and stops before the first column that is not L, or
when the distance cap is reached. The L columns it crossed receive the
gradient table entry for their count, highest value next to the H column.
"""

from typing import Dict, Iterable, List

import structlog

from ..config.layer_settings import LayerConfig
from .classifier import LevelClassification
from .gradients import gradient_for
from .height_field import CARDINAL_OFFSETS, Column

logger = structlog.get_logger()

LayerValues = Dict[Column, int]


def cast_ray(
    origin: Column, dx: int, dz: int, level: LevelClassification, max_distance: int
) -> List[Column]:
    """Collect the L columns a ray from ``origin`` crosses."""
    path = []
    for step in range(1, max_distance + 1):
        column = origin.offset(dx * step, dz * step)
        if column not in level.low:
            break
        path.append(column)
    return path


def merge_value(values: LayerValues, column: Column, value: int) -> bool:
    """Keep the larger of the existing and new value."""
    if value > values.get(column, 0):
        values[column] = value
        return True
    return False


def spread_level(level: LevelClassification, config: LayerConfig, values: LayerValues) -> int:
    """
    Spread gradients across one level into ``values``.

    Returns:
        Number of rays that reached at least one L column
    """
    max_distance = config.effective_max_distance
    rays = 0

    for origin in level.higher:
        for dx, dz in CARDINAL_OFFSETS:
            path = cast_ray(origin, dx, dz, level, max_distance)
            if not path:
                continue

            rays += 1
            for column, value in zip(path, gradient_for(config.mode, len(path))):
                merge_value(values, column, value)

    return rays


def spread_gradients(levels: Iterable[LevelClassification], config: LayerConfig) -> LayerValues:
    """
    Spread gradients over every given level.

    Args:
        levels: Levels allowed to produce output
        config: Generation settings

    Returns:
        Layer value per L column reached by a ray
    """
    values: LayerValues = {}
    total_rays = 0

    for level in levels:
        total_rays += spread_level(level, config, values)

    logger.info(
        "Gradients spread",
        mode=config.mode.value,
        max_distance=config.effective_max_distance,
        rays=total_rays,
        columns=len(values),
    )
    return values
