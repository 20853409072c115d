"""
Per-elevation classification of surface columns.

Elevations are visited from the highest down. At each level every column
involved is exactly one of:

- HIGHER (H): a column that was an edge of the level processed just before
  (so its surface stands above this level). Gradients are spread from here.
- EDGE (E): a column at this level that is an edge, or that borders a column
  with no surface at all (a hole or the border of the sampled area).
- LOW (L): any other placeable column at this level. Gradients land here.

The only state carried from one level to the next is the previous level's
E-set, which makes the pass a fold over the sorted elevations.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Set

import structlog

from .edges import EdgeSet
from .height_field import Column, HeightField

logger = structlog.get_logger()

HIGHER = "H"
EDGE = "E"
LOW = "L"


@dataclass
class LevelClassification:
    """H/E/L sets for a single elevation."""

    elevation: int
    higher: Set[Column] = field(default_factory=set)
    edge: Set[Column] = field(default_factory=set)
    low: Set[Column] = field(default_factory=set)

    def classify(self, column: Column) -> Optional[str]:
        if column in self.higher:
            return HIGHER
        if column in self.edge:
            return EDGE
        if column in self.low:
            return LOW
        return None

    @property
    def is_empty(self) -> bool:
        return not (self.higher or self.edge or self.low)


def _is_hole_adjacent(column: Column, unfiltered: HeightField) -> bool:
    return any(neighbor not in unfiltered for neighbor in column.neighbors())


def classify_level(
    elevation: int,
    previous_edges: Set[Column],
    unfiltered: HeightField,
    filtered: HeightField,
    edges: EdgeSet,
    level_columns: Set[Column],
) -> LevelClassification:
    """
    Classify one elevation.

    Args:
        elevation: The level being classified
        previous_edges: E-set of the level processed just above
        unfiltered: Full height field (geometry)
        filtered: Placement-eligible height field
        edges: Edge detector output
        level_columns: Unfiltered columns whose surface is at ``elevation``
    """
    level = LevelClassification(elevation)

    # H is resolved first and wins over both E rules
    for column in previous_edges:
        column_height = unfiltered.elevation(column)
        if column_height is not None and column_height >= elevation:
            level.higher.add(column)

    for column in level_columns:
        if column in level.higher:
            continue
        if (column, elevation) in edges or _is_hole_adjacent(column, unfiltered):
            level.edge.add(column)
        elif column in filtered:
            level.low.add(column)

    return level


def classify_levels(
    unfiltered: HeightField, filtered: HeightField, edges: EdgeSet
) -> List[LevelClassification]:
    """
    Classify every elevation of the unfiltered field, highest first.

    Returns:
        One LevelClassification per distinct elevation, in descending order
    """
    columns_by_elevation = unfiltered.by_elevation()
    levels: List[LevelClassification] = []
    previous_edges: Set[Column] = set()

    for elevation in sorted(columns_by_elevation, reverse=True):
        level = classify_level(
            elevation,
            previous_edges,
            unfiltered,
            filtered,
            edges,
            columns_by_elevation[elevation],
        )
        levels.append(level)
        previous_edges = level.edge

        logger.debug(
            "Level classified",
            y=elevation,
            higher=len(level.higher),
            edge=len(level.edge),
            low=len(level.low),
        )

    return levels


def output_levels(levels: List[LevelClassification]) -> List[LevelClassification]:
    """
    Levels that may produce layers.

    The highest level has nothing above to spread from and the lowest has no
    floor below it, so both are classified but never written.
    """
    return levels[1:-1]
