"""
Edge detection over the unfiltered height field.

An edge is a column with at least one of its 8 neighbours lower by
``edge_threshold`` or more. Only the higher side of a drop is an edge.
"""

from typing import Set, Tuple

import structlog

from .height_field import Column, HeightField

logger = structlog.get_logger()

EdgeSet = Set[Tuple[Column, int]]


def identify_edges(unfiltered: HeightField, edge_threshold: int) -> EdgeSet:
    """
    Identify edge columns.

    Args:
        unfiltered: Height field with every valid surface column
        edge_threshold: Minimum height drop to a neighbour (ties count)

    Returns:
        Set of (column, elevation) pairs, one per edge column
    """
    edges: EdgeSet = set()
    positions_with_neighbors = 0
    height_differences = 0
    max_height_diff = 0

    for sample in unfiltered:
        has_lower_neighbor = False
        neighbors_checked = 0

        for neighbor in sample.column.neighbors():
            neighbor_height = unfiltered.elevation(neighbor)
            if neighbor_height is None:
                continue  # Holes are the classifier's business

            neighbors_checked += 1
            height_diff = sample.elevation - neighbor_height

            if height_diff != 0:
                height_differences += 1
                max_height_diff = max(max_height_diff, abs(height_diff))

            if height_diff >= edge_threshold:
                has_lower_neighbor = True
                break

        if neighbors_checked:
            positions_with_neighbors += 1

        if has_lower_neighbor:
            edges.add((sample.column, sample.elevation))

    logger.info(
        "Edge detection completed",
        positions=len(unfiltered),
        positions_with_neighbors=positions_with_neighbors,
        height_differences=height_differences,
        max_height_diff=max_height_diff,
        edges=len(edges),
    )
    return edges
