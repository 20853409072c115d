"""
Surface sampling: building height fields from a voxel world.
"""

from typing import Iterable, Optional, Tuple

import structlog

from .blocks import WATER, can_generate_layers_on, is_full_cube
from .height_field import Column, HeightField, HeightSample
from .world import BlockPos, VoxelWorld

logger = structlog.get_logger()


def find_surface(world: VoxelWorld, x: int, z: int) -> Optional[BlockPos]:
    """
    Find the topmost terrain voxel of a column.

    Walks down from the column top, skipping air, foliage, liquids and any
    voxel that is not a full cube (layers, slabs, plants with a half, ...).

    Returns:
        Position of the surface voxel, or None if the walk reaches the
        world floor first.
    """
    pos = BlockPos(x, world.get_top_y(x, z), z)

    while pos.y > world.bottom_y:
        if is_full_cube(world.get_block_state(pos)):
            return pos
        pos = pos.down()

    return None


def sample_column(world: VoxelWorld, x: int, z: int) -> Optional[HeightSample]:
    surface = find_surface(world, x, z)
    if surface is None:
        return None
    material = world.get_block_state(surface).block
    return HeightSample(Column(x, z), surface.y, material)


def has_adjacent_liquid(world: VoxelWorld, surface: BlockPos) -> bool:
    """Check for water in, above or next to a surface voxel."""
    surface_state = world.get_block_state(surface)
    if surface_state.block == WATER or surface_state.waterlogged:
        return True
    if world.get_block_state(surface.up()).block == WATER:
        return True

    for adjacent in surface.cardinals():
        adjacent_state = world.get_block_state(adjacent)
        if adjacent_state.block == WATER or adjacent_state.waterlogged:
            return True
        if world.get_block_state(adjacent.up()).block == WATER:
            return True

    return False


def collect_height_fields(
    world: VoxelWorld, columns: Iterable[Tuple[int, int]]
) -> Tuple[HeightField, HeightField]:
    """
    Sample every column once and build both height fields.

    Returns:
        (unfiltered, filtered): all valid surfaces, and the subset where the
        material is placeable and no liquid is adjacent.
    """
    unfiltered = HeightField()
    filtered = HeightField()
    missing = 0

    for x, z in columns:
        sample = sample_column(world, x, z)
        if sample is None:
            missing += 1
            continue

        unfiltered.add(sample)

        if not can_generate_layers_on(sample.material):
            continue
        if has_adjacent_liquid(world, BlockPos(x, sample.elevation, z)):
            continue
        filtered.add(sample)

    elevations = unfiltered.elevations()
    logger.info(
        "Surface heights collected",
        surfaces=len(unfiltered),
        valid=len(filtered),
        missing=missing,
        levels=len(elevations),
        min_y=elevations[-1] if elevations else None,
        max_y=elevations[0] if elevations else None,
    )
    return unfiltered, filtered
