"""
Shared fixtures for layer generation tests.
"""

import pytest

from py_layers.core.world import VoxelWorld
from py_layers.db.connection import Database
from py_layers.db.snapshots import SnapshotStore


def plateau_heights(width=16, depth=16, high=(0, 1), low=(14, 15)):
    """
    Three-step terrain: a ridge at y=12, a shelf at y=11 and a trench at y=10.

    ``high`` and ``low`` are inclusive x ranges; everything between is the
    shelf.
    """
    heights = {}
    for x in range(width):
        for z in range(depth):
            if high[0] <= x <= high[1]:
                heights[(x, z)] = 12
            elif low[0] <= x <= low[1]:
                heights[(x, z)] = 10
            else:
                heights[(x, z)] = 11
    return heights


@pytest.fixture
def database():
    """In-memory SQLite database."""
    database = Database()
    database.initialize("sqlite://")
    return database


@pytest.fixture
def store(database):
    return SnapshotStore(database, world_id="test")


@pytest.fixture
def plateau_world():
    """Chunk (0, 0): ridge at x 0..1, shelf at x 2..13, trench at x 14..15."""
    return VoxelWorld.from_heights(plateau_heights())


@pytest.fixture
def make_plateau():
    """Factory for plateau height maps with custom extents."""
    return plateau_heights
