"""
Tests for block predicates and surface sampling.
"""

import pytest

from py_layers.core.blocks import (
    AIR, BlockState, LOWER, UPPER, can_generate_layers_on, is_full_cube, is_layer_block, is_replaceable,
)
from py_layers.core.height_field import Column
from py_layers.core.surface import collect_height_fields, find_surface, has_adjacent_liquid, sample_column
from py_layers.core.world import BlockPos, ChunkPos, VoxelWorld


class TestBlockPredicates:
    """Test block classification helpers."""

    @pytest.mark.parametrize("state,expected", [
        (BlockState("minecraft:stone"), True),
        (BlockState("minecraft:grass_block"), True),
        (AIR, False),
        (BlockState("minecraft:water"), False),
        (BlockState("minecraft:oak_leaves"), False),
        (BlockState("minecraft:poppy"), False),
        (BlockState("minecraft:stone_slab"), False),
        (BlockState("minecraft:oak_stairs"), False),
        (BlockState("conquest:grass_block_layer", layers=3), False),
        (BlockState("conquest:grass", layers=3), False),
        (BlockState("minecraft:tall_grass", half=LOWER), False),
    ])
    def test_is_full_cube(self, state, expected):
        assert is_full_cube(state) == expected

    def test_layer_blocks(self):
        assert is_layer_block("minecraft:snow")
        assert is_layer_block("conquest:sand_layer")
        assert is_layer_block("conquest:limestone_slab")
        assert not is_layer_block("minecraft:grass_block")

    def test_replaceable(self):
        assert is_replaceable(AIR)
        assert is_replaceable(BlockState("minecraft:short_grass"))
        assert is_replaceable(BlockState("minecraft:snow", layers=1))
        assert not is_replaceable(BlockState("minecraft:snow", layers=4))
        assert not is_replaceable(BlockState("minecraft:stone"))

    def test_placeable_materials(self):
        assert can_generate_layers_on("minecraft:grass_block")
        assert can_generate_layers_on("minecraft:sand")
        assert not can_generate_layers_on("minecraft:oak_planks")

    def test_with_layers_is_clamped(self):
        assert BlockState("minecraft:snow").with_layers(12).layers == 8
        assert BlockState("minecraft:snow").with_layers(0).layers == 1


class TestVoxelWorld:
    """Test the in-memory world."""

    def test_writing_loads_chunk(self):
        world = VoxelWorld()
        world.set_block_state(BlockPos(17, 4, -1), BlockState("minecraft:stone"))

        assert world.is_chunk_loaded(ChunkPos(1, -1))
        assert not world.is_chunk_loaded(ChunkPos(0, 0))

    def test_air_is_not_stored(self):
        world = VoxelWorld()
        pos = BlockPos(0, 4, 0)
        world.set_block_state(pos, BlockState("minecraft:stone"))
        world.set_block_state(pos, AIR)

        assert world.get_block_state(pos) == AIR
        assert world.blocks() == {}
        assert world.get_top_y(0, 0) == world.bottom_y

    def test_out_of_range(self):
        world = VoxelWorld(bottom_y=0, height=16)
        with pytest.raises(ValueError):
            world.set_block_state(BlockPos(0, 16, 0), BlockState("minecraft:stone"))

    def test_from_heights(self):
        world = VoxelWorld.from_heights({(0, 0): 3})

        assert world.get_block_state(BlockPos(0, 3, 0)).block == "minecraft:grass_block"
        assert world.get_block_state(BlockPos(0, 0, 0)).block == "minecraft:dirt"
        assert world.get_top_y(0, 0) == 4


class TestSurfaceSampling:
    """Test surface detection."""

    @pytest.fixture
    def world(self):
        return VoxelWorld.from_heights({(x, z): 5 for x in range(4) for z in range(4)})

    def test_find_surface(self, world):
        assert find_surface(world, 1, 1) == BlockPos(1, 5, 1)

    def test_skips_plants_and_layers(self, world):
        world.set_block_state(BlockPos(1, 6, 1), BlockState("conquest:grass_block_layer", layers=4))
        world.set_block_state(BlockPos(1, 7, 1), BlockState("conquest:grass", layers=4))
        world.set_block_state(BlockPos(2, 6, 2), BlockState("minecraft:tall_grass", half=LOWER))
        world.set_block_state(BlockPos(2, 7, 2), BlockState("minecraft:tall_grass", half=UPPER))

        assert find_surface(world, 1, 1) == BlockPos(1, 5, 1)
        assert find_surface(world, 2, 2) == BlockPos(2, 5, 2)

    def test_empty_column(self, world):
        assert find_surface(world, 10, 10) is None
        assert sample_column(world, 10, 10) is None

    def test_sample_column(self, world):
        sample = sample_column(world, 0, 0)
        assert sample.column == Column(0, 0)
        assert sample.elevation == 5
        assert sample.material == "minecraft:grass_block"

    def test_adjacent_water(self, world):
        surface = BlockPos(1, 5, 1)
        assert not has_adjacent_liquid(world, surface)

        world.set_block_state(BlockPos(2, 5, 1), BlockState("minecraft:water"))
        assert has_adjacent_liquid(world, surface)

    def test_water_above_neighbor(self, world):
        world.set_block_state(BlockPos(1, 6, 2), BlockState("minecraft:water"))
        assert has_adjacent_liquid(world, BlockPos(1, 5, 1))

    def test_waterlogged_surface(self, world):
        world.set_block_state(BlockPos(1, 5, 1), BlockState("minecraft:grass_block", waterlogged=True))
        assert has_adjacent_liquid(world, BlockPos(1, 5, 1))


class TestCollectHeightFields:
    """Test building both height fields."""

    def test_filtered_is_subset(self):
        world = VoxelWorld.from_heights({(x, 0): 5 for x in range(4)})
        world.set_block_state(BlockPos(0, 5, 0), BlockState("minecraft:oak_planks"))
        world.set_block_state(BlockPos(3, 6, 0), BlockState("minecraft:water"))

        unfiltered, filtered = collect_height_fields(world, [(x, 0) for x in range(5)])

        assert len(unfiltered) == 4
        assert Column(0, 0) in unfiltered and Column(0, 0) not in filtered
        # Water sits above (3, 0); (2, 0) is next to water above a neighbour
        assert Column(3, 0) not in filtered
        assert Column(2, 0) not in filtered
        assert filtered.columns() == {Column(1, 0)}
        assert filtered.is_subset_of(unfiltered)
