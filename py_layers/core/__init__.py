"""
Core layer generation functionality.
"""

from .blocks import AIR, BlockState
from .world import BlockPos, ChunkPos, VoxelWorld
from .height_field import Column, HeightField, HeightSample
from .surface import collect_height_fields, find_surface, sample_column
from .edges import identify_edges
from .classifier import LevelClassification, classify_levels, output_levels
from .gradients import gradient_for
from .spreader import spread_gradients
from .smoothing import smooth_layers
from .mappings import BlockMappingRegistry, PlantMappingRegistry

__all__ = ['AIR', 'BlockState', 'BlockPos', 'ChunkPos', 'VoxelWorld',
           'Column', 'HeightField', 'HeightSample',
           'collect_height_fields', 'find_surface', 'sample_column',
           'identify_edges', 'LevelClassification', 'classify_levels', 'output_levels',
           'gradient_for', 'spread_gradients', 'smooth_layers',
           'BlockMappingRegistry', 'PlantMappingRegistry']
