"""
py-layers: gradient layer generation for voxel terrain.
"""

__version__ = "0.1.0"
