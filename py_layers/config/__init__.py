"""
Configuration modules for layer generation.
"""

from .config import Settings, settings
from .layer_settings import GenerationMode, LayerConfig, RoundingMode, SmoothingPriority

__all__ = [
    "Settings",
    "settings",
    "GenerationMode",
    "LayerConfig",
    "RoundingMode",
    "SmoothingPriority",
]
