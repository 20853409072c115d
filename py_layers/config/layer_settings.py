"""
Layer generation settings.

Settings are validated when the model is built, so out-of-range values never
reach the generator. The model is frozen and handed explicitly to every
pipeline stage.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class GenerationMode(str, Enum):
    """How far gradients spread and how finely they step."""

    BASIC = "basic"  # 7,6,5,4,3,2,1
    EXTENDED = "extended"  # 7,7,6,6,...,1,1
    EXTREME = "extreme"  # 7,7,7,6,6,6,...,1,1,1

    @property
    def multiplier(self) -> int:
        return {"basic": 1, "extended": 2, "extreme": 3}[self.value]


class RoundingMode(str, Enum):
    """How smoothing rounds neighbour averages."""

    UP = "up"  # more aggressive layers
    DOWN = "down"  # more conservative
    NEAREST = "nearest"


class SmoothingPriority(str, Enum):
    """Whether smoothing may lower values."""

    UP = "up"  # only ever raise values, keeps long gradients intact
    DOWN = "down"  # next to an edge, apply the smoothed value either way


class LayerConfig(BaseModel):
    """Settings for one layer generation run."""

    model_config = ConfigDict(frozen=True)

    mode: GenerationMode = Field(default=GenerationMode.BASIC, description="Gradient mode")
    max_layer_distance: int = Field(
        default=7, ge=3, le=25, description="Distance layers fade over, before the mode multiplier"
    )
    edge_threshold: int = Field(
        default=1, ge=1, le=5, description="Minimum height drop that makes an edge"
    )
    smoothing_cycles: int = Field(
        default=6, ge=0, le=20, description="Relaxation passes after spreading"
    )
    rounding_mode: RoundingMode = Field(
        default=RoundingMode.NEAREST, description="Rounding of smoothing averages"
    )
    smoothing_priority: SmoothingPriority = Field(
        default=SmoothingPriority.UP, description="Whether smoothing may lower values near edges"
    )

    @property
    def effective_max_distance(self) -> int:
        return self.max_layer_distance * self.mode.multiplier

    def describe(self) -> str:
        """One-line human readable summary."""
        fades = {
            GenerationMode.BASIC: "7→6→5→4→3→2→1",
            GenerationMode.EXTENDED: "7,7→6,6→...→1,1",
            GenerationMode.EXTREME: "7,7,7→6,6,6→...→1,1,1",
        }
        return (
            f"Mode: {self.mode.value} ({fades[self.mode]}), "
            f"Distance: {self.max_layer_distance} blocks "
            f"(effective {self.effective_max_distance}), "
            f"Edge threshold: {self.edge_threshold}, "
            f"Smoothing: {self.smoothing_cycles} cycles, "
            f"rounding {self.rounding_mode.value}, priority {self.smoothing_priority.value}"
        )
