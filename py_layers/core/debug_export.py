"""
Debug report for layer generation.

Lays the intermediate results of a run out on a grid so they can be compared
with what is actually in the world: surface heights with edges marked, the
layers currently placed, the layers a fresh run would place and the H/E/L
classification of every elevation.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Tuple

import numpy as np

from ..config.layer_settings import LayerConfig
from .blocks import is_layer_block
from .classifier import EDGE, HIGHER, LOW, LevelClassification
from .edges import EdgeSet
from .height_field import Column, HeightField
from .world import BlockPos, VoxelWorld

DEBUG_FILENAME = "layers_debug.txt"

NO_SURFACE = -1
NO_LAYER = 0


@dataclass
class DebugReport:
    """Grids over ``bounds`` indexed ``[z - min_z, x - min_x]``."""

    bounds: Tuple[int, int, int, int]
    config: LayerConfig
    heights: np.ndarray
    edge_mask: np.ndarray
    actual: np.ndarray
    calculated: np.ndarray
    levels: List[LevelClassification] = field(default_factory=list)

    @property
    def shape(self) -> Tuple[int, int]:
        min_x, min_z, max_x, max_z = self.bounds
        return (max_z - min_z + 1, max_x - min_x + 1)

    def index(self, x: int, z: int) -> Tuple[int, int]:
        min_x, min_z, _, _ = self.bounds
        return (z - min_z, x - min_x)

    @classmethod
    def collect(
        cls,
        world: VoxelWorld,
        bounds: Tuple[int, int, int, int],
        config: LayerConfig,
        unfiltered: HeightField,
        filtered: HeightField,
        edges: EdgeSet,
        levels: List[LevelClassification],
        calculated: Dict[Column, int],
    ) -> "DebugReport":
        min_x, min_z, max_x, max_z = bounds
        shape = (max_z - min_z + 1, max_x - min_x + 1)

        heights = np.full(shape, NO_SURFACE, dtype=np.int32)
        edge_mask = np.zeros(shape, dtype=bool)
        actual = np.full(shape, NO_SURFACE, dtype=np.int32)
        calc = np.full(shape, NO_SURFACE, dtype=np.int32)

        for sample in filtered:
            column = sample.column
            if not (min_x <= column.x <= max_x and min_z <= column.z <= max_z):
                continue
            idx = (column.z - min_z, column.x - min_x)

            heights[idx] = sample.elevation
            edge_mask[idx] = (column, unfiltered.elevation(column)) in edges

            above = world.get_block_state(BlockPos(column.x, sample.elevation + 1, column.z))
            if is_layer_block(above.block):
                actual[idx] = above.layers if above.layers is not None else 1
            else:
                actual[idx] = NO_LAYER

            calc[idx] = calculated.get(column, NO_LAYER)

        return cls(
            bounds=bounds,
            config=config,
            heights=heights,
            edge_mask=edge_mask,
            actual=actual,
            calculated=calc,
            levels=list(levels),
        )

    def classification_grid(self, level: LevelClassification) -> np.ndarray:
        """Single-character grid: H, E, L or '.' for columns outside the level."""
        grid = np.full(self.shape, ".", dtype="<U1")
        min_x, min_z, max_x, max_z = self.bounds
        for label, columns in ((HIGHER, level.higher), (EDGE, level.edge), (LOW, level.low)):
            for column in columns:
                if min_x <= column.x <= max_x and min_z <= column.z <= max_z:
                    grid[self.index(column.x, column.z)] = label
        return grid

    def build_matrix(self, title: str, cell: Callable[[int, int], str]) -> str:
        """
        Render one titled matrix.

        Args:
            title: Matrix heading
            cell: Called with grid indices (row, col), returns the cell text

        Returns:
            X coordinates as the header row, one row per Z
        """
        min_x, min_z, max_x, max_z = self.bounds
        lines = [f"=== {title} ==="]
        lines.append("     " + "".join(f"{x:4d}" for x in range(min_x, max_x + 1)))
        for row, z in enumerate(range(min_z, max_z + 1)):
            cells = "".join(cell(row, col) for col in range(max_x - min_x + 1))
            lines.append(f"{z:4d} {cells}")
        return "\n".join(lines) + "\n"

    def _layer_cell(self, grid: np.ndarray) -> Callable[[int, int], str]:
        def cell(row: int, col: int) -> str:
            if self.heights[row, col] == NO_SURFACE:
                return " --"
            if self.edge_mask[row, col]:
                return " E "
            return f" {grid[row, col]} "

        return cell

    def _height_cell(self, row: int, col: int) -> str:
        height = self.heights[row, col]
        if height == NO_SURFACE:
            return "  --"
        if self.edge_mask[row, col]:
            return f"[{height:2d}]"
        return f" {height:2d} "

    def render(self) -> str:
        min_x, min_z, max_x, max_z = self.bounds
        center_x = (min_x + max_x) // 2
        center_z = (min_z + max_z) // 2

        parts = [
            f"Debug Export - Center: ({center_x}, {center_z}), Radius: {(max_x - min_x) // 2} blocks\n"
            f"Area: X={min_x} to {max_x}, Z={min_z} to {max_z}\n"
            f"{self.config.describe()}\n",
            self.build_matrix("Y-LEVELS (Surface Height)", self._height_cell),
            self.build_matrix("ACTUAL LAYERS IN WORLD (0=no layers, E=edge)", self._layer_cell(self.actual)),
            self.build_matrix(
                "CALCULATED LAYER VALUES (what would be placed)", self._layer_cell(self.calculated)
            ),
        ]

        for level in self.levels:
            grid = self.classification_grid(level)
            parts.append(
                self.build_matrix(
                    f"LEVEL Y={level.elevation} "
                    f"(H={len(level.higher)}, E={len(level.edge)}, L={len(level.low)})",
                    lambda row, col, grid=grid: f" {grid[row, col]} ",
                )
            )

        return "\n".join(parts)

    def summary(self) -> List[Dict[str, int]]:
        """Per-elevation classification counts."""
        return [
            {
                "elevation": level.elevation,
                "higher": len(level.higher),
                "edge": len(level.edge),
                "low": len(level.low),
            }
            for level in self.levels
        ]
