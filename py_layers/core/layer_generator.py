"""
Layer generation pipeline.

Runs edge detection, level classification, gradient spreading and smoothing
over a region of a voxel world, then overlays the resulting layers. The
pipeline itself (``calculate_layer_values``) only sees two height fields and
a LayerConfig, so it can be run and inspected without a world.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple

import structlog

from ..config.layer_settings import LayerConfig
from ..db.snapshots import SnapshotStore
from .classifier import LevelClassification, classify_levels, output_levels
from .debug_export import DebugReport
from .edges import EdgeSet, identify_edges
from .height_field import Column, HeightField
from .mappings import BlockMappingRegistry, PlantMappingRegistry
from .overlay import LayerPlacer, RemovalResult
from .smoothing import smooth_layers
from .spreader import LayerValues, spread_gradients
from .surface import collect_height_fields, find_surface
from .world import ChunkPos, VoxelWorld

logger = structlog.get_logger()


@dataclass
class LayerCalculation:
    """Everything computed for a region before anything is written."""

    edges: EdgeSet = field(default_factory=set)
    levels: List[LevelClassification] = field(default_factory=list)
    spread_values: LayerValues = field(default_factory=dict)
    layer_values: LayerValues = field(default_factory=dict)


@dataclass
class GenerationResult:
    blocks_generated: int = 0
    plants_replaced: int = 0
    chunks_processed: int = 0
    duration_ms: int = 0


def calculate_layer_values(
    unfiltered: HeightField,
    filtered: HeightField,
    config: LayerConfig,
    target: Optional[Set[Column]] = None,
) -> LayerCalculation:
    """
    Compute layer values from two height fields.

    Args:
        unfiltered: Every column with a valid surface (geometry)
        filtered: Columns eligible for placement
        config: Generation settings
        target: If given, only these columns keep a layer value

    Returns:
        LayerCalculation with the edge set, every level classification,
        spread values and final (smoothed) values
    """
    calculation = LayerCalculation()
    if not unfiltered:
        return calculation

    calculation.edges = identify_edges(unfiltered, config.edge_threshold)
    if not calculation.edges:
        logger.warning("No edges found")
        return calculation

    calculation.levels = classify_levels(unfiltered, filtered, calculation.edges)
    active = output_levels(calculation.levels)

    calculation.spread_values = spread_gradients(active, config)
    values = smooth_layers(active, calculation.spread_values, config)

    if target is not None:
        values = {c: v for c, v in values.items() if c in target}
    calculation.layer_values = values

    logger.info(
        "Layer values calculated",
        levels=len(calculation.levels),
        output_levels=len(active),
        positions=len(values),
    )
    return calculation


def _chunk_columns(chunks: Iterable[ChunkPos]) -> List[Tuple[int, int]]:
    return [column for chunk in chunks for column in chunk.columns()]


class LayerGenerator:
    """Generates and removes layers in a voxel world."""

    def __init__(
        self,
        world: VoxelWorld,
        store: SnapshotStore,
        config: LayerConfig,
        block_mapping: Optional[BlockMappingRegistry] = None,
        plant_mapping: Optional[PlantMappingRegistry] = None,
    ):
        self.world = world
        self.store = store
        self.config = config
        self.placer = LayerPlacer(
            world,
            store,
            block_mapping or BlockMappingRegistry(),
            plant_mapping or PlantMappingRegistry(),
        )

    def loaded_chunks_around(self, x: int, z: int, chunk_radius: int) -> Set[ChunkPos]:
        center = ChunkPos.containing(x, z)
        chunks = set()
        for dx in range(-chunk_radius, chunk_radius + 1):
            for dz in range(-chunk_radius, chunk_radius + 1):
                chunk = ChunkPos(center.x + dx, center.z + dz)
                if self.world.is_chunk_loaded(chunk):
                    chunks.add(chunk)
        return chunks

    def generate_layers(self, x: int, z: int, chunk_radius: int, replace_plants: bool = False) -> GenerationResult:
        """
        Generate layers over every loaded chunk within ``chunk_radius``.

        Args:
            x, z: Center column
            chunk_radius: Radius in chunks around the center's chunk
            replace_plants: Swap mapped plants for overlay markers
        """
        logger.info(
            "Starting layer generation",
            mode=self.config.mode.value,
            max_distance=self.config.max_layer_distance,
            chunk_radius=chunk_radius,
        )
        chunks = self.loaded_chunks_around(x, z, chunk_radius)
        logger.info("Processing loaded chunks", count=len(chunks))

        return self._run(chunks, chunks, replace_plants)

    def process_chunk(self, chunk: ChunkPos, replace_plants: bool = False) -> GenerationResult:
        """
        Generate layers for a single chunk.

        Neighbouring loaded chunks contribute geometry so edges on the chunk
        border are seen correctly, but only the chunk itself is written.
        """
        if not self.world.is_chunk_loaded(chunk):
            return GenerationResult()

        analysed = {chunk} | {n for n in chunk.neighbors() if self.world.is_chunk_loaded(n)}
        return self._run(analysed, {chunk}, replace_plants)

    def _run(self, analysed: Set[ChunkPos], targets: Set[ChunkPos], replace_plants: bool) -> GenerationResult:
        result = GenerationResult(chunks_processed=len(targets))
        if not targets:
            return result

        start = time.perf_counter()

        unfiltered, filtered = collect_height_fields(self.world, _chunk_columns(analysed))
        if not filtered:
            return result

        target_columns = None
        if targets != analysed:
            target_columns = {Column(x, z) for x, z in _chunk_columns(targets)}

        calculation = calculate_layer_values(unfiltered, filtered, self.config, target_columns)
        placement = self.placer.place_all(calculation.layer_values, filtered, replace_plants)

        result.blocks_generated = placement.blocks_generated
        result.plants_replaced = placement.plants_replaced
        result.duration_ms = int((time.perf_counter() - start) * 1000)

        logger.info(
            "Generation complete",
            blocks=result.blocks_generated,
            plants_replaced=result.plants_replaced,
            skipped_overlaid=placement.skipped_overlaid,
            skipped_out_of_range=placement.skipped_out_of_range,
            duration_ms=result.duration_ms,
        )
        return result

    def remove_layers(self, x: int, z: int, chunk_radius: int, restore_plants: bool = False) -> RemovalResult:
        """Remove layer blocks within ``chunk_radius`` chunks of (x, z)."""
        total = RemovalResult()

        for chunk in self.loaded_chunks_around(x, z, chunk_radius):
            for column_x, column_z in chunk.columns():
                surface = find_surface(self.world, column_x, column_z)
                if surface is None:
                    continue

                removed = self.placer.remove_at(surface, restore_plants)
                if removed is not None:
                    total.blocks_removed += removed.blocks_removed
                    total.plants_restored += removed.plants_restored

        if total.plants_restored:
            logger.info("Restored plants", count=total.plants_restored)
        logger.info("Removed layer blocks", count=total.blocks_removed)
        return total

    def debug_export(self, x: int, z: int, radius: int, output_path: Optional[Path] = None) -> DebugReport:
        """
        Build a diagnostic report for a square of ``radius`` around (x, z).

        The report compares layers currently in the world with what a fresh
        calculation would place. If ``output_path`` is given the rendered
        report is written there.
        """
        min_x, max_x = x - radius, x + radius
        min_z, max_z = z - radius, z + radius
        columns = [(cx, cz) for cx in range(min_x, max_x + 1) for cz in range(min_z, max_z + 1)]

        unfiltered, filtered = collect_height_fields(self.world, columns)
        calculation = calculate_layer_values(unfiltered, filtered, self.config)

        report = DebugReport.collect(
            world=self.world,
            bounds=(min_x, min_z, max_x, max_z),
            config=self.config,
            unfiltered=unfiltered,
            filtered=filtered,
            edges=calculation.edges,
            levels=calculation.levels,
            calculated=calculation.layer_values,
        )

        text = report.render()
        logger.info("Debug export", report="\n" + text)

        if output_path is not None:
            output_path = Path(output_path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(text)
            logger.info("Debug export written", path=str(output_path))

        return report
