"""
Reversible layer overlay.

Placing a layer on a column writes the layer block into the voxel above the
surface. When that voxel holds a mapped plant and plant replacement is on,
the plant is snapshotted first and an overlay marker (the mapped plant at
the same layer height) is placed on top of the layer. Removal undoes exactly
that: markers are cleared and snapshotted plants restored.
"""

from dataclasses import dataclass
from typing import Optional

import structlog

from ..db.snapshots import SimpleSnapshot, SnapshotStore, TallSnapshot
from .blocks import AIR, LOWER, UPPER, BlockState, is_layer_block, is_replaceable, is_tall_plant
from .height_field import HeightField
from .mappings import BlockMappingRegistry, PlantMappingRegistry
from .spreader import LayerValues
from .world import BlockPos, VoxelWorld

logger = structlog.get_logger()


@dataclass
class PlacementResult:
    blocks_generated: int = 0
    plants_replaced: int = 0
    skipped_overlaid: int = 0
    skipped_out_of_range: int = 0


@dataclass
class RemovalResult:
    blocks_removed: int = 0
    plants_restored: int = 0


class LayerPlacer:
    """Writes and removes layer overlays in a world."""

    def __init__(
        self,
        world: VoxelWorld,
        store: SnapshotStore,
        block_mapping: BlockMappingRegistry,
        plant_mapping: PlantMappingRegistry,
    ):
        self.world = world
        self.store = store
        self.block_mapping = block_mapping
        self.plant_mapping = plant_mapping

    def is_already_overlaid(self, layer_pos: BlockPos) -> bool:
        """A snapshot exists for the voxel, or a marker already stands in it."""
        if self.plant_mapping.is_overlay_marker(self.world.get_block_state(layer_pos).block):
            return True
        return self.store.contains(layer_pos)

    def place_all(
        self, layer_values: LayerValues, filtered: HeightField, replace_plants: bool
    ) -> PlacementResult:
        """
        Place a layer on every column with a value.

        Args:
            layer_values: Final layer value per column
            filtered: Placement-eligible height field (surface material)
            replace_plants: Swap mapped plants for overlay markers
        """
        result = PlacementResult()

        for column, layer_count in layer_values.items():
            sample = filtered.get(column)
            if sample is None or layer_count <= 0:
                continue

            layer_block = self.block_mapping.get_layer_block(sample.material, layer_count)
            layer_pos = BlockPos(column.x, sample.elevation + 1, column.z)
            layer_state = BlockState(layer_block).with_layers(layer_count)

            if not self.world.is_within_height(layer_pos.y):
                result.skipped_out_of_range += 1
                continue

            if self.is_already_overlaid(layer_pos):
                result.skipped_overlaid += 1
                continue

            existing = self.world.get_block_state(layer_pos)

            if (
                replace_plants
                and not existing.is_air
                and self.plant_mapping.is_replaceable_plant(existing.block)
            ):
                if self._overlay_plant(layer_pos, existing, layer_state):
                    result.blocks_generated += 1
                    result.plants_replaced += 1
                continue

            if existing.is_air or is_replaceable(existing):
                self.world.set_block_state(layer_pos, layer_state)
                result.blocks_generated += 1

        if result.plants_replaced:
            logger.info("Replaced plants with overlay markers", count=result.plants_replaced)

        return result

    def _overlay_plant(self, layer_pos: BlockPos, plant: BlockState, layer_state: BlockState) -> bool:
        plant_pos = layer_pos.up()
        tall = is_tall_plant(plant.block)

        # No room above the layer for a marker at the top of the world
        if not self.world.is_within_height(plant_pos.y):
            return False

        if tall:
            upper = self.world.get_block_state(plant_pos)
            snapshot = TallSnapshot(lower=plant.block, upper=upper.block)
        else:
            snapshot = SimpleSnapshot(block=plant.block)

        if not self.store.insert_if_absent(layer_pos, snapshot):
            return False

        self.world.set_block_state(layer_pos, layer_state)
        if tall:
            self.world.set_block_state(plant_pos, AIR)

        marker = self.plant_mapping.get_overlay_marker(plant.block)
        if marker is None:
            return True

        marker_state = BlockState(marker).with_layers(layer_state.layers)
        if tall and is_tall_plant(marker):
            self.world.set_block_state(plant_pos, marker_state.with_half(LOWER))
            upper_pos = plant_pos.up()
            if self.world.is_within_height(upper_pos.y) and self.world.get_block_state(upper_pos).is_air:
                self.world.set_block_state(upper_pos, marker_state.with_half(UPPER))
        elif self.world.get_block_state(plant_pos).is_air:
            self.world.set_block_state(plant_pos, marker_state)

        return True

    def remove_at(self, surface: BlockPos, restore_plants: bool) -> Optional[RemovalResult]:
        """
        Remove the layer above a surface voxel, if there is one.

        Returns:
            What was removed, or None when the voxel holds no layer block
        """
        layer_pos = surface.up()
        if not is_layer_block(self.world.get_block_state(layer_pos).block):
            return None

        plant_pos = layer_pos.up()
        plant_state = self.world.get_block_state(plant_pos)
        marker = None
        if self.plant_mapping.is_overlay_marker(plant_state.block):
            marker = plant_state.block
            if is_tall_plant(marker) and plant_state.half != UPPER:
                upper_pos = plant_pos.up()
                if self.world.get_block_state(upper_pos).block == marker:
                    self.world.set_block_state(upper_pos, AIR)
            self.world.set_block_state(plant_pos, AIR)

        snapshot = self.store.delete(layer_pos)

        if restore_plants and snapshot is None and marker is not None:
            # Marker without a snapshot: fall back to the reverse mapping
            original = self.plant_mapping.get_original_plant(marker)
            if is_tall_plant(original):
                snapshot = TallSnapshot(lower=original, upper=original)
            else:
                snapshot = SimpleSnapshot(block=original)

        if restore_plants and isinstance(snapshot, TallSnapshot):
            self.world.set_block_state(layer_pos, BlockState(snapshot.lower, half=LOWER))
            self.world.set_block_state(plant_pos, BlockState(snapshot.upper, half=UPPER))
            return RemovalResult(blocks_removed=1, plants_restored=1)

        if restore_plants and isinstance(snapshot, SimpleSnapshot):
            self.world.set_block_state(layer_pos, BlockState(snapshot.block))
            return RemovalResult(blocks_removed=1, plants_restored=1)

        self.world.set_block_state(layer_pos, AIR)
        return RemovalResult(blocks_removed=1)
