"""
Block and plant mapping registries.

The block registry maps a surface material to the layer block placed on top
of it. The plant registry maps vanilla plants to the overlay markers that
replace them on top of a layer, and back.
"""

from typing import Dict, Optional

import structlog

from .blocks import SNOW, is_valid_identifier

logger = structlog.get_logger()

DEFAULT_LAYER_MAPPINGS = {
    "minecraft:grass_block": "conquest:grass_block_layer",
    "minecraft:dirt": "conquest:loamy_dirt_slab",
    "minecraft:coarse_dirt": "conquest:dirt_path_layer",
    "minecraft:podzol": "conquest:vibrant_autumnal_forest_floor_layer",
    "minecraft:stone": "conquest:limestone_slab",
    "minecraft:cobblestone": "conquest:limestone_cobble_slab",
    "minecraft:mossy_cobblestone": "conquest:mossy_limestone_cobble_slab",
    "minecraft:andesite": "conquest:andesite_slab",
    "minecraft:diorite": "conquest:diorite_slab",
    "minecraft:granite": "conquest:granite_slab",
    "minecraft:sand": "conquest:sand_layer",
    "minecraft:red_sand": "conquest:red_sand_layer",
    "minecraft:gravel": "conquest:gravel_layer",
    "minecraft:mycelium": "conquest:mycelium_layer",
}

DEFAULT_PLANT_MAPPINGS = {
    "minecraft:short_grass": "conquest:grass",
    "minecraft:tall_grass": "conquest:tall_grass",
    "minecraft:fern": "conquest:fern",
    "minecraft:large_fern": "conquest:large_fern",
    "minecraft:dandelion": "conquest:dandelion",
    "minecraft:poppy": "conquest:poppy",
    "minecraft:blue_orchid": "conquest:blue_orchid",
    "minecraft:allium": "conquest:allium",
    "minecraft:azure_bluet": "conquest:azure_bluet",
    "minecraft:red_tulip": "conquest:red_tulip",
    "minecraft:orange_tulip": "conquest:orange_tulip",
    "minecraft:white_tulip": "conquest:white_tulip",
    "minecraft:pink_tulip": "conquest:pink_tulip",
    "minecraft:oxeye_daisy": "conquest:oxeye_daisy",
    "minecraft:cornflower": "conquest:cornflower",
    "minecraft:lily_of_the_valley": "conquest:lily_of_the_valley",
    "minecraft:dead_bush": "conquest:dead_bush",
    "minecraft:sunflower": "conquest:sunflower",
    "minecraft:lilac": "conquest:lilac",
    "minecraft:rose_bush": "conquest:rose_bush",
    "minecraft:peony": "conquest:peony",
}


class BlockMappingRegistry:
    """Surface material -> layer block."""

    def __init__(self, fallback: str = SNOW):
        self.fallback = fallback
        self._block_to_layer: Dict[str, str] = dict(DEFAULT_LAYER_MAPPINGS)
        logger.info("Registered block-to-layer mappings", count=len(self._block_to_layer))

    def get_layer_block(self, material: str, layer_count: int) -> str:
        """
        Layer block for a surface material.

        Args:
            material: Surface block id
            layer_count: Layer value to be placed; every mapped block carries
                its count as a state property, so the id does not depend on it

        Returns:
            The mapped layer block id, or the fallback (snow) when the
            material is unmapped or the mapping is not a valid id
        """
        layer_block = self._block_to_layer.get(material)
        if layer_block is None:
            logger.debug("No layer mapping, using fallback", material=material, fallback=self.fallback)
            return self.fallback

        if not is_valid_identifier(layer_block):
            logger.warning("Invalid layer block identifier", material=material, layer_block=layer_block)
            return self.fallback

        return layer_block

    def register_mapping(self, material: str, layer_block: str):
        self._block_to_layer[material] = layer_block
        logger.info("Registered custom layer mapping", material=material, layer_block=layer_block)

    def has_mapping(self, material: str) -> bool:
        return material in self._block_to_layer


class PlantMappingRegistry:
    """Bidirectional vanilla plant <-> overlay marker mapping."""

    def __init__(self):
        self._plant_to_marker: Dict[str, str] = {}
        self._marker_to_plant: Dict[str, str] = {}
        for plant, marker in DEFAULT_PLANT_MAPPINGS.items():
            self.register_mapping(plant, marker)
        logger.info("Registered plant mappings", count=len(self._plant_to_marker))

    def register_mapping(self, plant: str, marker: str):
        self._plant_to_marker[plant] = marker
        self._marker_to_plant[marker] = plant

    def is_replaceable_plant(self, block_id: str) -> bool:
        return block_id in self._plant_to_marker

    def is_overlay_marker(self, block_id: str) -> bool:
        return block_id in self._marker_to_plant

    def get_overlay_marker(self, plant: str) -> Optional[str]:
        marker = self._plant_to_marker.get(plant)
        if marker is not None and not is_valid_identifier(marker):
            logger.warning("Invalid overlay marker identifier", plant=plant, marker=marker)
            return None
        return marker

    def get_original_plant(self, marker: str) -> Optional[str]:
        return self._marker_to_plant.get(marker)
