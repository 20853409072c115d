"""
Block states and block category predicates.

Blocks are identified by namespaced ids ("minecraft:grass_block",
"conquest:grass_block_layer"). A BlockState carries the few properties the
layer generator reads or writes: the layer count of layer blocks, the half of
two-voxel plants and the waterlogged flag.
"""

import re
from dataclasses import dataclass, replace
from typing import Optional

LOWER = "lower"
UPPER = "upper"

# Vanilla layer blocks carry 1-8 layers
MAX_LAYERS = 8

_IDENTIFIER_RE = re.compile(r"^[a-z0-9_.-]+:[a-z0-9_./-]+$")


@dataclass(frozen=True)
class BlockState:
    """Immutable state of a single voxel."""

    block: str
    layers: Optional[int] = None
    half: Optional[str] = None  # LOWER/UPPER for two-voxel plants
    waterlogged: bool = False

    @property
    def is_air(self) -> bool:
        return self.block in AIR_BLOCKS

    def with_layers(self, layers: int) -> "BlockState":
        return replace(self, layers=max(1, min(layers, MAX_LAYERS)))

    def with_half(self, half: str) -> "BlockState":
        return replace(self, half=half)


AIR = BlockState("minecraft:air")
AIR_BLOCKS = frozenset({"minecraft:air", "minecraft:cave_air", "minecraft:void_air"})

SNOW = "minecraft:snow"
WATER = "minecraft:water"
LIQUIDS = frozenset({WATER, "minecraft:lava"})

FLOWERS = frozenset(
    {
        "minecraft:dandelion",
        "minecraft:poppy",
        "minecraft:blue_orchid",
        "minecraft:allium",
        "minecraft:azure_bluet",
        "minecraft:red_tulip",
        "minecraft:orange_tulip",
        "minecraft:white_tulip",
        "minecraft:pink_tulip",
        "minecraft:oxeye_daisy",
        "minecraft:cornflower",
        "minecraft:lily_of_the_valley",
        "minecraft:wither_rose",
        "minecraft:torchflower",
    }
)

TALL_PLANTS = frozenset(
    {
        "minecraft:tall_grass",
        "minecraft:large_fern",
        "minecraft:sunflower",
        "minecraft:lilac",
        "minecraft:rose_bush",
        "minecraft:peony",
        "conquest:tall_grass",
        "conquest:large_fern",
        "conquest:sunflower",
        "conquest:lilac",
        "conquest:rose_bush",
        "conquest:peony",
    }
)

SHORT_PLANTS = frozenset(
    {
        "minecraft:short_grass",
        "minecraft:fern",
        "minecraft:dead_bush",
    }
)

# Blocks that normal placement may overwrite without keeping a copy
REPLACEABLE = AIR_BLOCKS | SHORT_PLANTS | frozenset({SNOW})

# Surface materials layers can be generated on
PLACEABLE_MATERIALS = frozenset(
    {
        "minecraft:grass_block",
        "minecraft:dirt",
        "minecraft:coarse_dirt",
        "minecraft:rooted_dirt",
        "minecraft:podzol",
        "minecraft:mycelium",
        "minecraft:moss_block",
        "minecraft:mud",
        "minecraft:muddy_mangrove_roots",
        "minecraft:stone",
        "minecraft:cobblestone",
        "minecraft:mossy_cobblestone",
        "minecraft:andesite",
        "minecraft:diorite",
        "minecraft:granite",
        "minecraft:sand",
        "minecraft:red_sand",
        "minecraft:gravel",
        "minecraft:terracotta",
    }
)

_PARTIAL_SUFFIXES = ("_slab", "_stairs", "_fence", "_fence_gate", "_wall", "_pane", "_door", "_torch", "_carpet")


def is_valid_identifier(block_id: str) -> bool:
    """Check that a block id has the ``namespace:path`` form."""
    return bool(_IDENTIFIER_RE.match(block_id))


def is_liquid(block_id: str) -> bool:
    return block_id in LIQUIDS


def is_foliage(block_id: str) -> bool:
    """Leaves, flowers, saplings and grasses: never a terrain surface."""
    if block_id.endswith("_leaves") or block_id.endswith("_sapling"):
        return True
    return block_id in FLOWERS or block_id in SHORT_PLANTS or block_id in TALL_PLANTS


def is_tall_plant(block_id: str) -> bool:
    return block_id in TALL_PLANTS


def is_layer_block(block_id: str) -> bool:
    """Layer blocks written by the generator (or snow used as fallback)."""
    if block_id == SNOW:
        return True
    path = block_id.split(":", 1)[-1]
    return "layer" in path or "slab" in path


def is_full_cube(state: BlockState) -> bool:
    """
    Check whether a voxel is a solid full cube.

    Air, liquids, foliage, layer blocks and partial shapes are not full
    cubes; neither is anything carrying a layer count or a plant half.
    """
    block_id = state.block
    if state.is_air or is_liquid(block_id) or is_foliage(block_id):
        return False
    if state.layers is not None or state.half is not None:
        return False
    if is_layer_block(block_id):
        return False
    return not block_id.endswith(_PARTIAL_SUFFIXES)


def is_replaceable(state: BlockState) -> bool:
    if state.block == SNOW:
        # Only thin snow is replaceable
        return state.layers is None or state.layers <= 1
    return state.block in REPLACEABLE


def can_generate_layers_on(material: str) -> bool:
    """Whitelist of surface materials eligible for layer placement."""
    return material in PLACEABLE_MATERIALS
