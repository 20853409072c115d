"""Voxel world access: positions, chunks and an in-memory world."""

from typing import Dict, Iterator, List, NamedTuple, Set, Tuple

from .blocks import AIR, BlockState

CHUNK_SIZE = 16


class BlockPos(NamedTuple):
    """Integer voxel coordinate."""

    x: int
    y: int
    z: int

    def up(self, n: int = 1) -> "BlockPos":
        return BlockPos(self.x, self.y + n, self.z)

    def down(self, n: int = 1) -> "BlockPos":
        return BlockPos(self.x, self.y - n, self.z)

    def north(self) -> "BlockPos":
        return BlockPos(self.x, self.y, self.z - 1)

    def south(self) -> "BlockPos":
        return BlockPos(self.x, self.y, self.z + 1)

    def east(self) -> "BlockPos":
        return BlockPos(self.x + 1, self.y, self.z)

    def west(self) -> "BlockPos":
        return BlockPos(self.x - 1, self.y, self.z)

    def cardinals(self) -> Tuple["BlockPos", ...]:
        return (self.north(), self.south(), self.east(), self.west())


class ChunkPos(NamedTuple):
    """A 16x16 column chunk."""

    x: int
    z: int

    @classmethod
    def containing(cls, x: int, z: int) -> "ChunkPos":
        return cls(x // CHUNK_SIZE, z // CHUNK_SIZE)

    @property
    def start_x(self) -> int:
        return self.x * CHUNK_SIZE

    @property
    def start_z(self) -> int:
        return self.z * CHUNK_SIZE

    def columns(self) -> Iterator[Tuple[int, int]]:
        for x in range(self.start_x, self.start_x + CHUNK_SIZE):
            for z in range(self.start_z, self.start_z + CHUNK_SIZE):
                yield x, z

    def neighbors(self) -> List["ChunkPos"]:
        return [
            ChunkPos(self.x + dx, self.z + dz)
            for dx in (-1, 0, 1)
            for dz in (-1, 0, 1)
            if dx or dz
        ]


class VoxelWorld:
    """
    Sparse in-memory voxel world.

    Stores only non-air voxels, grouped per column. A chunk counts as loaded
    once any voxel has been written into it.
    Any object offering the same methods can stand in for a live world.
    """

    def __init__(self, bottom_y: int = 0, height: int = 256):
        self.bottom_y = bottom_y
        self.top_limit = bottom_y + height
        self._columns: Dict[Tuple[int, int], Dict[int, BlockState]] = {}
        self._loaded: Set[ChunkPos] = set()

    @classmethod
    def from_heights(
        cls,
        heights: Dict[Tuple[int, int], int],
        material: str = "minecraft:grass_block",
        filler: str = "minecraft:dirt",
        bottom_y: int = 0,
    ) -> "VoxelWorld":
        """
        Build a world from a column height map.

        Each column is filled with ``filler`` from the world floor up to its
        height, topped by ``material``.
        """
        world = cls(bottom_y=bottom_y)
        for (x, z), height in heights.items():
            world.fill_column(x, z, height, material=material, filler=filler)
        return world

    def fill_column(self, x: int, z: int, height: int, material: str, filler: str = "minecraft:dirt"):
        for y in range(self.bottom_y, height):
            self.set_block_state(BlockPos(x, y, z), BlockState(filler))
        self.set_block_state(BlockPos(x, height, z), BlockState(material))

    def is_chunk_loaded(self, chunk: ChunkPos) -> bool:
        return chunk in self._loaded

    def loaded_chunks(self) -> Set[ChunkPos]:
        return set(self._loaded)

    def get_block_state(self, pos: BlockPos) -> BlockState:
        column = self._columns.get((pos.x, pos.z))
        if column is None:
            return AIR
        return column.get(pos.y, AIR)

    def is_within_height(self, y: int) -> bool:
        return self.bottom_y <= y < self.top_limit

    def set_block_state(self, pos: BlockPos, state: BlockState):
        if not self.is_within_height(pos.y):
            raise ValueError(f"y={pos.y} outside world height [{self.bottom_y}, {self.top_limit})")

        self._loaded.add(ChunkPos.containing(pos.x, pos.z))
        column = self._columns.setdefault((pos.x, pos.z), {})
        if state.is_air:
            column.pop(pos.y, None)
        else:
            column[pos.y] = state

    def get_top_y(self, x: int, z: int) -> int:
        """One above the highest non-air voxel, or the world floor."""
        column = self._columns.get((x, z))
        if not column:
            return self.bottom_y
        return max(column) + 1

    def blocks(self) -> Dict[BlockPos, BlockState]:
        """Copy of every non-air voxel."""
        return {
            BlockPos(x, y, z): state
            for (x, z), column in self._columns.items()
            for y, state in column.items()
        }

