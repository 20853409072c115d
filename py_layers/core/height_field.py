"""
Column height fields.

A height field maps each (x, z) column to the elevation and material of its
surface voxel. Two fields are built per run: the unfiltered field holds every
column with a valid surface and is the geometric truth used for edges and
distances; the filtered field holds only the columns where layers may be
placed. They are always passed around as two separate objects.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Sequence, Set

# (dx, dz) offsets
CARDINAL_OFFSETS = ((1, 0), (-1, 0), (0, 1), (0, -1))
NEIGHBOR_OFFSETS = tuple(
    (dx, dz) for dx in (-1, 0, 1) for dz in (-1, 0, 1) if dx or dz
)


class Column(NamedTuple):
    """An (x, z) column coordinate."""

    x: int
    z: int

    def offset(self, dx: int, dz: int) -> "Column":
        return Column(self.x + dx, self.z + dz)

    def neighbors(self) -> List["Column"]:
        """The 8 surrounding columns."""
        return [self.offset(dx, dz) for dx, dz in NEIGHBOR_OFFSETS]

    def cardinals(self) -> List["Column"]:
        return [self.offset(dx, dz) for dx, dz in CARDINAL_OFFSETS]


@dataclass(frozen=True)
class HeightSample:
    """Surface voxel of a column."""

    column: Column
    elevation: int
    material: str


class HeightField:
    """Mapping of column -> HeightSample."""

    def __init__(self, samples: Iterable[HeightSample] = ()):
        self._samples: Dict[Column, HeightSample] = {}
        for sample in samples:
            self.add(sample)

    @classmethod
    def from_grid(
        cls,
        rows: Sequence[Sequence[Optional[int]]],
        origin: Column = Column(0, 0),
        material: str = "minecraft:grass_block",
    ) -> "HeightField":
        """
        Build a field from a grid of elevations.

        ``rows[z][x]`` is the elevation at ``origin + (x, z)``; ``None`` marks
        a column without a surface.
        """
        field = cls()
        for dz, row in enumerate(rows):
            for dx, elevation in enumerate(row):
                if elevation is None:
                    continue
                field.add(HeightSample(origin.offset(dx, dz), elevation, material))
        return field

    def add(self, sample: HeightSample):
        self._samples[sample.column] = sample

    def get(self, column: Column) -> Optional[HeightSample]:
        return self._samples.get(column)

    def elevation(self, column: Column) -> Optional[int]:
        sample = self._samples.get(column)
        return sample.elevation if sample is not None else None

    def __contains__(self, column: object) -> bool:
        return column in self._samples

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[HeightSample]:
        return iter(self._samples.values())

    def columns(self) -> Set[Column]:
        return set(self._samples)

    def elevations(self) -> List[int]:
        """Distinct elevations, highest first."""
        return sorted({sample.elevation for sample in self._samples.values()}, reverse=True)

    def columns_at(self, elevation: int) -> Set[Column]:
        return {c for c, s in self._samples.items() if s.elevation == elevation}

    def by_elevation(self) -> Dict[int, Set[Column]]:
        levels: Dict[int, Set[Column]] = {}
        for column, sample in self._samples.items():
            levels.setdefault(sample.elevation, set()).add(column)
        return levels

    def is_subset_of(self, other: "HeightField") -> bool:
        """Every column here exists in ``other`` at the same elevation."""
        return all(
            other.elevation(column) == sample.elevation
            for column, sample in self._samples.items()
        )

    def restricted_to(self, columns: Set[Column]) -> "HeightField":
        return HeightField(s for c, s in self._samples.items() if c in columns)
