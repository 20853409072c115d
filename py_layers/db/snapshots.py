"""
Overlay snapshot storage.

When a layer overlay displaces a plant, the plant is recorded here so that
removing the layer can put it back. A position holds at most one snapshot:
inserting only succeeds when none exists and deleting only removes one that
does. Every operation runs in its own committed session, so later runs (and
later processes) see earlier overlays.
"""

from dataclasses import dataclass
from typing import Optional, Union

import structlog
from sqlalchemy.exc import IntegrityError

from ..core.world import BlockPos
from .connection import Database
from .models import OverlaySnapshotRecord

logger = structlog.get_logger()

SIMPLE = "simple"
TALL = "tall"


@dataclass(frozen=True)
class SimpleSnapshot:
    """A single-voxel plant."""

    block: str


@dataclass(frozen=True)
class TallSnapshot:
    """A two-voxel plant: lower half at the overlay voxel, upper half above."""

    lower: str
    upper: str


OverlaySnapshot = Union[SimpleSnapshot, TallSnapshot]


def _to_snapshot(record: OverlaySnapshotRecord) -> OverlaySnapshot:
    if record.kind == TALL:
        return TallSnapshot(lower=record.lower_block, upper=record.upper_block)
    return SimpleSnapshot(block=record.lower_block)


class SnapshotStore:
    """Per-world overlay snapshots backed by the database."""

    def __init__(self, database: Database, world_id: str = "default"):
        self.database = database
        self.world_id = world_id

    def _query(self, session, pos: BlockPos):
        return session.query(OverlaySnapshotRecord).filter(
            OverlaySnapshotRecord.world_id == self.world_id,
            OverlaySnapshotRecord.x == pos.x,
            OverlaySnapshotRecord.y == pos.y,
            OverlaySnapshotRecord.z == pos.z,
        )

    def insert_if_absent(self, pos: BlockPos, snapshot: OverlaySnapshot) -> bool:
        """
        Record a snapshot unless one already exists at ``pos``.

        Returns:
            True if the snapshot was stored
        """
        if isinstance(snapshot, TallSnapshot):
            record = OverlaySnapshotRecord(
                world_id=self.world_id,
                x=pos.x, y=pos.y, z=pos.z,
                kind=TALL,
                lower_block=snapshot.lower,
                upper_block=snapshot.upper,
            )
        else:
            record = OverlaySnapshotRecord(
                world_id=self.world_id,
                x=pos.x, y=pos.y, z=pos.z,
                kind=SIMPLE,
                lower_block=snapshot.block,
            )

        try:
            with self.database.get_session() as session:
                if self._query(session, pos).first() is not None:
                    return False
                session.add(record)
        except IntegrityError:
            logger.warning("Snapshot already stored", world_id=self.world_id, pos=tuple(pos))
            return False

        return True

    def get(self, pos: BlockPos) -> Optional[OverlaySnapshot]:
        with self.database.get_session() as session:
            record = self._query(session, pos).first()
            return _to_snapshot(record) if record is not None else None

    def contains(self, pos: BlockPos) -> bool:
        return self.get(pos) is not None

    def delete(self, pos: BlockPos) -> Optional[OverlaySnapshot]:
        """
        Remove the snapshot at ``pos`` if there is one.

        Returns:
            The removed snapshot, or None if nothing was stored
        """
        with self.database.get_session() as session:
            record = self._query(session, pos).first()
            if record is None:
                return None
            snapshot = _to_snapshot(record)
            session.delete(record)
        return snapshot

    def count(self) -> int:
        with self.database.get_session() as session:
            return (
                session.query(OverlaySnapshotRecord)
                .filter(OverlaySnapshotRecord.world_id == self.world_id)
                .count()
            )
