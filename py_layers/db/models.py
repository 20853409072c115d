"""Database models for overlay snapshot storage."""

from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import declarative_base
from datetime import datetime

Base = declarative_base()


class OverlaySnapshotRecord(Base):
    """A plant displaced by a layer overlay, keyed by the overlay voxel."""

    __tablename__ = "overlay_snapshots"
    __table_args__ = (
        UniqueConstraint("world_id", "x", "y", "z", name="uq_overlay_snapshot_position"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    world_id = Column(String(64), nullable=False, index=True)

    # Overlay voxel, one above the surface
    x = Column(Integer, nullable=False)
    y = Column(Integer, nullable=False)
    z = Column(Integer, nullable=False)

    kind = Column(String(10), nullable=False)  # simple, tall
    lower_block = Column(String(255), nullable=False)
    upper_block = Column(String(255))  # tall plants only

    created_at = Column(DateTime, default=datetime.utcnow)
