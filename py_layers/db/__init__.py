"""
Database utilities and models.

This package provides:
- SQLAlchemy model for overlay snapshots
- Database connection management
- Snapshot store used to restore overlaid plants
"""

from .connection import Database, db
from .models import Base, OverlaySnapshotRecord
from .snapshots import OverlaySnapshot, SimpleSnapshot, SnapshotStore, TallSnapshot

__all__ = [
    'Database', 'db',
    'Base', 'OverlaySnapshotRecord',
    'OverlaySnapshot', 'SimpleSnapshot', 'SnapshotStore', 'TallSnapshot',
]
