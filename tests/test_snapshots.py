"""
Tests for the overlay snapshot store.
"""

from py_layers.core.world import BlockPos
from py_layers.db.snapshots import SimpleSnapshot, SnapshotStore, TallSnapshot


class TestSnapshotStore:
    """Test insert-if-absent and delete-if-present semantics."""

    def test_insert_and_get(self, store):
        pos = BlockPos(1, 12, 3)

        assert store.insert_if_absent(pos, SimpleSnapshot("minecraft:short_grass"))
        assert store.get(pos) == SimpleSnapshot("minecraft:short_grass")
        assert store.contains(pos)

    def test_insert_if_absent(self, store):
        pos = BlockPos(1, 12, 3)

        assert store.insert_if_absent(pos, SimpleSnapshot("minecraft:short_grass"))
        assert not store.insert_if_absent(pos, SimpleSnapshot("minecraft:fern"))
        assert store.get(pos) == SimpleSnapshot("minecraft:short_grass")
        assert store.count() == 1

    def test_tall_snapshot(self, store):
        pos = BlockPos(0, 5, 0)
        snapshot = TallSnapshot(lower="minecraft:tall_grass", upper="minecraft:tall_grass")

        store.insert_if_absent(pos, snapshot)

        assert store.get(pos) == snapshot

    def test_delete(self, store):
        pos = BlockPos(2, 2, 2)
        store.insert_if_absent(pos, SimpleSnapshot("minecraft:poppy"))

        assert store.delete(pos) == SimpleSnapshot("minecraft:poppy")
        assert store.delete(pos) is None
        assert not store.contains(pos)
        assert store.count() == 0

    def test_missing_position(self, store):
        assert store.get(BlockPos(9, 9, 9)) is None

    def test_worlds_are_isolated(self, database, store):
        other = SnapshotStore(database, world_id="other")
        pos = BlockPos(1, 1, 1)

        store.insert_if_absent(pos, SimpleSnapshot("minecraft:fern"))

        assert not other.contains(pos)
        assert other.insert_if_absent(pos, SimpleSnapshot("minecraft:dead_bush"))
        assert store.count() == 1
        assert other.count() == 1

    def test_persists_across_store_instances(self, database):
        pos = BlockPos(4, 7, 4)
        SnapshotStore(database, world_id="shared").insert_if_absent(pos, SimpleSnapshot("minecraft:fern"))

        assert SnapshotStore(database, world_id="shared").get(pos) == SimpleSnapshot("minecraft:fern")
