"""Tests for RoomRegistry."""

from relay.rooms.registry import RoomRegistry
from relay.tests.mocks import MockConnection


class TestRoomRegistry:
    def test_get_or_create_creates_empty_room(self):
        registry = RoomRegistry()
        room = registry.get_or_create("r1")
        assert room.room_id == "r1"
        assert room.is_empty
        assert room.host_connection_id is None
        assert "r1" in registry

    def test_get_or_create_returns_existing(self):
        registry = RoomRegistry()
        first = registry.get_or_create("r1")
        first.add_participant(MockConnection(), "Alice")
        assert registry.get_or_create("r1") is first
        assert registry.room_count == 1

    def test_get_unknown_returns_none(self):
        registry = RoomRegistry()
        assert registry.get("missing") is None

    def test_remove_deletes_entry(self):
        registry = RoomRegistry()
        registry.get_or_create("r1")
        registry.remove("r1")
        assert registry.get("r1") is None
        assert len(registry) == 0

    def test_remove_unknown_is_noop(self):
        registry = RoomRegistry()
        registry.remove("missing")
        assert registry.room_count == 0

    def test_recreated_room_is_fresh(self):
        registry = RoomRegistry()
        old = registry.get_or_create("r1")
        old.add_participant(MockConnection(), "Alice")
        registry.remove("r1")

        new = registry.get_or_create("r1")
        assert new is not old
        assert new.is_empty

    def test_room_ids_are_used_verbatim(self):
        registry = RoomRegistry()
        a = registry.get_or_create("Room 1")
        b = registry.get_or_create("room 1")
        assert a is not b
        assert registry.room_count == 2
