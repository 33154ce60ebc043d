from __future__ import annotations

from typing import TYPE_CHECKING

from relay.rooms.models import ROOM_CAPACITY
from relay.tests.mocks import MockConnection

if TYPE_CHECKING:
    from relay.rooms.registry import RoomRegistry
    from relay.session.manager import SessionManager


async def join(manager: SessionManager, room_id: str, nickname: str | None) -> MockConnection:
    """Register a fresh connection and join it to ``room_id``."""
    conn = MockConnection()
    manager.register_connection(conn)
    await manager.join_room(conn, room_id, nickname)
    return conn


async def join_pair(
    manager: SessionManager,
    room_id: str = "r1",
    names: tuple[str, str] = ("Alice", "Bob"),
) -> tuple[MockConnection, MockConnection]:
    """Fill a room with two participants and clear their message history."""
    first = await join(manager, room_id, names[0])
    second = await join(manager, room_id, names[1])
    first._outbox.clear()
    second._outbox.clear()
    return first, second


def assert_room_invariants(registry: RoomRegistry) -> None:
    """Every registered room is non-empty, within capacity, and hosted by a member."""
    for room_id in list(registry._rooms):
        room = registry.get(room_id)
        assert room is not None
        assert 1 <= room.member_count <= ROOM_CAPACITY
        assert room.host_connection_id in room.participants
