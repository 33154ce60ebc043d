"""In-memory directory of live rooms."""

from __future__ import annotations

import structlog

from relay.rooms.models import Room

logger = structlog.get_logger()


class RoomRegistry:
    """Map room ids to Room objects.

    Purely state management, no I/O. Rooms are created on first join and
    removed by the session layer the moment their last participant leaves.
    The registry lives for the lifetime of the process and is never persisted.
    """

    def __init__(self) -> None:
        self._rooms: dict[str, Room] = {}

    def get_or_create(self, room_id: str) -> Room:
        """Return the room for ``room_id``, creating an empty host-less room if unseen."""
        room = self._rooms.get(room_id)
        if room is None:
            room = Room(room_id=room_id)
            self._rooms[room_id] = room
            logger.info("room created", room_id=room_id)
        return room

    def get(self, room_id: str) -> Room | None:
        return self._rooms.get(room_id)

    def remove(self, room_id: str) -> None:
        if self._rooms.pop(room_id, None) is not None:
            logger.info("room deleted", room_id=room_id)

    @property
    def room_count(self) -> int:
        return len(self._rooms)

    def __contains__(self, room_id: object) -> bool:
        return room_id in self._rooms

    def __len__(self) -> int:
        return len(self._rooms)
