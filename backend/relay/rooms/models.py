"""Room and participant models for the relay."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from relay.rooms.exceptions import RoomFullError

if TYPE_CHECKING:
    from relay.messaging.protocol import ConnectionProtocol

ROOM_CAPACITY = 2
DEFAULT_DISPLAY_NAME = "Anonymous"


@dataclass
class Participant:
    """Bind one connection to a room under a display name.

    The connection reference is non-owning: the transport layer decides
    when it closes and reports that through the session layer.
    """

    connection: ConnectionProtocol
    room_id: str
    display_name: str = DEFAULT_DISPLAY_NAME

    @property
    def connection_id(self) -> str:
        return self.connection.connection_id


@dataclass(frozen=True)
class JoinResult:
    """Outcome of an accepted join, delivered only to the joining connection."""

    is_host: bool
    users: list[str]


@dataclass
class Room:
    """Synchronization session shared by up to two participants.

    Participants are keyed by connection id; dict insertion order is join
    order, which also decides host re-election. All membership changes and
    the broadcasts they cause run under ``lock``.
    """

    room_id: str
    host_connection_id: str | None = None
    participants: dict[str, Participant] = field(default_factory=dict)  # connection_id -> Participant
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    @property
    def member_count(self) -> int:
        return len(self.participants)

    @property
    def is_empty(self) -> bool:
        return self.member_count == 0

    @property
    def is_full(self) -> bool:
        return self.member_count >= ROOM_CAPACITY

    @property
    def user_names(self) -> list[str]:
        return [p.display_name for p in self.participants.values()]

    @property
    def host(self) -> Participant | None:
        if self.host_connection_id is None:
            return None
        return self.participants.get(self.host_connection_id)

    def is_host(self, connection_id: str) -> bool:
        return self.host_connection_id is not None and self.host_connection_id == connection_id

    def add_participant(self, connection: ConnectionProtocol, nickname: str | None) -> Participant:
        """Add a participant for ``connection``. Raise RoomFullError at capacity."""
        if self.is_full:
            raise RoomFullError(self.room_id)
        participant = Participant(
            connection=connection,
            room_id=self.room_id,
            display_name=nickname or DEFAULT_DISPLAY_NAME,
        )
        self.participants[connection.connection_id] = participant
        return participant

    def assign_host_if_vacant(self, connection_id: str) -> bool:
        """Make ``connection_id`` host when the room has none. Return True if assigned."""
        if self.host_connection_id is not None:
            return False
        self.host_connection_id = connection_id
        return True

    def remove_participant(self, connection_id: str) -> Participant | None:
        """Remove and return the participant for ``connection_id``, or None if absent."""
        return self.participants.pop(connection_id, None)

    def elect_host(self) -> Participant | None:
        """Re-elect the host after the previous one left.

        The earliest-joined remaining participant wins. With two seats that
        is always the sole remaining member. Clears the host when empty.
        """
        successor = next(iter(self.participants.values()), None)
        self.host_connection_id = successor.connection_id if successor is not None else None
        return successor

    def join_result(self, connection_id: str) -> JoinResult:
        return JoinResult(is_host=self.is_host(connection_id), users=self.user_names)
