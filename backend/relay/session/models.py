from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from relay.messaging.protocol import ConnectionProtocol


class SessionState(StrEnum):
    UNJOINED = "unjoined"
    JOINED = "joined"
    CLOSED = "closed"


class InvalidTransitionError(Exception):
    """Session was asked to move to a state its current state cannot reach."""


@dataclass
class Session:
    """Per-connection protocol state.

    Lifecycle:
    - Created on connect in UNJOINED
    - An accepted JOIN moves it to JOINED and binds room_id
    - The close notification moves it to CLOSED from any state (terminal)
    """

    connection: ConnectionProtocol
    state: SessionState = SessionState.UNJOINED
    room_id: str | None = None

    @property
    def connection_id(self) -> str:
        return self.connection.connection_id

    @property
    def is_joined(self) -> bool:
        return self.state is SessionState.JOINED

    @property
    def is_closed(self) -> bool:
        return self.state is SessionState.CLOSED

    def mark_joined(self, room_id: str) -> None:
        if self.state is not SessionState.UNJOINED:
            raise InvalidTransitionError(f"cannot join from {self.state}")
        self.state = SessionState.JOINED
        self.room_id = room_id

    def mark_closed(self) -> None:
        self.state = SessionState.CLOSED
