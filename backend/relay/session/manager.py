"""Session lifecycle: join, relay and departure against the room registry."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from relay.messaging.types import (
    ROOM_FULL_MESSAGE,
    ErrorMessage,
    HostAssignedMessage,
    JoinedMessage,
    UserJoinedMessage,
    UserLeftMessage,
)
from relay.rooms.broadcast import broadcast_message, broadcast_text, send_message_safely
from relay.rooms.exceptions import RoomFullError
from relay.session.models import Session, SessionState

if TYPE_CHECKING:
    from relay.messaging.protocol import ConnectionProtocol
    from relay.rooms.models import JoinResult, Room
    from relay.rooms.registry import RoomRegistry

logger = structlog.get_logger()


class SessionManager:
    """Drive each connection's session against the shared room registry.

    Owns the per-connection session table (connection_id -> Session); the
    registry is injected and owns the rooms. Every mutation of a room and
    the notifications it causes run under that room's lock, so events for
    one room are applied one at a time while different rooms interleave.
    """

    def __init__(self, registry: RoomRegistry) -> None:
        self._registry = registry
        self._sessions: dict[str, Session] = {}

    @property
    def registry(self) -> RoomRegistry:
        return self._registry

    @property
    def connection_count(self) -> int:
        return len(self._sessions)

    def register_connection(self, connection: ConnectionProtocol) -> Session:
        session = self._sessions.get(connection.connection_id)
        if session is None:
            session = Session(connection=connection)
            self._sessions[connection.connection_id] = session
        return session

    def get_session(self, connection_id: str) -> Session | None:
        return self._sessions.get(connection_id)

    async def join_room(
        self,
        connection: ConnectionProtocol,
        room_id: str,
        nickname: str | None = None,
    ) -> JoinResult | None:
        """Join ``connection`` to ``room_id``, creating the room on first join.

        Room creation and host assignment are separate steps: the registry
        only creates an empty room, and the first participant admitted to a
        host-less room becomes host. Returns None when the join was rejected
        or the session cannot join.
        """
        session = self.register_connection(connection)
        if session.state is not SessionState.UNJOINED:
            return None

        log = logger.bind(room_id=room_id, connection_id=connection.connection_id)

        while True:
            room = self._registry.get_or_create(room_id)
            async with room.lock:
                # The room may have emptied and been removed while we waited.
                if self._registry.get(room_id) is not room:
                    continue

                try:
                    participant = room.add_participant(connection, nickname)
                except RoomFullError:
                    log.info("join rejected", reason="room_full")
                    await send_message_safely(connection, ErrorMessage(message=ROOM_FULL_MESSAGE).to_wire())
                    return None

                room.assign_host_if_vacant(connection.connection_id)
                session.mark_joined(room_id)
                result = room.join_result(connection.connection_id)
                log.info(
                    "user joined room",
                    nickname=participant.display_name,
                    is_host=result.is_host,
                    member_count=room.member_count,
                )

                await send_message_safely(
                    connection,
                    JoinedMessage(room_id=room_id, is_host=result.is_host, users=result.users).to_wire(),
                )
                await broadcast_message(
                    room.participants.values(),
                    UserJoinedMessage(nickname=participant.display_name, users=result.users).to_wire(),
                    exclude_connection_id=connection.connection_id,
                )
                return result

    async def relay(self, connection: ConnectionProtocol, raw: str) -> int:
        """Forward ``raw`` unmodified to the other open members of the sender's room.

        Returns the number of recipients the frame was handed to.
        """
        room = self._joined_room(connection.connection_id)
        if room is None:
            return 0
        async with room.lock:
            if connection.connection_id not in room.participants:
                return 0
            return await broadcast_text(
                room.participants.values(),
                raw,
                exclude_connection_id=connection.connection_id,
            )

    async def leave_room(self, connection: ConnectionProtocol) -> None:
        """Remove ``connection`` from its room, re-electing the host if needed.

        The last participant out deletes the room. Otherwise a departing host
        hands over to the remaining member, who gets HOST_ASSIGNED before the
        USER_LEFT broadcast.
        """
        room = self._joined_room(connection.connection_id)
        if room is None:
            return

        log = logger.bind(room_id=room.room_id, connection_id=connection.connection_id)

        async with room.lock:
            was_host = room.is_host(connection.connection_id)
            participant = room.remove_participant(connection.connection_id)
            if participant is None:
                return
            log.info("user left room", nickname=participant.display_name, was_host=was_host)

            if room.is_empty:
                room.host_connection_id = None
                if self._registry.get(room.room_id) is room:
                    self._registry.remove(room.room_id)
                return

            if was_host:
                new_host = room.elect_host()
                if new_host is not None:
                    log.info("new host assigned", nickname=new_host.display_name)
                    await send_message_safely(new_host.connection, HostAssignedMessage().to_wire())

            await broadcast_message(
                room.participants.values(),
                UserLeftMessage(nickname=participant.display_name, users=room.user_names).to_wire(),
            )

    async def unregister_connection(self, connection: ConnectionProtocol) -> None:
        """Handle the close notification: leave any room, then end the session."""
        session = self._sessions.get(connection.connection_id)
        if session is None:
            return
        if session.is_joined:
            await self.leave_room(connection)
        session.mark_closed()
        self._sessions.pop(connection.connection_id, None)

    def _joined_room(self, connection_id: str) -> Room | None:
        session = self._sessions.get(connection_id)
        if session is None or not session.is_joined or session.room_id is None:
            return None
        return self._registry.get(session.room_id)

