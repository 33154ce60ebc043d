from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from relay.messaging.encoder import DEFAULT_MAX_MESSAGE_SIZE, MalformedMessageError, decode
from relay.messaging.types import ClientMessageType, parse_envelope, parse_join
from relay.rooms.exceptions import RelayError

if TYPE_CHECKING:
    from relay.messaging.protocol import ConnectionProtocol
    from relay.session.manager import SessionManager

logger = logging.getLogger(__name__)


class MessageRouter:
    """
    Routes connection events to the session manager.

    Decodes each inbound text frame just far enough to route it: a JOIN
    from an unjoined connection enters a room, and once joined every frame
    is relayed verbatim, a repeated JOIN included. Malformed frames are
    dropped here with a warning and never reach the client or the rooms.

    This class contains pure business logic and can be tested
    without real WebSocket connections.
    """

    def __init__(self, session_manager: SessionManager, *, max_message_size: int = DEFAULT_MAX_MESSAGE_SIZE) -> None:
        self._session_manager = session_manager
        self._max_message_size = max_message_size

    async def handle_connect(self, connection: ConnectionProtocol) -> None:
        self._session_manager.register_connection(connection)

    async def handle_message(self, connection: ConnectionProtocol, raw: str) -> None:
        session = self._session_manager.get_session(connection.connection_id)
        if session is None or session.is_closed:
            logger.debug("message from unregistered connection %s ignored", connection.connection_id)
            return

        try:
            data = decode(raw, self._max_message_size)
            envelope = parse_envelope(data)

            if session.is_joined:
                await self._session_manager.relay(connection, raw)
            elif envelope.type == ClientMessageType.JOIN:
                join = parse_join(data)
                await self._session_manager.join_room(connection, join.room_id, join.nickname)
            else:
                logger.debug(
                    "message type %s from unjoined connection %s ignored",
                    envelope.type,
                    connection.connection_id,
                )
        except MalformedMessageError as e:
            logger.warning("malformed message from %s dropped: %s", connection.connection_id, e)
        except RelayError as e:
            logger.warning("message from %s failed: %s", connection.connection_id, e)

    async def handle_malformed(self, connection: ConnectionProtocol, reason: str) -> None:
        """Record a frame the transport could not turn into text."""
        logger.warning("malformed message from %s dropped: %s", connection.connection_id, reason)

    async def handle_disconnect(self, connection: ConnectionProtocol) -> None:
        await self._session_manager.unregister_connection(connection)
