"""Best-effort fan-out of outbound frames to room participants."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from relay.messaging.encoder import encode

if TYPE_CHECKING:
    from collections.abc import Iterable

    from relay.messaging.protocol import ConnectionProtocol
    from relay.rooms.models import Participant

logger = structlog.get_logger()

# Failures a closed or unreachable peer can raise while sending.
SEND_ERRORS = (ConnectionError, RuntimeError, OSError)


async def send_safely(connection: ConnectionProtocol, text: str) -> bool:
    """Send one frame, absorbing send failures. Return True on delivery."""
    if not connection.is_open:
        return False
    try:
        await connection.send_text(text)
    except SEND_ERRORS as e:
        logger.debug("send failed", connection_id=connection.connection_id, error=str(e))
        return False
    return True


async def send_message_safely(connection: ConnectionProtocol, message: dict[str, Any]) -> bool:
    """Send one relay message as JSON text, absorbing send failures like send_safely."""
    if not connection.is_open:
        return False
    try:
        await connection.send_message(message)
    except SEND_ERRORS as e:
        logger.debug("send failed", connection_id=connection.connection_id, error=str(e))
        return False
    return True


async def broadcast_text(
    participants: Iterable[Participant],
    text: str,
    exclude_connection_id: str | None = None,
) -> int:
    """Send ``text`` verbatim to every open participant except the excluded one.

    Each recipient is independent: a closed connection is skipped and a failed
    send neither retries nor stops delivery to the others. Returns the number
    of recipients the frame was handed to.
    """
    delivered = 0
    for participant in list(participants):
        if participant.connection_id == exclude_connection_id:
            continue
        if await send_safely(participant.connection, text):
            delivered += 1
    return delivered


async def broadcast_message(
    participants: Iterable[Participant],
    message: dict[str, Any],
    exclude_connection_id: str | None = None,
) -> int:
    """JSON-encode ``message`` once and fan it out with broadcast_text."""
    return await broadcast_text(participants, encode(message), exclude_connection_id)
