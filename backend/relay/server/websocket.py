from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog
from starlette.websockets import WebSocket, WebSocketDisconnect, WebSocketState

from relay.messaging.encoder import MalformedMessageError
from relay.messaging.protocol import ConnectionProtocol

logger = structlog.get_logger()

if TYPE_CHECKING:
    from relay.messaging.router import MessageRouter


class WebSocketConnection(ConnectionProtocol):
    def __init__(self, websocket: WebSocket, connection_id: str | None = None) -> None:
        self._websocket = websocket
        self._connection_id = connection_id or str(uuid4())

    @property
    def connection_id(self) -> str:
        return self._connection_id

    @property
    def is_open(self) -> bool:
        return (
            self._websocket.client_state == WebSocketState.CONNECTED
            and self._websocket.application_state == WebSocketState.CONNECTED
        )

    async def send_text(self, text: str) -> None:
        try:
            await self._websocket.send_text(text)
        except WebSocketDisconnect:
            raise ConnectionError("WebSocket already disconnected") from None

    async def receive_text(self) -> str:
        """Receive one text frame. Binary frames raise MalformedMessageError."""
        try:
            message = await self._websocket.receive()
        except WebSocketDisconnect:
            raise ConnectionError("WebSocket already disconnected") from None
        if message["type"] == "websocket.disconnect":
            raise ConnectionError("WebSocket disconnected")
        text = message.get("text")
        if text is None:
            raise MalformedMessageError("binary frames are not supported")
        return text

    async def close(self, code: int = 1000, reason: str = "") -> None:
        with contextlib.suppress(WebSocketDisconnect, RuntimeError):
            await self._websocket.close(code=code, reason=reason)


async def websocket_endpoint(websocket: WebSocket, router: MessageRouter) -> None:
    await websocket.accept()

    connection = WebSocketConnection(websocket)
    structlog.contextvars.bind_contextvars(connection_id=connection.connection_id)
    logger.info("websocket connected")
    await router.handle_connect(connection)

    try:
        while True:
            try:
                raw = await connection.receive_text()
            except MalformedMessageError as e:
                await router.handle_malformed(connection, str(e))
                continue
            await router.handle_message(connection, raw)
    except (WebSocketDisconnect, RuntimeError, ConnectionError):  # fmt: skip
        pass
    finally:
        logger.info("websocket disconnected")
        await router.handle_disconnect(connection)
        structlog.contextvars.clear_contextvars()
