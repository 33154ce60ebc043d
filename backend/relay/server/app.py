from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from starlette.applications import Starlette
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse
from starlette.routing import Route, WebSocketRoute

from relay.messaging.router import MessageRouter
from relay.rooms.registry import RoomRegistry
from relay.server.settings import RelayServerSettings
from relay.server.websocket import websocket_endpoint
from relay.session.manager import SessionManager
from shared.build_info import APP_VERSION
from shared.logging import setup_logging

if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.websockets import WebSocket

logger = structlog.get_logger()


async def health(_request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok", "version": APP_VERSION})


async def status(request: Request) -> JSONResponse:
    session_manager: SessionManager = request.app.state.session_manager
    return JSONResponse(
        {
            "status": "ok",
            "version": APP_VERSION,
            "rooms": session_manager.registry.room_count,
            "connections": session_manager.connection_count,
        },
    )


def create_app(
    settings: RelayServerSettings | None = None,
    session_manager: SessionManager | None = None,
    message_router: MessageRouter | None = None,
) -> Starlette:
    if settings is None:  # pragma: no cover
        settings = RelayServerSettings()

    # The registry lives exactly as long as the app that owns it.
    if session_manager is None:
        session_manager = SessionManager(RoomRegistry())

    if message_router is None:
        message_router = MessageRouter(session_manager, max_message_size=settings.max_message_size)

    async def ws_endpoint(websocket: WebSocket) -> None:
        await websocket_endpoint(websocket, message_router)

    routes = [
        Route("/health", health, methods=["GET"]),
        Route("/status", status, methods=["GET"]),
        WebSocketRoute("/", ws_endpoint),
        WebSocketRoute("/ws", ws_endpoint),
    ]

    app = Starlette(routes=routes)
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["Content-Type"],
    )
    app.state.settings = settings
    app.state.session_manager = session_manager

    logger.info("relay server ready", port=settings.port)
    return app


def get_app() -> Starlette:  # pragma: no cover
    """ASGI application factory for production use (e.g., uvicorn --factory)."""
    _settings = RelayServerSettings()
    setup_logging(log_dir=_settings.log_dir)
    return create_app(settings=_settings)
