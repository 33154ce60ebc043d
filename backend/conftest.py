"""Root conftest: test environment, structlog routing and the shared relay fixtures."""

from pathlib import Path

import pytest
import structlog
from dotenv import load_dotenv

from relay.messaging.router import MessageRouter
from relay.rooms.registry import RoomRegistry
from relay.session.manager import SessionManager

load_dotenv(Path(__file__).resolve().parent.parent / ".env.tests")

# Relay modules log through structlog; route it via stdlib so caplog sees the events.
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ],
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=False,
)


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Drop connection_id/room_id bindings left over from the previous test."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def registry():
    return RoomRegistry()


@pytest.fixture
def session_manager(registry):
    return SessionManager(registry)


@pytest.fixture
def router(session_manager):
    return MessageRouter(session_manager)
