"""Abstract connection protocol for JSON text-frame communication."""

from abc import ABC, abstractmethod
from typing import Any

from relay.messaging.encoder import encode


class ConnectionProtocol(ABC):
    """
    Abstract interface for a client connection.

    The relay core only needs identity, an open/closed predicate and a way
    to send text frames. Keeping it abstract lets the room and session logic
    be tested without real WebSocket connections.
    """

    @property
    @abstractmethod
    def connection_id(self) -> str:
        """Unique identifier for this connection."""
        ...

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """True while frames can still be delivered to the client."""
        ...

    @abstractmethod
    async def send_text(self, text: str) -> None:
        """
        Send one text frame to the client.
        """
        ...

    @abstractmethod
    async def receive_text(self) -> str:
        """
        Receive one text frame from the client.
        """
        ...

    @abstractmethod
    async def close(self, code: int = 1000, reason: str = "") -> None:
        """
        Close the connection.
        """
        ...

    async def send_message(self, data: dict[str, Any]) -> None:
        """
        Send a message to the client as JSON text.
        """
        await self.send_text(encode(data))
