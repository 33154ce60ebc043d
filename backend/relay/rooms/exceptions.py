"""Typed domain exceptions for room membership rules.

Business-rule rejections subclass RelayError so the session layer can
catch them at one boundary and convert them into client notifications.
"""


class RelayError(Exception):
    """Base exception for relay rule violations."""


class RoomFullError(RelayError):
    """Room already holds the maximum number of participants."""

    def __init__(self, room_id: str) -> None:
        super().__init__("Room is full")
        self.room_id = room_id
