from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from relay.messaging.encoder import MalformedMessageError


class ClientMessageType(StrEnum):
    JOIN = "JOIN"


class RelayMessageType(StrEnum):
    JOINED = "JOINED"
    USER_JOINED = "USER_JOINED"
    USER_LEFT = "USER_LEFT"
    HOST_ASSIGNED = "HOST_ASSIGNED"
    ERROR = "ERROR"


ROOM_FULL_MESSAGE = "Room is full"


class WireModel(BaseModel):
    """Base for wire messages: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class Envelope(WireModel):
    """Minimal structure every inbound frame must have to be routed."""

    model_config = ConfigDict(extra="allow")

    type: str


class JoinMessage(WireModel):
    type: Literal[ClientMessageType.JOIN] = ClientMessageType.JOIN
    room_id: str
    nickname: str | None = None


class JoinedMessage(WireModel):
    type: Literal[RelayMessageType.JOINED] = RelayMessageType.JOINED
    room_id: str
    is_host: bool
    users: list[str]


class UserJoinedMessage(WireModel):
    type: Literal[RelayMessageType.USER_JOINED] = RelayMessageType.USER_JOINED
    nickname: str
    users: list[str]


class UserLeftMessage(WireModel):
    type: Literal[RelayMessageType.USER_LEFT] = RelayMessageType.USER_LEFT
    nickname: str
    users: list[str]


class HostAssignedMessage(WireModel):
    type: Literal[RelayMessageType.HOST_ASSIGNED] = RelayMessageType.HOST_ASSIGNED


class ErrorMessage(WireModel):
    type: Literal[RelayMessageType.ERROR] = RelayMessageType.ERROR
    message: str


def parse_envelope(data: dict[str, Any]) -> Envelope:
    """Validate that a decoded frame carries a string ``type``."""
    try:
        return Envelope.model_validate(data)
    except ValidationError as e:
        raise MalformedMessageError(f"invalid envelope: {e.error_count()} error(s)") from e


def parse_join(data: dict[str, Any]) -> JoinMessage:
    """Validate a JOIN request. Raises MalformedMessageError on a bad shape."""
    try:
        return JoinMessage.model_validate(data)
    except ValidationError as e:
        raise MalformedMessageError(f"invalid JOIN: {e.error_count()} error(s)") from e
