"""
JSON encoder/decoder for the relay's text-frame wire format.

Outbound notifications are dicts encoded to compact JSON text. Inbound
frames are decoded only far enough to route them; relayed frames are
forwarded as the original text, never re-encoded.
"""

import json
from typing import Any

from relay.rooms.exceptions import RelayError

DEFAULT_MAX_MESSAGE_SIZE = 64 * 1024  # 64KB per frame


class MalformedMessageError(RelayError):
    """Inbound frame cannot be decoded into a routable message."""


def encode(data: dict[str, Any]) -> str:
    """
    Encode a dict to JSON text.
    """
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def decode(raw: str, max_size: int = DEFAULT_MAX_MESSAGE_SIZE) -> dict[str, Any]:
    """
    Decode a JSON text frame to a dict.

    Raises MalformedMessageError if the frame is too large, is not valid JSON,
    or is not a JSON object.
    """
    byte_len = len(raw.encode("utf-8"))
    if byte_len > max_size:
        raise MalformedMessageError(f"message too large: {byte_len} bytes (max {max_size})")
    try:
        result = json.loads(raw)
    except (json.JSONDecodeError, RecursionError) as e:
        raise MalformedMessageError(f"failed to decode JSON: {e}") from e

    if not isinstance(result, dict):
        raise MalformedMessageError(f"expected object, got {type(result).__name__}")

    return result
