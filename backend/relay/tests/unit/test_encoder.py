"""
Tests for the JSON text-frame encoder.
"""

import json

import pytest

from relay.messaging.encoder import MalformedMessageError, decode, encode
from relay.rooms.exceptions import RelayError


class TestEncode:
    def test_encode_is_compact_json(self) -> None:
        assert encode({"type": "HOST_ASSIGNED"}) == '{"type":"HOST_ASSIGNED"}'

    def test_encode_keeps_unicode(self) -> None:
        text = encode({"nickname": "Zoë"})
        assert "Zoë" in text
        assert json.loads(text) == {"nickname": "Zoë"}


class TestDecode:
    def test_decode_object(self) -> None:
        assert decode('{"type": "SYNC", "time": 42}') == {"type": "SYNC", "time": 42}

    @pytest.mark.parametrize("raw", ["not json", "{", ""])
    def test_invalid_json_raises(self, raw: str) -> None:
        with pytest.raises(MalformedMessageError, match="failed to decode JSON"):
            decode(raw)

    @pytest.mark.parametrize("raw", ["[1, 2]", '"JOIN"', "42", "null"])
    def test_non_object_raises(self, raw: str) -> None:
        with pytest.raises(MalformedMessageError, match="expected object"):
            decode(raw)

    def test_oversized_frame_raises(self) -> None:
        raw = '{"type": "SYNC", "pad": "' + "a" * 100 + '"}'
        with pytest.raises(MalformedMessageError, match="message too large"):
            decode(raw, max_size=64)

    def test_size_limit_counts_utf8_bytes(self) -> None:
        raw = '{"t": "' + "一" * 10 + '"}'  # 30 bytes of CJK plus 9 bytes of JSON
        with pytest.raises(MalformedMessageError, match="message too large"):
            decode(raw, max_size=len(raw))

    def test_malformed_error_is_relay_error(self) -> None:
        assert issubclass(MalformedMessageError, RelayError)
