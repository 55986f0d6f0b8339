"""
Tests for payload encoding and decoding.
"""

import json
import pytest

from litesearch.core.exceptions import PayloadDecodeError, PayloadEncodeError
from litesearch.database.payload import decode_payload, encode_payload


class TestEncodePayload:
    """Tests for encode_payload."""

    def test_keeps_non_ascii(self):
        payload = encode_payload({"id": 1, "title": "Café déjà vu"})

        assert "Café déjà vu" in payload
        assert json.loads(payload)["title"] == "Café déjà vu"

    def test_not_serializable_raises(self):
        with pytest.raises(PayloadEncodeError) as exc_info:
            encode_payload({"id": 4, "created": object()}, position=2)

        assert exc_info.value.position == 2
        assert exc_info.value.details["id"] == 4


class TestDecodePayload:
    """Tests for decode_payload."""

    def test_decodes_object(self):
        assert decode_payload('{"id": 1, "tags": ["a"]}') == {"id": 1, "tags": ["a"]}

    def test_invalid_json_raises(self):
        with pytest.raises(PayloadDecodeError) as exc_info:
            decode_payload("{not json", document_id=9)

        assert exc_info.value.document_id == 9

    def test_null_raises(self):
        with pytest.raises(PayloadDecodeError):
            decode_payload(None)

    def test_non_object_raises(self):
        with pytest.raises(PayloadDecodeError):
            decode_payload("[1, 2, 3]")
