"""
JSON payload encoding for stored documents.

The `__payload` column keeps the document exactly as the caller wrote it,
so results can be rebuilt with fields that were never indexed.
"""

import json
from typing import Any, Mapping

from ..core import PayloadDecodeError, PayloadEncodeError


def encode_payload(document: Mapping[str, Any], position: int = None) -> str:
    """
    Serialize a document to its payload string.

    Raises:
        PayloadEncodeError: If the document is not JSON serializable.
    """
    try:
        return json.dumps(document, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise PayloadEncodeError(
            f"Document cannot be serialized to JSON: {e}",
            position=position,
            details={"id": document.get("id")}
        ) from e


def decode_payload(raw: Any, document_id: Any = None) -> dict:
    """
    Parse a stored payload back into a dict.

    Raises:
        PayloadDecodeError: If the stored value is not a JSON object.
    """
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise PayloadDecodeError(
            f"Stored payload of document {document_id!r} is not valid JSON: {e}",
            document_id=document_id
        ) from e

    if not isinstance(payload, dict):
        raise PayloadDecodeError(
            f"Stored payload of document {document_id!r} is not a JSON object",
            document_id=document_id
        )

    return payload
