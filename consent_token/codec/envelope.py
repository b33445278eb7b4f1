"""
JSON and base64 envelopes for consent tokens
"""

import base64
import binascii
import json
from typing import Any, Dict, Union

from ..config import get_token_settings
from ..constants import ErrorCodes
from ..exceptions import MalformedInputError

RawInput = Union[str, bytes, bytearray]


def _check_size(data: RawInput) -> None:
    limit = get_token_settings().max_payload_bytes
    size = len(data.encode("utf-8")) if isinstance(data, str) else len(data)
    if size > limit:
        raise MalformedInputError(
            "Payload exceeds maximum size",
            error_code=ErrorCodes.PAYLOAD_TOO_LARGE,
            details={"size": size, "limit": limit},
        )


def dump_json(obj: Dict[str, Any]) -> str:
    """Serialize compactly, keeping insertion order of keys"""
    return json.dumps(
        obj,
        separators=(",", ":"),
        ensure_ascii=get_token_settings().json_ensure_ascii,
    )


def load_json(data: RawInput) -> Dict[str, Any]:
    """
    Decode a JSON document whose root must be an object.

    Raises:
        MalformedInputError: On empty input, invalid JSON or non-object root
    """
    if not data:
        raise MalformedInputError("Empty JSON input")
    if not isinstance(data, (str, bytes, bytearray)):
        raise MalformedInputError("JSON input must be str or bytes",
                                  details={"type": type(data).__name__})
    _check_size(data)

    try:
        obj = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
        raise MalformedInputError("Invalid JSON", details={"reason": str(exc)}) from exc

    if not isinstance(obj, dict):
        raise MalformedInputError("JSON root must be an object",
                                  details={"type": type(obj).__name__})
    return obj


def encode_base64(text: str) -> str:
    """UTF-8 encode then base64 encode"""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_base64(data: RawInput) -> str:
    """
    Reverse of ``encode_base64``.

    Raises:
        MalformedInputError: On empty input, invalid base64 or non UTF-8 content
    """
    if not data:
        raise MalformedInputError("Empty base64 input")
    if not isinstance(data, (str, bytes, bytearray)):
        raise MalformedInputError("Base64 input must be str or bytes",
                                  details={"type": type(data).__name__})
    _check_size(data)

    try:
        raw = base64.b64decode(data, validate=True)
        return raw.decode("utf-8")
    except (binascii.Error, ValueError) as exc:
        raise MalformedInputError("Invalid base64 payload",
                                  details={"reason": str(exc)}) from exc
