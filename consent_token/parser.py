"""
Token parsing entry points

Every public function here returns a ``ConsentToken`` or ``None``. Invalid
input of any kind (empty, undecodable, wrong layout, wrong schema) is logged
and reported as ``None``; no exception reaches the caller.

Pipeline: bytes -> JSON object -> layout check -> migration of legacy
objects -> token.
"""

from typing import Any, Dict, Optional

import structlog
from pydantic import ValidationError

from .codec.compression import CompressedMatrix, expand_consents
from .codec.envelope import RawInput, decode_base64, load_json
from .codec.shape import WireShape, detect_wire_shape
from .constants import CURRENT_VERSION, WireFields
from .exceptions import MalformedInputError, SchemaMismatchError, TokenError, UnsupportedVersionError
from .migration import check_legacy_consents, is_legacy, migrate, read_version
from .token import ConsentToken
from .utils.validators import is_strict_int, validate_optional_string

logger = structlog.get_logger(__name__)


def _upgrade(obj: Dict[str, Any]) -> Dict[str, Any]:
    """Migrate legacy objects, reject unknown versions"""
    if is_legacy(obj):
        if WireFields.CONSENTS in obj:
            check_legacy_consents(obj[WireFields.CONSENTS])
        migrated = migrate(obj)
        if migrated is None:
            raise SchemaMismatchError("Legacy token could not be migrated")
        return migrated

    version = read_version(obj)
    if not is_strict_int(version) or version != CURRENT_VERSION:
        raise UnsupportedVersionError(version)
    return obj


def _require_shape(obj: Any, expected: WireShape) -> Dict[str, Any]:
    if not isinstance(obj, dict):
        raise MalformedInputError("Token must be a JSON object")

    shape = detect_wire_shape(obj)
    if shape is not expected:
        raise SchemaMismatchError(
            f"Expected {expected.value} layout, got {shape.value}",
            details={"expected": expected.value, "actual": shape.value},
        )
    return _upgrade(obj)


def _build_explicit(obj: Any) -> ConsentToken:
    return ConsentToken.parse_object(_require_shape(obj, WireShape.EXPLICIT))


def _build_compressed(obj: Any) -> ConsentToken:
    obj = _require_shape(obj, WireShape.COMPRESSED)

    try:
        matrix = CompressedMatrix.model_validate({
            WireFields.PURPOSES: obj.get(WireFields.PURPOSES),
            WireFields.VENDORS: obj.get(WireFields.VENDORS),
        })
    except ValidationError as exc:
        raise SchemaMismatchError(
            "Invalid compressed consent sets",
            details={"errors": [
                {"loc": ".".join(str(part) for part in error["loc"]), "msg": error["msg"]}
                for error in exc.errors()
            ]},
        ) from exc

    identity = {
        name: validate_optional_string(obj.get(name), name)
        for name in WireFields.IDENTITY
    }
    return ConsentToken(
        consents=expand_consents(matrix),
        version=obj[WireFields.VERSION],
        **identity,
    )


def _build_any(obj: Any) -> ConsentToken:
    if not isinstance(obj, dict):
        raise MalformedInputError("Token must be a JSON object")

    if detect_wire_shape(obj) is WireShape.COMPRESSED:
        return _build_compressed(obj)
    return _build_explicit(obj)


def _guard(source: str, build, *args) -> Optional[ConsentToken]:
    try:
        return build(*args)
    except TokenError as exc:
        logger.warning("Rejected consent token", source=source, **exc.to_dict())
        return None


# =============================================================================
# EXPLICIT LAYOUT
# =============================================================================

def token_from_object(obj: Any) -> Optional[ConsentToken]:
    """Build a token from a decoded explicit object, migrating legacy versions"""
    return _guard("object", _build_explicit, obj)


def token_from_json(data: Optional[RawInput]) -> Optional[ConsentToken]:
    """
    Parse a JSON string into a token.

    Returns:
        The token, or None if the JSON does not represent a valid token in
        the explicit layout
    """
    return _guard("json", lambda: _build_explicit(load_json(data)))


def token_from_base64(data: Optional[RawInput]) -> Optional[ConsentToken]:
    """Parse a base64-encoded JSON string into a token, None if invalid"""
    return _guard("base64", lambda: _build_explicit(load_json(decode_base64(data))))


# =============================================================================
# COMPRESSED LAYOUT
# =============================================================================

def token_from_compressed_object(obj: Any) -> Optional[ConsentToken]:
    """Rebuild a token from a decoded compressed object"""
    return _guard("compressed_object", _build_compressed, obj)


def token_from_compressed_json(data: Optional[RawInput]) -> Optional[ConsentToken]:
    """
    Parse a compressed JSON string into a token.

    The full consent matrix is rebuilt from the enabled/disabled sets.
    Explicit-layout JSON is rejected.
    """
    return _guard("compressed_json", lambda: _build_compressed(load_json(data)))


def token_from_compressed_base64(data: Optional[RawInput]) -> Optional[ConsentToken]:
    return _guard(
        "compressed_base64",
        lambda: _build_compressed(load_json(decode_base64(data))),
    )


# =============================================================================
# EITHER LAYOUT
# =============================================================================

def parse_token(data: Optional[RawInput]) -> Optional[ConsentToken]:
    """Parse JSON in whichever layout it was written"""
    return _guard("json", lambda: _build_any(load_json(data)))


def parse_token_base64(data: Optional[RawInput]) -> Optional[ConsentToken]:
    """Parse base64-encoded JSON in whichever layout it was written"""
    return _guard("base64", lambda: _build_any(load_json(decode_base64(data))))
