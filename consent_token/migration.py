"""
Schema migration for consent tokens
Upgrades decoded v1 (matrix-only) objects to the v2 layout
"""

import copy
from typing import Any, Dict, Optional

import structlog

from .codec.shape import WireShape, detect_wire_shape
from .constants import CURRENT_VERSION, LEGACY_VERSION, WILDCARD_VENDOR, WireFields
from .exceptions import SchemaMismatchError
from .utils.validators import is_sequence, is_strict_bool, is_strict_int

logger = structlog.get_logger(__name__)


def read_version(obj: Dict[str, Any]) -> Any:
    """Version tag of a decoded object; unversioned tokens predate v2"""
    return obj.get(WireFields.VERSION, LEGACY_VERSION)


def is_legacy(obj: Dict[str, Any]) -> bool:
    version = read_version(obj)
    return is_strict_int(version) and version == LEGACY_VERSION


def check_legacy_consents(consents: Any) -> None:
    """
    Reject v1 consent entries that carry a purpose-level status.

    Raises:
        SchemaMismatchError: If any entry has a status field
    """
    if not is_sequence(consents):
        return

    for index, consent in enumerate(consents):
        if isinstance(consent, dict) and WireFields.STATUS in consent:
            raise SchemaMismatchError(
                "Legacy consent carries a purpose status",
                field=WireFields.CONSENTS,
                details={"index": index, "version": LEGACY_VERSION},
            )


def _wildcard_status(consent: Dict[str, Any]) -> Optional[bool]:
    """Recorded status of the '*' vendor, None if absent or unrecorded"""
    vendors = consent.get(WireFields.VENDORS)
    if not is_sequence(vendors):
        return None

    for vendor in vendors:
        if isinstance(vendor, dict) and vendor.get(WireFields.ID) == WILDCARD_VENDOR:
            status = vendor.get(WireFields.STATUS)
            return status if is_strict_bool(status) else None
    return None


def migrate(obj: Any) -> Optional[Dict[str, Any]]:
    """
    Upgrade a decoded legacy token object to the current schema.

    An object without a version is treated as legacy. Compressed objects
    only get their version bumped. Explicit objects also get each consent's
    purpose-level status copied from its wildcard vendor; consents without
    a recorded wildcard status are left without one. Explicit objects whose
    consents already carry a status are rejected.

    Args:
        obj: Decoded JSON object, left unmodified

    Returns:
        Migrated copy, or None when the object is not a valid legacy token
    """
    if not isinstance(obj, dict) or not is_legacy(obj):
        return None

    try:
        shape = detect_wire_shape(obj)
        if shape is WireShape.EXPLICIT:
            check_legacy_consents(obj[WireFields.CONSENTS])
    except SchemaMismatchError as exc:
        logger.warning("Cannot migrate token", **exc.to_dict())
        return None

    migrated = copy.deepcopy(obj)
    migrated[WireFields.VERSION] = CURRENT_VERSION

    if shape is WireShape.EXPLICIT and is_sequence(migrated[WireFields.CONSENTS]):
        for consent in migrated[WireFields.CONSENTS]:
            if not isinstance(consent, dict):
                continue
            status = _wildcard_status(consent)
            if status is not None:
                consent[WireFields.STATUS] = status

    logger.debug("Migrated token", from_version=LEGACY_VERSION,
                 to_version=CURRENT_VERSION, shape=shape.value)
    return migrated
