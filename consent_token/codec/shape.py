"""
Wire shape discrimination
"""

from enum import Enum
from typing import Any, Dict

from ..constants import WireFields
from ..exceptions import SchemaMismatchError


class WireShape(str, Enum):
    """The two JSON layouts a token can be written in"""
    EXPLICIT = "explicit"        # consents: [...]
    COMPRESSED = "compressed"    # purposes/vendors enabled-disabled sets


def detect_wire_shape(obj: Dict[str, Any]) -> WireShape:
    """
    Decide which layout a decoded object uses.

    Raises:
        SchemaMismatchError: If the object mixes both layouts or has neither
    """
    has_explicit = WireFields.CONSENTS in obj
    has_compressed = WireFields.PURPOSES in obj or WireFields.VENDORS in obj

    if has_explicit and has_compressed:
        raise SchemaMismatchError("Token mixes explicit and compressed fields")
    if has_explicit:
        return WireShape.EXPLICIT
    if has_compressed:
        return WireShape.COMPRESSED
    raise SchemaMismatchError("Token has neither consents nor purposes/vendors")
