"""
Consent Token
Portable record of a user's consent decisions per purpose, vendor and scope,
with consent resolution, matrix compression and schema migration
"""

__version__ = "2.0.0"

# Core exports
from .config import TokenSettings, get_token_settings, update_token_settings
from .constants import (
    CURRENT_VERSION, LEGACY_VERSION, WILDCARD_SCOPE, WILDCARD_VENDOR, Purposes
)
from .exceptions import (
    TokenError, MalformedInputError, SchemaMismatchError, UnsupportedVersionError
)
from .log import configure_logging

# Consent records and resolution
from .consent import (
    ConsentModel, Vendor, Consent, ConsentEngine,
    has_consent, get_consent_status, get_purpose_status, set_consent_status
)
from .token import ConsentToken

# Codecs and parsing
from .codec import WireShape, detect_wire_shape, CompressedMatrix
from .migration import migrate
from .parser import (
    token_from_object, token_from_json, token_from_base64,
    token_from_compressed_object, token_from_compressed_json,
    token_from_compressed_base64, parse_token, parse_token_base64
)

__all__ = [
    # Config
    "TokenSettings",
    "get_token_settings",
    "update_token_settings",
    "configure_logging",

    # Constants
    "CURRENT_VERSION",
    "LEGACY_VERSION",
    "WILDCARD_SCOPE",
    "WILDCARD_VENDOR",
    "Purposes",

    # Errors
    "TokenError",
    "MalformedInputError",
    "SchemaMismatchError",
    "UnsupportedVersionError",

    # Consent
    "ConsentModel",
    "Vendor",
    "Consent",
    "ConsentEngine",
    "ConsentToken",
    "has_consent",
    "get_consent_status",
    "get_purpose_status",
    "set_consent_status",

    # Codecs
    "WireShape",
    "detect_wire_shape",
    "CompressedMatrix",
    "migrate",
    "token_from_object",
    "token_from_json",
    "token_from_base64",
    "token_from_compressed_object",
    "token_from_compressed_json",
    "token_from_compressed_base64",
    "parse_token",
    "parse_token_base64",
]
