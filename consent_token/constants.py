"""
Constants for the Consent Token package

Centralized identifiers for wildcards, schema versions, wire field names,
standard purposes and error codes.
"""

from typing import Final, Tuple

# =============================================================================
# PACKAGE IDENTIFICATION
# =============================================================================

PACKAGE_NAME: Final[str] = "consent-token"
PACKAGE_VERSION: Final[str] = "2.0.0"

# =============================================================================
# WILDCARDS
# =============================================================================

WILDCARD_VENDOR: Final[str] = "*"
WILDCARD_SCOPE: Final[str] = "*"

# =============================================================================
# SCHEMA VERSIONS
# =============================================================================

LEGACY_VERSION: Final[int] = 1      # matrix-only consents
CURRENT_VERSION: Final[int] = 2     # matrix + purpose-level status

SUPPORTED_VERSIONS: Final[Tuple[int, ...]] = (LEGACY_VERSION, CURRENT_VERSION)

# =============================================================================
# WIRE FIELDS
# =============================================================================

class WireFields:
    """Field names used by both JSON shapes"""
    ISSUER: Final[str] = "issuer"
    USER_ID: Final[str] = "user_id"
    USER_ID_TYPE: Final[str] = "user_id_type"
    USER_ID_HASH_METHOD: Final[str] = "user_id_hash_method"
    VERSION: Final[str] = "version"

    # Explicit shape
    CONSENTS: Final[str] = "consents"
    PURPOSE: Final[str] = "purpose"
    STATUS: Final[str] = "status"
    VENDORS: Final[str] = "vendors"
    ID: Final[str] = "id"
    SCOPES: Final[str] = "scopes"

    # Compressed shape
    PURPOSES: Final[str] = "purposes"
    ENABLED: Final[str] = "enabled"
    DISABLED: Final[str] = "disabled"

    IDENTITY: Final[Tuple[str, ...]] = (
        ISSUER, USER_ID, USER_ID_TYPE, USER_ID_HASH_METHOD
    )


# =============================================================================
# STANDARD PURPOSES
# =============================================================================

class Purposes:
    """
    Standard GDPR/ePrivacy purposes.

    Not a restrictive list: any purpose id may be used. Tokens shared with
    third parties are easier to interpret when they stick to these.
    """
    COOKIES: Final[str] = "cookies"
    COOKIES_ANALYTICS: Final[str] = "cookies_analytics"
    COOKIES_MARKETING: Final[str] = "cookies_marketing"
    COOKIES_SOCIAL: Final[str] = "cookies_social"

    # IAB Transparency & Consent Framework purposes
    ADVERTISING_PERSONALIZATION: Final[str] = "advertising_personalization"
    ANALYTICS: Final[str] = "analytics"
    CONTENT_PERSONALIZATION: Final[str] = "content_personalization"
    DEVICE_ACCESS: Final[str] = "device_access"
    OFFLINE_MATCH: Final[str] = "offline_match"
    LINK_DEVICES: Final[str] = "link_devices"
    PRECISE_GEO: Final[str] = "precise_geo"

    ALL: Final[Tuple[str, ...]] = (
        COOKIES, COOKIES_ANALYTICS, COOKIES_MARKETING, COOKIES_SOCIAL,
        ADVERTISING_PERSONALIZATION, ANALYTICS, CONTENT_PERSONALIZATION,
        DEVICE_ACCESS, OFFLINE_MATCH, LINK_DEVICES, PRECISE_GEO
    )


# =============================================================================
# ERROR CODES
# =============================================================================

class ErrorCodes:
    """Standardized error codes for token parsing"""
    TOKEN_ERROR: Final[str] = "TOKEN_ERROR"
    MALFORMED_INPUT: Final[str] = "MALFORMED_INPUT"
    PAYLOAD_TOO_LARGE: Final[str] = "PAYLOAD_TOO_LARGE"
    SCHEMA_MISMATCH: Final[str] = "SCHEMA_MISMATCH"
    UNSUPPORTED_VERSION: Final[str] = "UNSUPPORTED_VERSION"
