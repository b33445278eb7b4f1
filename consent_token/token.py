"""
Consent token for the Consent Token package

A consent token represents the GDPR consents expressed by a user. It can be
used for storage or shared with third parties.

Example:
    token = ConsentToken(issuer="issuer", user_id="user@domain.com",
                         user_id_type="email")
    token.set_consent_status(True, Purposes.COOKIES, "vendor")
    token.to_base64()
"""

from typing import Any, Dict, List, Optional

import structlog
from pydantic import BaseModel, Field, field_validator

from .codec.compression import compress_consents
from .codec.envelope import dump_json, encode_base64
from .codec.shape import WireShape, detect_wire_shape
from .consent.engine import get_consent_engine
from .consent.models import Consent, ConsentModel
from .constants import CURRENT_VERSION, LEGACY_VERSION, SUPPORTED_VERSIONS, WireFields
from .exceptions import MalformedInputError, SchemaMismatchError, TokenError, UnsupportedVersionError
from .migration import check_legacy_consents, read_version
from .utils.validators import is_sequence, is_strict_int, validate_optional_string

logger = structlog.get_logger(__name__)


class ConsentToken(BaseModel):
    """User consent record: identity fields, per-purpose consents and schema version"""

    # A unique ID identifying the issuer of the token
    issuer: Optional[str] = None

    # The ID of the user that owns the token
    user_id: Optional[str] = None

    # The type of ID (email, uuid, adid, etc.)
    user_id_type: Optional[str] = None

    # Hash method used on the user ID, if hashed (md5, sha1, sha256)
    user_id_hash_method: Optional[str] = None

    consents: List[Consent] = Field(default_factory=list)
    version: int = Field(default=CURRENT_VERSION)

    @field_validator("consents", mode="before")
    @classmethod
    def _default_consents(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def consent_model(self) -> ConsentModel:
        if self.version == LEGACY_VERSION:
            return ConsentModel.MATRIX_ONLY
        return ConsentModel.MATRIX_WITH_STATUS

    # -------------------------------------------------------------------------
    # Consent list access
    # -------------------------------------------------------------------------

    def get_consent(self, purpose: str) -> Optional[Consent]:
        """Get consent for a purpose by exact match"""
        for consent in self.consents:
            if consent.purpose == purpose:
                return consent
        return None

    def add_consent(self, purpose: str) -> Optional[Consent]:
        """Find or create the consent for a purpose; empty purposes are ignored"""
        if not purpose:
            return None

        consent = self.get_consent(purpose)
        if consent is None:
            consent = Consent(purpose=purpose)
            self.consents.append(consent)
        return consent

    # -------------------------------------------------------------------------
    # Consent queries
    # -------------------------------------------------------------------------

    def has_consent(self, purpose: str, vendor_id: Optional[str] = None,
                    scope_id: Optional[str] = None) -> bool:
        """Check whether consent holds for a purpose/vendor/scope"""
        return get_consent_engine().has_consent(self, purpose, vendor_id, scope_id)

    def get_consent_status(self, purpose: str, vendor_id: str) -> Optional[bool]:
        """
        Get the consent status of the user for a specific purpose/vendor.

        Returns True if consent has been given, False if it has been denied
        and None if no consent information is available.
        """
        return get_consent_engine().get_consent_status(self, purpose, vendor_id)

    def get_purpose_status(self, purpose: str) -> Optional[bool]:
        return get_consent_engine().get_purpose_status(self, purpose)

    def set_consent_status(self, status: bool, purpose: str, vendor_id: str) -> None:
        """
        Set the consent status of the user for a purpose/vendor.

        Use '*' as ``vendor_id`` to record a decision for all vendors.
        """
        get_consent_engine().set_consent_status(self, status, purpose, vendor_id)

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def _identity(self) -> Dict[str, Any]:
        return {
            WireFields.ISSUER: self.issuer,
            WireFields.USER_ID: self.user_id,
            WireFields.USER_ID_TYPE: self.user_id_type,
            WireFields.USER_ID_HASH_METHOD: self.user_id_hash_method,
        }

    def to_object(self) -> Dict[str, Any]:
        """Export the token as a plain dict in the explicit layout"""
        include_status = self.consent_model is ConsentModel.MATRIX_WITH_STATUS
        result = self._identity()
        result[WireFields.CONSENTS] = [
            consent.to_object(include_status=include_status) for consent in self.consents
        ]
        result[WireFields.VERSION] = self.version
        return result

    def to_json(self) -> str:
        return dump_json(self.to_object())

    def to_base64(self) -> str:
        """JSON-encode the token then base64-encode it"""
        return encode_base64(self.to_json())

    def to_compressed_object(self) -> Dict[str, Any]:
        """Export the token as a plain dict in the compressed layout"""
        result = self._identity()
        result[WireFields.VERSION] = self.version
        result.update(compress_consents(self.consents).model_dump())
        return result

    def to_compressed_json(self) -> str:
        return dump_json(self.to_compressed_object())

    def to_compressed_base64(self) -> str:
        return encode_base64(self.to_compressed_json())

    # -------------------------------------------------------------------------
    # Construction from decoded objects
    # -------------------------------------------------------------------------

    @classmethod
    def parse_object(cls, obj: Any) -> "ConsentToken":
        """
        Build a token from a decoded object in the explicit layout.

        The version tag is kept as found, a missing tag meaning legacy; legacy
        objects are not migrated, but must not carry purpose statuses.

        Raises:
            MalformedInputError: If the object is not a dict
            SchemaMismatchError: If any field or nested entity is invalid
        """
        if not isinstance(obj, dict):
            raise MalformedInputError("Token must be a JSON object")

        if detect_wire_shape(obj) is not WireShape.EXPLICIT:
            raise SchemaMismatchError("Expected explicit consents layout",
                                      field=WireFields.CONSENTS)

        version = read_version(obj)
        if not is_strict_int(version) or version not in SUPPORTED_VERSIONS:
            raise UnsupportedVersionError(version)

        identity = {
            name: validate_optional_string(obj.get(name), name)
            for name in WireFields.IDENTITY
        }

        raw_consents = obj[WireFields.CONSENTS]
        if not is_sequence(raw_consents):
            raise SchemaMismatchError("consents must be a list", field=WireFields.CONSENTS)
        if version == LEGACY_VERSION:
            check_legacy_consents(raw_consents)

        consents: List[Consent] = []
        purposes = set()
        for index, raw_consent in enumerate(raw_consents):
            consent = Consent.from_object(raw_consent)
            if consent is None:
                raise SchemaMismatchError("Invalid consent entry", field=WireFields.CONSENTS,
                                          details={"index": index})
            if consent.purpose in purposes:
                raise SchemaMismatchError("Duplicate consent purpose", field=WireFields.CONSENTS,
                                          details={"purpose": consent.purpose})
            purposes.add(consent.purpose)
            consents.append(consent)

        return cls(consents=consents, version=version, **identity)

    @classmethod
    def from_object(cls, obj: Any) -> Optional["ConsentToken"]:
        """Build a token from a decoded explicit object, None if invalid"""
        try:
            return cls.parse_object(obj)
        except TokenError as exc:
            logger.warning("Rejected consent token object", **exc.to_dict())
            return None
