"""
Consent data models for the Consent Token package
Vendor and per-purpose consent record structures
"""

from enum import Enum
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field

from ..constants import WILDCARD_SCOPE, WILDCARD_VENDOR, WireFields
from ..utils.validators import (
    is_non_empty_string,
    is_sequence,
    is_strict_bool,
    unique_strings,
)


class ConsentModel(str, Enum):
    """Schema generation of the consent list"""
    MATRIX_ONLY = "matrix_only"                  # v1: vendor statuses only
    MATRIX_WITH_STATUS = "matrix_with_status"    # v2: plus purpose roll-up


class Vendor(BaseModel):
    """A third party for which consent is recorded under one purpose"""
    id: str = Field(..., description="Vendor identifier, '*' for all vendors")
    scopes: List[str] = Field(default_factory=list)
    status: Optional[bool] = Field(default=None, description="None when unrecorded")

    def add_scope(self, scope_id: Optional[str]) -> None:
        """Add a scope; empty or already present scopes are ignored"""
        if not scope_id:
            return

        if scope_id in self.scopes:
            return

        self.scopes.append(scope_id)

    def has_scope(self, scope_id: Optional[str], match_wildcard: bool = True) -> bool:
        """
        Check whether consent covers a scope.

        Args:
            scope_id: Scope to look for
            match_wildcard: Let the '*' scope stand in for any scope

        Returns:
            True if the scope (or, when allowed, the wildcard) is present
        """
        if match_wildcard and WILDCARD_SCOPE in self.scopes:
            return True

        return scope_id in self.scopes

    @property
    def is_wildcard(self) -> bool:
        return self.id == WILDCARD_VENDOR

    def to_object(self) -> Dict[str, Any]:
        """Export as a plain dict in wire field order"""
        result: Dict[str, Any] = {WireFields.ID: self.id}
        if self.status is not None:
            result[WireFields.STATUS] = self.status
        if self.scopes or self.status is None:
            result[WireFields.SCOPES] = list(self.scopes)
        return result

    @classmethod
    def from_object(cls, obj: Any) -> Optional["Vendor"]:
        """
        Build a Vendor from a decoded JSON object.

        Returns None instead of a partially populated vendor when the id is
        missing or empty, a scope entry is not a string, or the status is
        not a boolean. A non-sequence ``scopes`` value defaults to empty.
        """
        if not isinstance(obj, dict):
            return None

        vendor_id = obj.get(WireFields.ID)
        if not is_non_empty_string(vendor_id):
            return None

        scopes: List[str] = []
        raw_scopes = obj.get(WireFields.SCOPES)
        if is_sequence(raw_scopes):
            parsed = unique_strings(raw_scopes)
            if parsed is None:
                return None
            scopes = parsed

        status = obj.get(WireFields.STATUS)
        if status is not None and not is_strict_bool(status):
            return None

        return cls(id=vendor_id, scopes=scopes, status=status)


class Consent(BaseModel):
    """Consent decisions of every vendor for one purpose"""
    purpose: str = Field(..., description="Purpose identifier")
    status: Optional[bool] = Field(default=None, description="Purpose-level roll-up")
    vendors: List[Vendor] = Field(default_factory=list)

    def get_vendor(self, vendor_id: str) -> Optional[Vendor]:
        """Get vendor by exact id, without wildcard expansion"""
        for vendor in self.vendors:
            if vendor.id == vendor_id:
                return vendor
        return None

    def get_wildcard_vendor(self) -> Optional[Vendor]:
        return self.get_vendor(WILDCARD_VENDOR)

    def add_vendor(self, vendor_id: str, scope_id: Optional[str] = None) -> Optional[Vendor]:
        """Find or create a vendor, optionally adding a scope to it"""
        if not vendor_id:
            return None

        vendor = self.get_vendor(vendor_id)
        if vendor is None:
            vendor = Vendor(id=vendor_id)
            self.vendors.append(vendor)

        if scope_id:
            vendor.add_scope(scope_id)

        return vendor

    def refresh_status(self) -> Optional[bool]:
        """
        Recompute the purpose-level status from the wildcard vendor.

        The stored status is left untouched when there is no wildcard vendor
        or when its status was never recorded.
        """
        wildcard = self.get_wildcard_vendor()
        if wildcard is not None and wildcard.status is not None:
            self.status = wildcard.status
        return self.status

    def to_object(self, include_status: bool = True) -> Dict[str, Any]:
        """Export as a plain dict; v1 output omits the purpose status"""
        result: Dict[str, Any] = {WireFields.PURPOSE: self.purpose}
        if include_status and self.status is not None:
            result[WireFields.STATUS] = self.status
        result[WireFields.VENDORS] = [vendor.to_object() for vendor in self.vendors]
        return result

    @classmethod
    def from_object(cls, obj: Any) -> Optional["Consent"]:
        """
        Build a Consent from a decoded JSON object.

        A single invalid vendor entry, or two entries sharing an id,
        invalidates the whole consent.
        """
        if not isinstance(obj, dict):
            return None

        purpose = obj.get(WireFields.PURPOSE)
        if not is_non_empty_string(purpose):
            return None

        status = obj.get(WireFields.STATUS)
        if status is not None and not is_strict_bool(status):
            return None

        vendors: List[Vendor] = []
        raw_vendors = obj.get(WireFields.VENDORS)
        if is_sequence(raw_vendors):
            seen = set()
            for raw_vendor in raw_vendors:
                vendor = Vendor.from_object(raw_vendor)
                if vendor is None or vendor.id in seen:
                    return None
                seen.add(vendor.id)
                vendors.append(vendor)

        return cls(purpose=purpose, status=status, vendors=vendors)
