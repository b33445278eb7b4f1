"""
Compression codec for consent matrices

A purpose x vendor matrix of booleans is re-expressed as two enabled/disabled
pairs, one over purposes and one over vendors. Decoding rebuilds the matrix
as the cross product ``status = purpose_enabled and vendor_enabled``.

Encoding is a projection: it is exact for matrices of that cross-product
form and discards any other per-cell asymmetry.
"""

from typing import Dict, Iterable, List

import structlog
from pydantic import BaseModel, StrictStr, field_validator

from ..consent.models import Consent

logger = structlog.get_logger(__name__)


class EnabledDisabled(BaseModel):
    """One enabled/disabled pair of id lists"""
    enabled: List[StrictStr]
    disabled: List[StrictStr]

    model_config = {"extra": "forbid"}

    @field_validator("enabled", "disabled")
    @classmethod
    def _no_empty_ids(cls, ids: List[str]) -> List[str]:
        if any(not id_ for id_ in ids):
            raise ValueError("ids must be non-empty strings")
        return ids


class CompressedMatrix(BaseModel):
    """Compressed form of a consent list"""
    purposes: EnabledDisabled
    vendors: EnabledDisabled

    @classmethod
    def empty(cls) -> "CompressedMatrix":
        return cls(
            purposes=EnabledDisabled(enabled=[], disabled=[]),
            vendors=EnabledDisabled(enabled=[], disabled=[]),
        )


def _is_purpose_disabled(consent: Consent) -> bool:
    # An empty vendor list leaves the purpose disabled
    return all(vendor.status is False for vendor in consent.vendors)


def _vendor_ids(consents: Iterable[Consent]) -> List[str]:
    """Distinct vendor ids in order of first appearance"""
    seen: Dict[str, None] = {}
    for consent in consents:
        for vendor in consent.vendors:
            seen.setdefault(vendor.id, None)
    return list(seen)


def compress_consents(consents: List[Consent]) -> CompressedMatrix:
    """
    Encode a consent list into purpose and vendor enabled/disabled sets.

    A purpose is disabled when every vendor under it is explicitly denied.
    A vendor is enabled when it is explicitly granted under every enabled
    purpose; disabled purposes play no part in classifying vendors.

    Args:
        consents: Consents carrying per-vendor statuses

    Returns:
        The compressed matrix
    """
    matrix = CompressedMatrix.empty()
    enabled_consents: List[Consent] = []

    for consent in consents:
        if _is_purpose_disabled(consent):
            matrix.purposes.disabled.append(consent.purpose)
        else:
            matrix.purposes.enabled.append(consent.purpose)
            enabled_consents.append(consent)

    for vendor_id in _vendor_ids(consents):
        granted_everywhere = True
        for consent in enabled_consents:
            vendor = consent.get_vendor(vendor_id)
            if vendor is None or vendor.status is not True:
                granted_everywhere = False
                break

        if granted_everywhere:
            matrix.vendors.enabled.append(vendor_id)
        else:
            matrix.vendors.disabled.append(vendor_id)

    logger.debug(
        "Compressed consent matrix",
        enabled_purposes=len(matrix.purposes.enabled),
        disabled_purposes=len(matrix.purposes.disabled),
        enabled_vendors=len(matrix.vendors.enabled),
        disabled_vendors=len(matrix.vendors.disabled),
    )
    return matrix


def expand_consents(matrix: CompressedMatrix) -> List[Consent]:
    """
    Rebuild the explicit consent list from a compressed matrix.

    Enabled purposes come first, then disabled ones, each in listed order.
    Every purpose receives every vendor, enabled vendors first. An id listed
    as both enabled and disabled ends up disabled, since the later write
    wins.
    """
    consents: List[Consent] = []
    by_purpose: Dict[str, Consent] = {}

    purposes = [(p, True) for p in matrix.purposes.enabled]
    purposes += [(p, False) for p in matrix.purposes.disabled]
    vendors = [(v, True) for v in matrix.vendors.enabled]
    vendors += [(v, False) for v in matrix.vendors.disabled]

    for purpose, purpose_enabled in purposes:
        consent = by_purpose.get(purpose)
        if consent is None:
            consent = Consent(purpose=purpose)
            by_purpose[purpose] = consent
            consents.append(consent)
        consent.status = purpose_enabled

        for vendor_id, vendor_enabled in vendors:
            vendor = consent.add_vendor(vendor_id)
            if vendor is not None:
                vendor.status = purpose_enabled and vendor_enabled

    return consents
