"""
Consent module for the Consent Token package
Vendor/consent records and the consent resolution engine
"""

from .models import ConsentModel, Vendor, Consent
from .engine import (
    ConsentEngine,
    get_consent_engine,
    has_consent,
    get_consent_status,
    get_purpose_status,
    set_consent_status,
)

__all__ = [
    "ConsentModel",
    "Vendor",
    "Consent",
    "ConsentEngine",
    "get_consent_engine",
    "has_consent",
    "get_consent_status",
    "get_purpose_status",
    "set_consent_status",
]
