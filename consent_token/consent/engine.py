"""
Consent resolution engine for the Consent Token package
Answers consent queries against an in-memory token and records decisions
"""

from typing import Optional, TYPE_CHECKING
import structlog

from .models import Consent, Vendor

if TYPE_CHECKING:
    from ..token import ConsentToken

logger = structlog.get_logger(__name__)


class ConsentEngine:
    """Core consent resolution engine"""

    def _resolve_vendor(self, consent: Consent, vendor_id: str) -> Optional[Vendor]:
        """Exact vendor match first, then the wildcard vendor"""
        vendor = consent.get_vendor(vendor_id)
        if vendor is None:
            vendor = consent.get_wildcard_vendor()
        return vendor

    def has_consent(self, token: "ConsentToken", purpose: str,
                    vendor_id: Optional[str] = None,
                    scope_id: Optional[str] = None) -> bool:
        """
        Check whether the token holds consent for a purpose/vendor/scope.

        Without a vendor the presence of the purpose is enough and the scope
        is not looked at. Empty ids count as not supplied. Vendor lookup falls back to the wildcard vendor,
        but the final scope check never lets the '*' scope match.

        Args:
            token: Token to query
            purpose: Purpose identifier
            vendor_id: Optional vendor identifier
            scope_id: Optional scope identifier, only used with a vendor

        Returns:
            True if consent holds
        """
        consent = token.get_consent(purpose)
        if consent is None:
            return False

        if not vendor_id:
            return True

        vendor = self._resolve_vendor(consent, vendor_id)
        if vendor is None:
            return False

        if not scope_id:
            return True

        return vendor.has_scope(scope_id, match_wildcard=False)

    def get_consent_status(self, token: "ConsentToken", purpose: str,
                           vendor_id: str) -> Optional[bool]:
        """
        Get the recorded status for a purpose/vendor.

        Returns True if consent was given, False if it was denied and None
        if the token has no information for that pair.
        """
        consent = token.get_consent(purpose)
        if consent is None:
            return None

        vendor = self._resolve_vendor(consent, vendor_id)
        if vendor is None:
            return None

        return vendor.status

    def get_purpose_status(self, token: "ConsentToken", purpose: str) -> Optional[bool]:
        """Get the stored purpose-level roll-up, None if absent"""
        consent = token.get_consent(purpose)
        return consent.status if consent is not None else None

    def set_consent_status(self, token: "ConsentToken", status: bool,
                           purpose: str, vendor_id: str) -> None:
        """Record a decision for a purpose/vendor, overwriting any previous one"""
        if not purpose or not vendor_id:
            return

        vendor = token.add_consent(purpose).add_vendor(vendor_id)
        vendor.status = status
        logger.debug("Set consent status", purpose=purpose, vendor_id=vendor_id,
                     status=status)


# Global consent engine instance
_consent_engine: Optional[ConsentEngine] = None


def get_consent_engine() -> ConsentEngine:
    """Get the global consent engine instance"""
    global _consent_engine
    if _consent_engine is None:
        _consent_engine = ConsentEngine()
    return _consent_engine


# Convenience functions
def has_consent(token: "ConsentToken", purpose: str,
                vendor_id: Optional[str] = None,
                scope_id: Optional[str] = None) -> bool:
    """Check whether the token holds consent for a purpose/vendor/scope"""
    return get_consent_engine().has_consent(token, purpose, vendor_id, scope_id)


def get_consent_status(token: "ConsentToken", purpose: str,
                       vendor_id: str) -> Optional[bool]:
    """Get the recorded status for a purpose/vendor"""
    return get_consent_engine().get_consent_status(token, purpose, vendor_id)


def get_purpose_status(token: "ConsentToken", purpose: str) -> Optional[bool]:
    """Get the stored purpose-level roll-up"""
    return get_consent_engine().get_purpose_status(token, purpose)


def set_consent_status(token: "ConsentToken", status: bool,
                       purpose: str, vendor_id: str) -> None:
    """Record a decision for a purpose/vendor"""
    get_consent_engine().set_consent_status(token, status, purpose, vendor_id)
