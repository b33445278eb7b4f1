"""
Tests for the consent matrix compression codec
"""

import json

from consent_token.codec.compression import (
    CompressedMatrix,
    EnabledDisabled,
    compress_consents,
    expand_consents,
)
from consent_token.consent.models import Consent, Vendor
from consent_token.token import ConsentToken


def _matrix(purposes_enabled, purposes_disabled, vendors_enabled, vendors_disabled):
    return CompressedMatrix(
        purposes=EnabledDisabled(enabled=purposes_enabled, disabled=purposes_disabled),
        vendors=EnabledDisabled(enabled=vendors_enabled, disabled=vendors_disabled),
    )


def _statuses(consents):
    return {
        (consent.purpose, vendor.id): vendor.status
        for consent in consents
        for vendor in consent.vendors
    }


class TestCompressConsents:
    """Test encoding of explicit consents into enabled/disabled sets"""

    def setup_method(self):
        self.token = ConsentToken(
            issuer="didomi",
            user_id="user@domain.com",
            user_id_type="email",
        )

    def test_empty_token(self):
        assert self.token.to_compressed_json() == json.dumps({
            "issuer": "didomi",
            "user_id": "user@domain.com",
            "user_id_type": "email",
            "user_id_hash_method": None,
            "version": 2,
            "purposes": {"enabled": [], "disabled": []},
            "vendors": {"enabled": [], "disabled": []},
        }, separators=(",", ":"))

    def test_mixed_matrix(self):
        """All-true, all-false and mixed purposes"""
        for vendor in ("vendor", "vendor2", "vendor3"):
            self.token.set_consent_status(True, "purpose", vendor)
        for vendor in ("vendor", "vendor2", "vendor3"):
            self.token.set_consent_status(False, "purpose2", vendor)
        self.token.set_consent_status(True, "purpose3", "vendor")
        self.token.set_consent_status(False, "purpose3", "vendor2")
        self.token.set_consent_status(False, "purpose3", "vendor3")

        compressed = self.token.to_compressed_object()

        assert compressed["purposes"] == {
            "enabled": ["purpose", "purpose3"],
            "disabled": ["purpose2"],
        }
        assert compressed["vendors"] == {
            "enabled": ["vendor"],
            "disabled": ["vendor2", "vendor3"],
        }

    def test_purpose_without_vendors_is_disabled(self):
        matrix = compress_consents([Consent(purpose="empty")])

        assert matrix.purposes.disabled == ["empty"]
        assert matrix.purposes.enabled == []

    def test_unrecorded_status_enables_purpose(self):
        """A purpose is disabled only when every vendor is explicitly denied"""
        matrix = compress_consents([
            Consent(purpose="p", vendors=[Vendor(id="a", status=False), Vendor(id="b")]),
        ])

        assert matrix.purposes.enabled == ["p"]
        assert matrix.vendors.disabled == ["a", "b"]

    def test_vendor_missing_from_enabled_purpose_is_disabled(self):
        matrix = compress_consents([
            Consent(purpose="p1", vendors=[Vendor(id="a", status=True), Vendor(id="b", status=True)]),
            Consent(purpose="p2", vendors=[Vendor(id="a", status=True)]),
        ])

        assert matrix.vendors.enabled == ["a"]
        assert matrix.vendors.disabled == ["b"]

    def test_disabled_purposes_do_not_affect_vendors(self):
        matrix = compress_consents([
            Consent(purpose="p1", vendors=[Vendor(id="a", status=True)]),
            Consent(purpose="p2", vendors=[Vendor(id="a", status=False), Vendor(id="b", status=False)]),
        ])

        assert matrix.purposes.disabled == ["p2"]
        assert matrix.vendors.enabled == ["a"]
        assert matrix.vendors.disabled == ["b"]

    def test_vendor_without_enabled_purposes_is_enabled(self):
        """With no enabled purpose every vendor passes vacuously"""
        matrix = compress_consents([
            Consent(purpose="p", vendors=[Vendor(id="a", status=False)]),
        ])

        assert matrix.vendors.enabled == ["a"]

    def test_compression_is_lossy_for_asymmetric_matrix(self):
        consents = [
            Consent(purpose="p1", vendors=[Vendor(id="a", status=True), Vendor(id="b", status=False)]),
            Consent(purpose="p2", vendors=[Vendor(id="a", status=False), Vendor(id="b", status=True)]),
        ]

        restored = _statuses(expand_consents(compress_consents(consents)))

        assert not any(restored.values())


class TestExpandConsents:
    """Test rebuilding the explicit matrix from enabled/disabled sets"""

    def test_cross_product(self):
        consents = expand_consents(_matrix(["p1", "p2"], ["p3"], ["v1"], ["v2", "v3"]))
        statuses = _statuses(consents)

        assert len(statuses) == 9
        assert statuses[("p1", "v1")] is True
        assert statuses[("p2", "v1")] is True
        granted = [pair for pair, status in statuses.items() if status]
        assert sorted(granted) == [("p1", "v1"), ("p2", "v1")]

    def test_ordering(self):
        """Enabled purposes first, then disabled; same for vendors"""
        consents = expand_consents(_matrix(["purpose", "purpose3"], ["purpose2"],
                                           ["vendor"], ["vendor2", "vendor3"]))

        assert [c.purpose for c in consents] == ["purpose", "purpose3", "purpose2"]
        for consent in consents:
            assert [v.id for v in consent.vendors] == ["vendor", "vendor2", "vendor3"]

    def test_purpose_status_follows_purpose_set(self):
        consents = expand_consents(_matrix(["p1"], ["p2"], ["v1"], []))

        assert [c.status for c in consents] == [True, False]

    def test_id_in_both_sets_ends_disabled(self):
        consents = expand_consents(_matrix(["p"], ["p"], ["v"], ["v"]))

        assert len(consents) == 1
        assert consents[0].status is False
        assert consents[0].vendors[0].status is False


class TestRoundTrip:
    """Test that the canonical cross-product shape survives encode/decode"""

    def test_round_trip_preserves_classification(self):
        matrix = _matrix(["p1", "p2"], ["p3"], ["v1", "v2"], ["v3"])

        assert compress_consents(expand_consents(matrix)) == matrix

    def test_round_trip_through_token(self):
        token = ConsentToken(issuer="didomi")
        for purpose in ("p1", "p2"):
            token.set_consent_status(True, purpose, "v1")
            token.set_consent_status(False, purpose, "v2")
        token.set_consent_status(False, "p3", "v1")
        token.set_consent_status(False, "p3", "v2")

        restored = ConsentToken(issuer="didomi",
                                consents=expand_consents(compress_consents(token.consents)))

        assert restored.to_compressed_object() == token.to_compressed_object()
        assert _statuses(restored.consents) == _statuses(token.consents)
