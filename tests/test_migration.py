"""
Tests for v1 to v2 token migration
"""

import copy

from consent_token.constants import CURRENT_VERSION, LEGACY_VERSION
from consent_token.migration import is_legacy, migrate


class TestMigrationGate:
    """Only legacy objects are migrated"""

    def test_current_version_is_not_migrated(self):
        assert migrate({"consents": [], "version": CURRENT_VERSION}) is None

    def test_unknown_version_is_not_migrated(self):
        assert migrate({"consents": [], "version": 7}) is None
        assert migrate({"consents": [], "version": None}) is None
        assert migrate({"consents": [], "version": "1"}) is None
        assert migrate({"consents": [], "version": True}) is None

    def test_non_object_is_not_migrated(self):
        assert migrate(None) is None
        assert migrate([]) is None

    def test_ambiguous_layout_is_not_migrated(self):
        assert migrate({"version": LEGACY_VERSION}) is None

    def test_is_legacy(self):
        assert is_legacy({"version": LEGACY_VERSION})
        assert not is_legacy({"version": CURRENT_VERSION})

    def test_missing_version_is_legacy(self):
        """Unversioned tokens are read as v1"""
        assert is_legacy({"consents": []})
        assert migrate({"consents": []}) == {"consents": [], "version": CURRENT_VERSION}

    def test_legacy_consent_with_status_is_not_migrated(self):
        """A v1 consent cannot carry a purpose-level status"""
        legacy = {
            "consents": [{"purpose": "cookies", "status": False,
                          "vendors": [{"id": "vendor", "status": True}]}],
            "version": LEGACY_VERSION,
        }

        assert migrate(legacy) is None


class TestExplicitMigration:
    """Explicit legacy objects gain a purpose-level status"""

    def setup_method(self):
        self.legacy = {
            "issuer": "didomi",
            "consents": [
                {"purpose": "cookies", "vendors": [{"id": "*", "status": True}]},
                {"purpose": "analytics", "vendors": [
                    {"id": "vendor", "status": True},
                    {"id": "*", "status": False},
                ]},
                {"purpose": "marketing", "vendors": [{"id": "vendor", "status": True}]},
                {"purpose": "social", "vendors": [{"id": "*", "scopes": ["*"]}]},
            ],
            "version": LEGACY_VERSION,
        }

    def test_version_is_bumped(self):
        migrated = migrate(self.legacy)

        assert migrated is not None
        assert migrated["version"] == CURRENT_VERSION

    def test_status_copied_from_wildcard_vendor(self):
        consents = migrate(self.legacy)["consents"]

        assert consents[0]["status"] is True
        assert consents[1]["status"] is False

    def test_no_wildcard_vendor_leaves_status_unset(self):
        consents = migrate(self.legacy)["consents"]

        assert "status" not in consents[2]

    def test_unrecorded_wildcard_status_leaves_status_unset(self):
        consents = migrate(self.legacy)["consents"]

        assert "status" not in consents[3]

    def test_input_is_not_mutated(self):
        original = copy.deepcopy(self.legacy)
        migrate(self.legacy)

        assert self.legacy == original


class TestCompressedMigration:
    """Compressed legacy objects only get a version bump"""

    def test_version_bump_only(self):
        legacy = {
            "issuer": "didomi",
            "version": LEGACY_VERSION,
            "purposes": {"enabled": ["p"], "disabled": []},
            "vendors": {"enabled": ["v"], "disabled": []},
        }

        migrated = migrate(legacy)

        assert migrated == dict(legacy, version=CURRENT_VERSION)

    def test_unversioned_compressed_object(self):
        unversioned = {
            "purposes": {"enabled": ["p"], "disabled": []},
            "vendors": {"enabled": ["v"], "disabled": []},
        }

        assert migrate(unversioned) == dict(unversioned, version=CURRENT_VERSION)
