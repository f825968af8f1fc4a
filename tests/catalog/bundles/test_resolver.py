"""
Tests for catalog.bundles.resolver
"""

import json

import pytest

from catalog.bundles.resolver import BundleResolver, ResolvedBundle
from catalog.errors import BundleResolutionError, SchemaError
from catalog.validation.schema_validator import parse_bundle_definition


class TestBundleResolver:
    def test_doctor_a1_resolves_three_packs(self, doctor_snapshot, bundle_definition):
        resolved = BundleResolver(doctor_snapshot).resolve(bundle_definition)
        assert isinstance(resolved, ResolvedBundle)
        assert [i.id for i in resolved.items] == [
            "doctor-appointment",
            "doctor-pharmacy",
            "doctor-symptoms",
        ]
        assert all(i.kind == "pack" and i.level == "A1" for i in resolved.items)
        assert resolved.total_minutes == 30
        assert resolved.bundle_id == "doctor-a1"

    def test_accepts_parsed_definition(self, doctor_snapshot, bundle_definition):
        definition = parse_bundle_definition(bundle_definition)
        resolved = BundleResolver(doctor_snapshot).resolve(definition)
        assert len(resolved.items) == 3

    def test_kind_first_ordering(self, doctor_snapshot, bundle_definition):
        bundle_definition["includeKinds"] = ["exam", "drill", "pack"]
        bundle_definition["ordering"]["by"] = ["kind", "title"]
        resolved = BundleResolver(doctor_snapshot).resolve(bundle_definition)
        assert [i.kind for i in resolved.items] == ["pack", "pack", "pack", "drill", "exam"]

    def test_unstable_definition_rejected(self, doctor_snapshot, bundle_definition):
        bundle_definition["ordering"]["stable"] = False
        with pytest.raises(SchemaError) as exc_info:
            BundleResolver(doctor_snapshot).resolve(bundle_definition)
        assert [i.field for i in exc_info.value.issues] == ["ordering.stable"]
        assert exc_info.value.document == "doctor-a1"

    def test_no_match(self, doctor_snapshot, bundle_definition):
        bundle_definition["filters"] = {"scenario": "doctor", "levels": ["C2"]}
        with pytest.raises(BundleResolutionError) as exc_info:
            BundleResolver(doctor_snapshot).resolve(bundle_definition)
        assert exc_info.value.bundle_id == "doctor-a1"
        assert "match no items" in str(exc_info.value)

    def test_unknown_workspace(self, doctor_snapshot, bundle_definition):
        bundle_definition["workspace"] = "fr"
        with pytest.raises(BundleResolutionError, match="workspace 'fr'"):
            BundleResolver(doctor_snapshot).resolve(bundle_definition)

    def test_to_dict(self, doctor_snapshot, bundle_definition):
        data = BundleResolver(doctor_snapshot).resolve(bundle_definition).to_dict()
        assert data["bundleId"] == "doctor-a1"
        assert data["filters"] == {"scenario": "doctor", "levels": ["A1"]}
        assert data["ordering"] == ["level", "title"]
        assert data["totalItems"] == 3
        assert data["items"][0]["url"] == "/v1/packs/doctor-appointment.json"

    def test_byte_identical_output(self, doctor_snapshot, bundle_definition):
        resolver = BundleResolver(doctor_snapshot)
        first = resolver.resolve(bundle_definition).to_json()
        second = resolver.resolve(json.loads(json.dumps(bundle_definition))).to_json()
        assert first == second
        assert json.loads(first)["totalMinutes"] == 30
