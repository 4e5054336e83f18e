"""Tests for FHIR bundle queries."""

from qrda_src.bundle import FHIRBundle


class TestFHIRBundle:

    def test_find_first(self, bundle, patient_resource):
        assert FHIRBundle(bundle).find_resource("Patient") is patient_resource

    def test_find_missing(self, bundle):
        assert FHIRBundle(bundle).find_resource("Procedure") is None

    def test_find_all_in_order(self):
        fhir_bundle = FHIRBundle({
            "resourceType": "Bundle",
            "entry": [
                {"resource": {"resourceType": "Encounter", "id": "a"}},
                {"resource": {"resourceType": "Patient", "id": "p"}},
                {"resource": {"resourceType": "Encounter", "id": "b"}},
                {"fullUrl": "urn:uuid:no-resource"},
            ],
        })
        assert [r["id"] for r in fhir_bundle.find_resources_by_type("Encounter")] == ["a", "b"]
        assert fhir_bundle.find_resources_by_type("Coverage") == []
        assert len(fhir_bundle) == 3

    def test_not_a_bundle(self):
        fhir_bundle = FHIRBundle({"resourceType": "Patient", "id": "p"})
        assert fhir_bundle.find_resource("Patient") is None

    def test_empty(self):
        assert FHIRBundle(None).find_resources_by_type("Patient") == []
        assert FHIRBundle({"resourceType": "Bundle"}).find_resource("Patient") is None
