"""Tests for QRDA domain models, options and fallback resolution."""

import pytest

from qrda_src.config import Config
from qrda_src.models import (
    AuthorInfo,
    CodedValue,
    GeneratedIdentifier,
    Identifier,
    MeasureInfo,
    OrganizationInfo,
    PartyAddress,
    PatientDemographics,
    QRDAOptions,
    TimeInterval,
    resolve_address,
    resolve_author,
    resolve_measure,
    resolve_organization,
)


class TestIdentifier:
    """Tests for instance identifiers."""

    def test_root_only(self):
        assert Identifier("2.16.840.1.113883.4.6").to_dict() == {"@_root": "2.16.840.1.113883.4.6"}

    def test_root_and_extension(self):
        assert Identifier("2.16.840.1.113883.4.6", "1250504853").to_dict() == {
            "@_root": "2.16.840.1.113883.4.6",
            "@_extension": "1250504853",
        }

    def test_uuid_root_allowed(self):
        Identifier("9a032d9c-3d9b-11e1-8634-00237d5bf174")

    @pytest.mark.parametrize("root", ["", "abc", "2.16..840", "3.1.2"])
    def test_invalid_root(self, root):
        with pytest.raises(ValueError):
            Identifier(root)

    def test_empty_extension_rejected(self):
        with pytest.raises(ValueError):
            Identifier("2.16.840.1.113883.4.6", "")

    def test_immutable(self):
        identifier = Identifier("2.16.840.1.113883.4.6")
        with pytest.raises(AttributeError):
            identifier.root = "1.2.3"


class TestGeneratedIdentifier:
    def test_opaque_token_root(self):
        assert GeneratedIdentifier("01HZX3J8Q4").to_dict() == {"@_root": "01HZX3J8Q4"}

    def test_empty_root_rejected(self):
        with pytest.raises(ValueError):
            GeneratedIdentifier("")


class TestCodedValue:
    def test_optional_fields_omitted(self):
        assert CodedValue("55188-7", "2.16.840.1.113883.6.1").to_dict() == {
            "@_code": "55188-7",
            "@_codeSystem": "2.16.840.1.113883.6.1",
        }


class TestTimeInterval:
    def test_unknown_bounds(self):
        assert TimeInterval.unknown().to_dict() == {
            "low": {"@_nullFlavor": "UNK"},
            "high": {"@_nullFlavor": "UNK"},
        }

    def test_known_bounds(self):
        assert TimeInterval("20230101", "20231231").to_dict() == {
            "low": {"@_value": "20230101"},
            "high": {"@_value": "20231231"},
        }


class TestQRDAOptions:
    """Tests for building options from the camelCase record."""

    def test_minimal(self):
        options = QRDAOptions.from_dict(
            {"reportingPeriod": {"start": "2023-01-01", "end": "2023-12-31"}}
        )
        assert options.reporting_period.start == "2023-01-01"
        assert options.reporting_period.end == "2023-12-31"
        assert options.category == "I"
        assert options.measure is None
        assert options.organization is None
        assert options.author is None

    def test_full(self):
        options = QRDAOptions.from_dict({
            "category": "I",
            "measure": {"id": "CMS2v13", "title": "Depression", "version": "v-1", "setId": "set-1"},
            "reportingPeriod": {"start": "2023-01-01", "end": "2023-12-31"},
            "organization": {
                "name": "Acme Clinic",
                "id": "999",
                "npi": "123",
                "address": {"line": "1 Elm", "city": "Austin", "state": "TX", "postalCode": "73301"},
            },
            "author": {"name": "Acme EHR", "npi": "555"},
        })
        assert options.measure == MeasureInfo("CMS2v13", "Depression", "v-1", "set-1")
        assert options.organization.address.postal_code == "73301"
        assert options.organization.address.country is None
        assert options.author == AuthorInfo("Acme EHR", "555")

    @pytest.mark.parametrize("data", [
        {},
        {"reportingPeriod": {"start": "2023-01-01"}},
        {"reportingPeriod": {"end": "2023-12-31"}},
    ])
    def test_reporting_period_required(self, data):
        with pytest.raises(ValueError):
            QRDAOptions.from_dict(data)


class TestResolvers:
    """Tests for field-by-field fallback resolution."""

    def test_measure_defaults(self):
        measure = resolve_measure(None)
        assert measure.id == Config.DEFAULT_MEASURE_ID
        assert measure.set_id == "9A032D9C-3D9B-11E1-8634-00237D5BF174"
        assert measure.version == "8A6D0454-8DF0-2D9F-018D-F6AEBA950637"
        assert measure.title.startswith("Percentage of visits")

    def test_measure_partial(self):
        measure = resolve_measure(MeasureInfo(set_id="my-set", title=""))
        assert measure.set_id == "my-set"
        assert measure.title == Config.DEFAULT_MEASURE_TITLE

    def test_author_defaults(self):
        assert resolve_author(None) == AuthorInfo("Medplum Test System", "1250504853")

    def test_author_supplied(self):
        assert resolve_author(AuthorInfo(npi="42")) == AuthorInfo("Medplum Test System", "42")

    def test_organization_defaults(self):
        organization = resolve_organization(None, "Fallback Org")
        assert organization.name == "Fallback Org"
        assert organization.id == "117323"
        assert organization.address is None

    def test_address_fills_missing_parts(self):
        address = resolve_address(PartyAddress(city="Austin"), Config.custodian_address())
        assert address == PartyAddress(
            line="202 Burlington Rd.",
            city="Austin",
            state="MA",
            postal_code="01730",
            country="US",
        )

    def test_address_without_input(self):
        assert resolve_address(None, Config.author_address()) == PartyAddress(
            "123 Happy St", "Sunnyvale", "CA", "95008", "US"
        )


class TestPatientDemographics:
    """Tests for Patient resource extraction."""

    def test_first_name_and_given_only(self, patient_resource):
        patient = PatientDemographics.from_resource(patient_resource)
        assert patient.name.to_dict() == {"given": "Jane", "family": "Smith"}

    def test_first_address_only(self, patient_resource):
        patient = PatientDemographics.from_resource(patient_resource)
        assert patient.address == PartyAddress("100 Main St", "Boston", "MA", "02115", "US")

    def test_first_phone_and_first_email(self, patient_resource):
        patient = PatientDemographics.from_resource(patient_resource)
        assert [t.value for t in patient.telecom] == ["tel:555-1234", "mailto:jane@example.com"]

    def test_email_without_phone(self):
        patient = PatientDemographics.from_resource({
            "resourceType": "Patient",
            "telecom": [{"system": "email", "value": "a@b.org"}],
        })
        assert [t.value for t in patient.telecom] == ["mailto:a@b.org"]

    def test_null_telecom(self):
        patient = PatientDemographics.from_resource({"resourceType": "Patient", "telecom": None})
        assert patient.telecom == ()

    def test_empty_patient(self):
        patient = PatientDemographics.from_resource({"resourceType": "Patient"})
        assert patient.name.to_dict() == {"given": "", "family": ""}
        assert patient.address is None
        assert patient.telecom == ()
        assert patient.birth_date is None
