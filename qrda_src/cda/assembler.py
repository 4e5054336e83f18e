"""QRDA Category I document assembly.

Builds the document tree for a single patient from a FHIR bundle and the
caller's reporting options. The tree is made of plain dicts and lists; keys
prefixed with "@_" are XML attributes and everything else is an element.

Based on: HL7 CDA R2 Implementation Guide: Quality Reporting Document
Architecture - Category I (QRDA I), with the CMS QRDA I implementation guide
template versions.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Callable

from ..bundle import FHIRBundle
from ..config import config
from ..exceptions import MissingRequiredResource
from ..models import (
    ATTR,
    NULL_FLAVOR_UNKNOWN,
    CodedValue,
    GeneratedIdentifier,
    Identifier,
    PartyTelecom,
    PatientDemographics,
    PersonName,
    QRDAOptions,
    TimeInterval,
    resolve_address,
    resolve_author,
    resolve_measure,
    resolve_organization,
)
from ..utils import canonicalize_timestamp, generate_id
from . import oids
from .sections import (
    build_measure_section,
    build_patient_data_section,
    build_reporting_parameters_section,
)
from .templates import (
    CONFIDENTIALITY_NORMAL,
    DEFAULT_ETHNICITY,
    DEFAULT_RACE,
    GENDER_CODES,
    LOINC_QUALITY_MEASURE_REPORT,
    PROVIDER_TAXONOMY_INTERNAL_MEDICINE,
    TemplateRole,
    render_template_ids,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentProfile:
    """Header constants for one QRDA category."""
    category: str
    header_role: TemplateRole
    code: CodedValue
    title: str


QRDA_CATEGORY_I_PROFILE = DocumentProfile(
    category="I",
    header_role=TemplateRole.DOCUMENT_HEADER,
    code=LOINC_QUALITY_MEASURE_REPORT,
    title="QRDA Incidence Report",
)

# Only Category I is modeled
DOCUMENT_PROFILES = MappingProxyType({
    "I": QRDA_CATEGORY_I_PROFILE,
})


class QRDAAssembler:
    """Assembles a QRDA Category I document tree for one patient."""

    def __init__(
        self,
        bundle: FHIRBundle | dict,
        options: QRDAOptions,
        id_generator: Callable[[], str] | None = None,
        timestamp_formatter: Callable[[str], str] | None = None,
    ):
        """Initialize the assembler.

        Args:
            bundle: FHIR Bundle (dict or FHIRBundle) holding the subject Patient
            options: Reporting options
            id_generator: Unique id source (default: UUID4)
            timestamp_formatter: ISO timestamp -> CDA TS (default: canonicalize_timestamp)

        Raises:
            MissingRequiredResource: If the bundle holds no Patient
        """
        self.bundle = bundle if isinstance(bundle, FHIRBundle) else FHIRBundle(bundle)
        self.options = options
        self.generate_id = id_generator or generate_id
        self.format_timestamp = timestamp_formatter or canonicalize_timestamp

        resource = self.bundle.find_resource("Patient")
        if resource is None:
            raise MissingRequiredResource("Patient")
        self.patient = PatientDemographics.from_resource(resource)

        self.profile = DOCUMENT_PROFILES.get(options.category)
        if self.profile is None:
            logger.warning(
                f"QRDA category {options.category!r} is not supported, "
                "generating Category I"
            )
            self.profile = QRDA_CATEGORY_I_PROFILE

    def assemble(self, now: datetime | None = None) -> dict[str, Any]:
        """Assemble the document.

        Args:
            now: Document creation time (default: current UTC time). Used for
                the document, author and legal authenticator timestamps.

        Returns:
            ClinicalDocument tree
        """
        now = now or datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        created = self.format_timestamp(now.isoformat())
        logger.debug(f"Assembling QRDA document for patient {self.patient.id} at {created}")

        return {
            "realmCode": {f"{ATTR}code": "US"},
            "typeId": Identifier(oids.OID_HL7_REGISTERED_MODELS, "POCD_HD000040").to_dict(),
            "templateId": render_template_ids(self.profile.header_role),
            "id": [GeneratedIdentifier(self.generate_id()).to_dict()],
            "code": self.profile.code.to_dict(),
            "title": self.profile.title,
            "effectiveTime": [{f"{ATTR}value": created}],
            "confidentialityCode": CONFIDENTIALITY_NORMAL.to_dict(),
            "languageCode": {f"{ATTR}code": "en"},
            "recordTarget": self._build_record_target(),
            "author": self._build_author(created),
            "custodian": self._build_custodian(),
            "legalAuthenticator": self._build_legal_authenticator(created),
            "participant": self._build_participant(),
            "documentationOf": self._build_documentation_of(),
            "component": self._build_structured_body(),
        }

    # -------------------------------------------------------------------------
    # Header participants
    # -------------------------------------------------------------------------

    def _build_record_target(self) -> dict[str, Any]:
        """Build the record target from patient demographics."""
        patient = self.patient

        patient_role: dict[str, Any] = {
            "id": Identifier(oids.OID_PATIENT_ID, patient.id or None).to_dict(),
        }
        if patient.address is not None:
            patient_role["addr"] = patient.address.to_dict(use="HP")
        patient_role["telecom"] = [t.to_dict() for t in patient.telecom]
        patient_role["patient"] = {
            "name": patient.name.to_dict(),
            "administrativeGenderCode": self._gender_code(patient.gender),
            "birthTime": self._birth_time(patient.birth_date),
            # TODO: read race/ethnicity from the US Core extensions
            "raceCode": DEFAULT_RACE.to_dict(),
            "ethnicGroupCode": DEFAULT_ETHNICITY.to_dict(),
            "languageCommunication": {
                "templateId": [
                    {
                        f"{ATTR}root": oids.OID_HITSP_C83_LANGUAGE,
                        f"{ATTR}assigningAuthorityName": "HITSP/C83",
                    },
                    {
                        f"{ATTR}root": oids.OID_IHE_PCC_LANGUAGE,
                        f"{ATTR}assigningAuthorityName": "IHE/PCC",
                    },
                ],
                "languageCode": {f"{ATTR}code": "eng"},
            },
        }
        return {"patientRole": patient_role}

    @staticmethod
    def _gender_code(gender: str | None) -> dict[str, str]:
        code = GENDER_CODES.get(gender or "")
        if code is None:
            return {f"{ATTR}nullFlavor": NULL_FLAVOR_UNKNOWN}
        return CodedValue(code, oids.OID_ADMINISTRATIVE_GENDER, "AdministrativeGender").to_dict()

    def _birth_time(self, birth_date: str | None) -> dict[str, str]:
        if not birth_date:
            return {f"{ATTR}nullFlavor": NULL_FLAVOR_UNKNOWN}
        if len(birth_date) < len("YYYY-MM-DD"):
            # Reduced-precision dates (YYYY, YYYY-MM) carry no time of day
            return {f"{ATTR}value": self.format_timestamp(birth_date)}
        # Birth dates are pinned to midnight UTC
        return {f"{ATTR}value": self.format_timestamp(f"{birth_date}T00:00:00.000Z")}

    def _build_author(self, created: str) -> dict[str, Any]:
        """Build the author block (the reporting EHR device)."""
        author = resolve_author(self.options.author)
        organization = self.options.organization
        address = resolve_address(organization.address if organization else None, config.author_address())

        return {
            "time": {f"{ATTR}value": created},
            "assignedAuthor": {
                "id": Identifier(oids.OID_NPI, author.npi).to_dict(),
                "addr": address.to_dict(),
                "telecom": PartyTelecom(config.DEFAULT_TELECOM, use="WP").to_dict(),
                "assignedAuthoringDevice": {
                    "manufacturerModelName": author.name,
                    "softwareName": author.name,
                },
            },
        }

    def _build_custodian(self) -> dict[str, Any]:
        """Build the custodian (reporting organization) block."""
        organization = resolve_organization(self.options.organization, config.DEFAULT_CUSTODIAN_NAME)
        address = resolve_address(organization.address, config.custodian_address())

        return {
            "assignedCustodian": {
                "representedCustodianOrganization": {
                    "id": Identifier(oids.OID_CCN, organization.id).to_dict(),
                    "name": organization.name,
                    "telecom": PartyTelecom(config.DEFAULT_TELECOM, use="WP").to_dict(),
                    "addr": address.to_dict(use="HP"),
                },
            },
        }

    def _build_legal_authenticator(self, created: str) -> dict[str, Any]:
        """Build the legal authenticator block."""
        organization = resolve_organization(self.options.organization, config.DEFAULT_ORGANIZATION_NAME)
        address = resolve_address(organization.address, config.author_address())

        return {
            "time": {f"{ATTR}value": created},
            "signatureCode": {f"{ATTR}code": "S"},
            "assignedEntity": {
                "id": GeneratedIdentifier(self.generate_id()).to_dict(),
                "addr": address.to_dict(),
                "telecom": PartyTelecom(config.DEFAULT_TELECOM, use="WP").to_dict(),
                "assignedPerson": {
                    "name": PersonName(
                        config.LEGAL_AUTHENTICATOR_GIVEN, config.LEGAL_AUTHENTICATOR_FAMILY
                    ).to_dict(),
                },
                "representedOrganization": {
                    "id": Identifier(oids.OID_ORGANIZATION_ID).to_dict(),
                    "name": organization.name,
                },
            },
        }

    def _build_participant(self) -> list[dict[str, Any]]:
        """Build the device participant carrying the EHR certification number."""
        return [
            {
                f"{ATTR}typeCode": "DEV",
                "associatedEntity": {
                    f"{ATTR}classCode": "RGPR",
                    "id": Identifier(
                        oids.OID_CMS_EHR_CERTIFICATION_NUMBER, config.EHR_CERTIFICATION_NUMBER
                    ).to_dict(),
                },
            },
        ]

    def _build_documentation_of(self) -> dict[str, Any]:
        """Build the care provision service event and its performer."""
        author = resolve_author(self.options.author)
        organization = resolve_organization(self.options.organization, config.DEFAULT_CUSTODIAN_NAME)
        address = resolve_address(organization.address, config.custodian_address()).to_dict(use="HP")

        return {
            f"{ATTR}typeCode": "DOC",
            "serviceEvent": {
                f"{ATTR}classCode": "PCPR",
                "effectiveTime": TimeInterval.unknown().to_dict(),
                "performer": {
                    f"{ATTR}typeCode": "PRF",
                    "time": TimeInterval.unknown().to_dict(),
                    "assignedEntity": {
                        "id": [
                            Identifier(oids.OID_NPI, author.npi).to_dict(),
                            Identifier(oids.OID_CCN, organization.id).to_dict(),
                        ],
                        "code": PROVIDER_TAXONOMY_INTERNAL_MEDICINE.to_dict(),
                        "addr": address,
                        "assignedPerson": {
                            "name": PersonName(config.PERFORMER_GIVEN, config.PERFORMER_FAMILY).to_dict(),
                        },
                        "representedOrganization": {
                            "id": Identifier(oids.OID_TIN, config.DEFAULT_ORGANIZATION_TIN).to_dict(),
                            "addr": dict(address),
                        },
                    },
                },
            },
        }

    # -------------------------------------------------------------------------
    # Body
    # -------------------------------------------------------------------------

    def _build_structured_body(self) -> dict[str, Any]:
        """Build the structured body: measure, reporting parameters, patient data."""
        return {
            "structuredBody": {
                "component": [
                    build_measure_section(resolve_measure(self.options.measure), self.generate_id),
                    build_reporting_parameters_section(
                        self.options.reporting_period, self.generate_id, self.format_timestamp
                    ),
                    build_patient_data_section(),
                ],
            },
        }


def assemble(
    bundle: FHIRBundle | dict,
    options: QRDAOptions,
    *,
    id_generator: Callable[[], str] | None = None,
    timestamp_formatter: Callable[[str], str] | None = None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Assemble a QRDA Category I document.

    Args:
        bundle: FHIR Bundle holding the subject Patient
        options: Reporting options
        id_generator: Unique id source (default: UUID4)
        timestamp_formatter: ISO timestamp -> CDA TS
        now: Document creation time (default: current UTC time)

    Returns:
        ClinicalDocument tree

    Raises:
        MissingRequiredResource: If the bundle holds no Patient
    """
    assembler = QRDAAssembler(
        bundle,
        options,
        id_generator=id_generator,
        timestamp_formatter=timestamp_formatter,
    )
    return assembler.assemble(now=now)
