"""Template identifier sets and fixed vocabulary for QRDA Category I.

Template sets are ordered general-to-specific and must be emitted in full,
in this order. Versioned templates keep every release a consumer may match on.
"""

from enum import Enum
from types import MappingProxyType

from ..models import CodedValue, TemplateId
from . import oids


class TemplateRole(Enum):
    """Structural roles that carry a template identifier set."""
    DOCUMENT_HEADER = "document_header"
    MEASURE_SECTION = "measure_section"
    REPORTING_PARAMETERS_SECTION = "reporting_parameters_section"
    PATIENT_DATA_SECTION = "patient_data_section"
    MEASURE_REFERENCE = "measure_reference"
    REPORTING_PARAMETERS_ACT = "reporting_parameters_act"


QRDA_CATEGORY_I_TEMPLATE_IDS = (
    TemplateId(oids.OID_US_REALM_CDA_HEADER, "2015-08-01"),
    TemplateId(oids.OID_QRDA_CATEGORY_I, "2017-08-01"),
    TemplateId(oids.OID_QDM_BASED_QRDA, "2021-08-01"),
    TemplateId(oids.OID_CMS_QRDA_CATEGORY_I, "2022-02-01"),
)

QRDA_MEASURE_SECTION_TEMPLATE_IDS = (
    TemplateId(oids.OID_MEASURE_SECTION),
    TemplateId(oids.OID_MEASURE_SECTION_QDM),
)

QRDA_REPORTING_PARAMETERS_TEMPLATE_IDS = (
    TemplateId(oids.OID_REPORTING_PARAMETERS_SECTION),
    TemplateId(oids.OID_REPORTING_PARAMETERS_SECTION_CMS, "2016-03-01"),
)

QRDA_PATIENT_DATA_SECTION_TEMPLATE_IDS = (
    TemplateId(oids.OID_PATIENT_DATA_SECTION),
    TemplateId(oids.OID_PATIENT_DATA_SECTION_QDM_V8, "2021-08-01"),
    TemplateId(oids.OID_PATIENT_DATA_SECTION_QDM_V8_CMS, "2022-02-01"),
)

QRDA_MEASURE_REFERENCE_TEMPLATE_IDS = (
    TemplateId(oids.OID_MEASURE_REFERENCE),
    TemplateId(oids.OID_EMEASURE_REFERENCE_QDM),
)

QRDA_REPORTING_PARAMETERS_ACT_TEMPLATE_IDS = (
    TemplateId(oids.OID_REPORTING_PARAMETERS_ACT),
    TemplateId(oids.OID_REPORTING_PARAMETERS_ACT_CMS, "2016-03-01"),
)

TEMPLATE_REGISTRY = MappingProxyType({
    TemplateRole.DOCUMENT_HEADER: QRDA_CATEGORY_I_TEMPLATE_IDS,
    TemplateRole.MEASURE_SECTION: QRDA_MEASURE_SECTION_TEMPLATE_IDS,
    TemplateRole.REPORTING_PARAMETERS_SECTION: QRDA_REPORTING_PARAMETERS_TEMPLATE_IDS,
    TemplateRole.PATIENT_DATA_SECTION: QRDA_PATIENT_DATA_SECTION_TEMPLATE_IDS,
    TemplateRole.MEASURE_REFERENCE: QRDA_MEASURE_REFERENCE_TEMPLATE_IDS,
    TemplateRole.REPORTING_PARAMETERS_ACT: QRDA_REPORTING_PARAMETERS_ACT_TEMPLATE_IDS,
})


def template_ids(role: TemplateRole) -> tuple[TemplateId, ...]:
    """Get the ordered template identifier set for a structural role."""
    return TEMPLATE_REGISTRY[role]


def render_template_ids(role: TemplateRole) -> list[dict[str, str]]:
    """Render a role's template set as a fresh list of templateId dicts."""
    return [template.to_dict() for template in template_ids(role)]


# ============================================================
# Fixed vocabulary
# ============================================================

# LOINC document and section codes
LOINC_QUALITY_MEASURE_REPORT = CodedValue(
    "55182-0", oids.OID_LOINC, "LOINC", "Quality Measure Report"
)
LOINC_MEASURE_DOCUMENT = CodedValue("55186-1", oids.OID_LOINC)
LOINC_REPORTING_PARAMETERS = CodedValue("55187-9", oids.OID_LOINC)
LOINC_PATIENT_DATA = CodedValue("55188-7", oids.OID_LOINC)

# SNOMED CT
SNOMED_OBSERVATION_PARAMETERS = CodedValue(
    "252116004", oids.OID_SNOMED, display_name="Observation Parameters"
)

CONFIDENTIALITY_NORMAL = CodedValue("N", oids.OID_CONFIDENTIALITY_CODE)

# Race/ethnicity are not read from the patient record yet
DEFAULT_RACE = CodedValue("2106-3", oids.OID_CDC_RACE_ETHNICITY, "CDCREC")  # White
DEFAULT_ETHNICITY = CodedValue("2135-2", oids.OID_CDC_RACE_ETHNICITY, "CDCREC")  # Hispanic or Latino

PROVIDER_TAXONOMY_INTERNAL_MEDICINE = CodedValue(
    "207Q00000X", oids.OID_PROVIDER_TAXONOMY, "Healthcare Provider Taxonomy (HIPAA)"
)

# FHIR administrative gender -> HL7 AdministrativeGender.
# "unknown" and missing genders are not mapped and render nullFlavor="UNK".
GENDER_CODES = MappingProxyType({
    "male": "M",
    "female": "F",
    "other": "UN",
})
