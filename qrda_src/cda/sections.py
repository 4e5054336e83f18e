"""Section builders for the QRDA Category I structured body.

Each builder returns one ``{"section": {...}}`` component. The body always
holds the measure, reporting parameters and patient data sections, in that
order.
"""

import logging
from typing import Any, Callable

from ..models import (
    ATTR,
    Identifier,
    MeasureInfo,
    ReportingPeriod,
    TimeInterval,
)
from . import oids
from .templates import (
    LOINC_MEASURE_DOCUMENT,
    LOINC_PATIENT_DATA,
    LOINC_REPORTING_PARAMETERS,
    SNOMED_OBSERVATION_PARAMETERS,
    TemplateRole,
    render_template_ids,
)

logger = logging.getLogger(__name__)


def build_measure_section(
    measure: MeasureInfo,
    id_generator: Callable[[], str],
) -> dict[str, Any]:
    """Build the measure section.

    Args:
        measure: Fully resolved measure (see resolve_measure)
        id_generator: Unique id source, called once for the organizer id

    Returns:
        Section component dict
    """
    logger.debug(f"Building measure section for {measure.id} (set {measure.set_id})")
    return {
        "section": {
            "templateId": render_template_ids(TemplateRole.MEASURE_SECTION),
            "code": LOINC_MEASURE_DOCUMENT.to_dict(),
            "title": "Measure Section",
            "text": _measure_narrative(measure),
            "entry": {
                "organizer": {
                    f"{ATTR}classCode": "CLUSTER",
                    f"{ATTR}moodCode": "EVN",
                    "templateId": render_template_ids(TemplateRole.MEASURE_REFERENCE),
                    "id": Identifier(oids.OID_PATIENT_ID, id_generator()).to_dict(),
                    "statusCode": {f"{ATTR}code": "completed"},
                    "reference": {
                        f"{ATTR}typeCode": "REFR",
                        "externalDocument": {
                            f"{ATTR}classCode": "DOC",
                            f"{ATTR}moodCode": "EVN",
                            "id": Identifier(
                                oids.OID_ECQM_VERSION_SPECIFIC_ID, measure.version
                            ).to_dict(),
                            "text": measure.title,
                            "setId": {f"{ATTR}root": measure.set_id},
                        },
                    },
                },
            },
        },
    }


def _measure_narrative(measure: MeasureInfo) -> dict[str, Any]:
    """Human-readable table of the measure title and version id."""
    return {
        "table": {
            f"{ATTR}border": "1",
            f"{ATTR}width": "100%",
            "thead": {
                "tr": {"th": ["eMeasure Title", "Version specific identifier"]},
            },
            "tbody": {
                "tr": {"td": [measure.title, measure.version]},
            },
        },
    }


def build_reporting_parameters_section(
    period: ReportingPeriod,
    id_generator: Callable[[], str],
    timestamp_formatter: Callable[[str], str],
) -> dict[str, Any]:
    """Build the reporting parameters section.

    Errors from timestamp_formatter propagate unchanged.
    """
    interval = TimeInterval(
        low=timestamp_formatter(period.start),
        high=timestamp_formatter(period.end),
    )
    return {
        "section": {
            "templateId": render_template_ids(TemplateRole.REPORTING_PARAMETERS_SECTION),
            "code": LOINC_REPORTING_PARAMETERS.to_dict(),
            "title": "Reporting Parameters",
            "text": "",
            "entry": {
                f"{ATTR}typeCode": "DRIV",
                "act": {
                    f"{ATTR}classCode": "ACT",
                    f"{ATTR}moodCode": "EVN",
                    "templateId": render_template_ids(TemplateRole.REPORTING_PARAMETERS_ACT),
                    "id": Identifier(oids.OID_PATIENT_ID, id_generator()).to_dict(),
                    "code": SNOMED_OBSERVATION_PARAMETERS.to_dict(),
                    "effectiveTime": interval.to_dict(),
                },
            },
        },
    }


def build_patient_data_section() -> dict[str, Any]:
    """Build the patient data section.

    Encounter, intervention, procedure and payer entries are not extracted
    yet, so the section is emitted with an empty entry list.
    """
    entries: list[dict[str, Any]] = []
    return {
        "section": {
            "templateId": render_template_ids(TemplateRole.PATIENT_DATA_SECTION),
            "code": LOINC_PATIENT_DATA.to_dict(),
            "title": "Patient Data",
            "text": "",
            "entry": entries,
        },
    }
