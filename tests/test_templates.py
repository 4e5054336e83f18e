"""Tests for the QRDA template registry and vocabulary."""

import pytest

from qrda_src.cda import oids
from qrda_src.cda.templates import (
    QRDA_CATEGORY_I_TEMPLATE_IDS,
    TEMPLATE_REGISTRY,
    TemplateRole,
    render_template_ids,
    template_ids,
)
from qrda_src.models import TemplateId


class TestTemplateRegistry:
    """Tests for template identifier sets."""

    def test_every_role_registered(self):
        assert set(TEMPLATE_REGISTRY) == set(TemplateRole)

    def test_document_header_set_in_order(self):
        assert template_ids(TemplateRole.DOCUMENT_HEADER) == (
            TemplateId(oids.OID_US_REALM_CDA_HEADER, "2015-08-01"),
            TemplateId(oids.OID_QRDA_CATEGORY_I, "2017-08-01"),
            TemplateId(oids.OID_QDM_BASED_QRDA, "2021-08-01"),
            TemplateId(oids.OID_CMS_QRDA_CATEGORY_I, "2022-02-01"),
        )

    @pytest.mark.parametrize("role,size", [
        (TemplateRole.DOCUMENT_HEADER, 4),
        (TemplateRole.MEASURE_SECTION, 2),
        (TemplateRole.REPORTING_PARAMETERS_SECTION, 2),
        (TemplateRole.PATIENT_DATA_SECTION, 3),
        (TemplateRole.MEASURE_REFERENCE, 2),
        (TemplateRole.REPORTING_PARAMETERS_ACT, 2),
    ])
    def test_set_sizes(self, role, size):
        assert len(template_ids(role)) == size

    def test_patient_data_keeps_all_versions(self):
        rendered = render_template_ids(TemplateRole.PATIENT_DATA_SECTION)
        assert rendered == [
            {"@_root": "2.16.840.1.113883.10.20.17.2.4"},
            {"@_root": "2.16.840.1.113883.10.20.24.2.1", "@_extension": "2021-08-01"},
            {"@_root": "2.16.840.1.113883.10.20.24.2.1.1", "@_extension": "2022-02-01"},
        ]

    def test_repeated_lookup_is_deep_equal(self):
        for role in TemplateRole:
            assert template_ids(role) == template_ids(role)
            assert render_template_ids(role) == render_template_ids(role)

    def test_rendered_list_is_a_fresh_copy(self):
        rendered = render_template_ids(TemplateRole.DOCUMENT_HEADER)
        rendered.clear()
        assert len(render_template_ids(TemplateRole.DOCUMENT_HEADER)) == 4
        assert len(QRDA_CATEGORY_I_TEMPLATE_IDS) == 4

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            TEMPLATE_REGISTRY[TemplateRole.DOCUMENT_HEADER] = ()
