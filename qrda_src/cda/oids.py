"""Object identifiers used in QRDA Category I documents."""

# HL7
OID_HL7_REGISTERED_MODELS = "2.16.840.1.113883.1.3"
OID_CONFIDENTIALITY_CODE = "2.16.840.1.113883.5.25"
OID_ADMINISTRATIVE_GENDER = "2.16.840.1.113883.5.1"

# Vocabularies
OID_LOINC = "2.16.840.1.113883.6.1"
OID_SNOMED = "2.16.840.1.113883.6.96"
OID_CDC_RACE_ETHNICITY = "2.16.840.1.113883.6.238"
OID_PROVIDER_TAXONOMY = "2.16.840.1.113883.6.101"

# Identifier authorities
OID_NPI = "2.16.840.1.113883.4.6"
OID_TIN = "2.16.840.1.113883.4.2"
OID_CCN = "2.16.840.1.113883.4.336"
OID_ECQM_VERSION_SPECIFIC_ID = "2.16.840.1.113883.4.738"
OID_CMS_EHR_CERTIFICATION_NUMBER = "2.16.840.1.113883.3.2074.1"
OID_PATIENT_ID = "1.3.6.1.4.1.115"
OID_ORGANIZATION_ID = "2.16.840.1.113883.19.5"

# Document templates
OID_US_REALM_CDA_HEADER = "2.16.840.1.113883.10.20.22.1.1"
OID_QRDA_CATEGORY_I = "2.16.840.1.113883.10.20.24.1.1"
OID_QDM_BASED_QRDA = "2.16.840.1.113883.10.20.24.1.2"
OID_CMS_QRDA_CATEGORY_I = "2.16.840.1.113883.10.20.24.1.3"

# Section templates
OID_MEASURE_SECTION = "2.16.840.1.113883.10.20.24.2.2"
OID_MEASURE_SECTION_QDM = "2.16.840.1.113883.10.20.24.2.3"
OID_REPORTING_PARAMETERS_SECTION = "2.16.840.1.113883.10.20.17.2.1"
OID_REPORTING_PARAMETERS_SECTION_CMS = "2.16.840.1.113883.10.20.17.2.1.1"
OID_PATIENT_DATA_SECTION = "2.16.840.1.113883.10.20.17.2.4"
OID_PATIENT_DATA_SECTION_QDM_V8 = "2.16.840.1.113883.10.20.24.2.1"
OID_PATIENT_DATA_SECTION_QDM_V8_CMS = "2.16.840.1.113883.10.20.24.2.1.1"

# Entry templates
OID_MEASURE_REFERENCE = "2.16.840.1.113883.10.20.24.3.98"
OID_EMEASURE_REFERENCE_QDM = "2.16.840.1.113883.10.20.24.3.97"
OID_REPORTING_PARAMETERS_ACT = "2.16.840.1.113883.10.20.17.3.8"
OID_REPORTING_PARAMETERS_ACT_CMS = "2.16.840.1.113883.10.20.17.3.8.1"

# Language communication templates
OID_HITSP_C83_LANGUAGE = "2.16.840.1.113883.3.88.11.83.2"
OID_IHE_PCC_LANGUAGE = "1.3.6.1.4.1.19376.1.5.3.1.2.1"
