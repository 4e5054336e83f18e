"""Configuration for QRDA document generation.

Fallback values used when the caller omits author, organization or measure
details. Every value can be overridden from the environment or a .env file.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Find and load .env file
_env_candidates = [
    Path(__file__).parent.parent / ".env",
    Path(__file__).parent.parent / ".env.template",
]

for env_path in _env_candidates:
    if env_path.exists():
        load_dotenv(env_path)
        break


class Config:
    """QRDA generation configuration."""

    # --- Author (reporting device) ---
    DEFAULT_AUTHOR_NPI: str = os.getenv("QRDA_DEFAULT_AUTHOR_NPI", "1250504853")
    DEFAULT_AUTHOR_NAME: str = os.getenv("QRDA_DEFAULT_AUTHOR_NAME", "Medplum Test System")

    # --- Organization ---
    # Custodian name and the legal authenticator's organization name differ
    DEFAULT_CUSTODIAN_NAME: str = os.getenv("QRDA_DEFAULT_CUSTODIAN_NAME", "Medplum Test Deck")
    DEFAULT_ORGANIZATION_NAME: str = os.getenv("QRDA_DEFAULT_ORGANIZATION_NAME", "Medplum Test System")
    DEFAULT_ORGANIZATION_ID: str = os.getenv("QRDA_DEFAULT_ORGANIZATION_ID", "117323")  # CCN
    DEFAULT_ORGANIZATION_TIN: str = os.getenv("QRDA_DEFAULT_ORGANIZATION_TIN", "916854671")
    DEFAULT_TELECOM: str = os.getenv("QRDA_DEFAULT_TELECOM", "tel:(781)271-3000")

    # Address printed on the author and legal authenticator blocks
    AUTHOR_ADDRESS_LINE: str = os.getenv("QRDA_AUTHOR_ADDRESS_LINE", "123 Happy St")
    AUTHOR_ADDRESS_CITY: str = os.getenv("QRDA_AUTHOR_ADDRESS_CITY", "Sunnyvale")
    AUTHOR_ADDRESS_STATE: str = os.getenv("QRDA_AUTHOR_ADDRESS_STATE", "CA")
    AUTHOR_ADDRESS_POSTAL_CODE: str = os.getenv("QRDA_AUTHOR_ADDRESS_POSTAL_CODE", "95008")

    # Address printed on the custodian and performer blocks
    CUSTODIAN_ADDRESS_LINE: str = os.getenv("QRDA_CUSTODIAN_ADDRESS_LINE", "202 Burlington Rd.")
    CUSTODIAN_ADDRESS_CITY: str = os.getenv("QRDA_CUSTODIAN_ADDRESS_CITY", "Bedford")
    CUSTODIAN_ADDRESS_STATE: str = os.getenv("QRDA_CUSTODIAN_ADDRESS_STATE", "MA")
    CUSTODIAN_ADDRESS_POSTAL_CODE: str = os.getenv("QRDA_CUSTODIAN_ADDRESS_POSTAL_CODE", "01730")

    DEFAULT_COUNTRY: str = os.getenv("QRDA_DEFAULT_COUNTRY", "US")

    # --- People named on the header ---
    LEGAL_AUTHENTICATOR_GIVEN: str = os.getenv("QRDA_LEGAL_AUTHENTICATOR_GIVEN", "John")
    LEGAL_AUTHENTICATOR_FAMILY: str = os.getenv("QRDA_LEGAL_AUTHENTICATOR_FAMILY", "Doe")
    PERFORMER_GIVEN: str = os.getenv("QRDA_PERFORMER_GIVEN", "Sylvia")
    PERFORMER_FAMILY: str = os.getenv("QRDA_PERFORMER_FAMILY", "Joseph")

    # --- Certified EHR ---
    EHR_CERTIFICATION_NUMBER: str = os.getenv("QRDA_EHR_CERTIFICATION_NUMBER", "0015CPV4ZTB4WBU")

    # --- Reference measure (CMS68v14) ---
    # https://ecqi.healthit.gov/sites/default/files/ecqm/measures/CMS68v14.html
    DEFAULT_MEASURE_ID: str = os.getenv("QRDA_DEFAULT_MEASURE_ID", "CMS68v14")
    DEFAULT_MEASURE_VERSION_ID: str = os.getenv(
        "QRDA_DEFAULT_MEASURE_VERSION_ID",
        "8A6D0454-8DF0-2D9F-018D-F6AEBA950637",
    )
    DEFAULT_MEASURE_SET_ID: str = os.getenv(
        "QRDA_DEFAULT_MEASURE_SET_ID",
        "9A032D9C-3D9B-11E1-8634-00237D5BF174",
    )
    DEFAULT_MEASURE_TITLE: str = os.getenv(
        "QRDA_DEFAULT_MEASURE_TITLE",
        "Percentage of visits for which the eligible clinician attests to documenting "
        "a list of current medications using all immediate resources available on the "
        "date of the encounter",
    )

    @classmethod
    def author_address(cls) -> dict[str, str]:
        """Fallback address for the author and legal authenticator."""
        return {
            "line": cls.AUTHOR_ADDRESS_LINE,
            "city": cls.AUTHOR_ADDRESS_CITY,
            "state": cls.AUTHOR_ADDRESS_STATE,
            "postal_code": cls.AUTHOR_ADDRESS_POSTAL_CODE,
            "country": cls.DEFAULT_COUNTRY,
        }

    @classmethod
    def custodian_address(cls) -> dict[str, str]:
        """Fallback address for the custodian and service event performer."""
        return {
            "line": cls.CUSTODIAN_ADDRESS_LINE,
            "city": cls.CUSTODIAN_ADDRESS_CITY,
            "state": cls.CUSTODIAN_ADDRESS_STATE,
            "postal_code": cls.CUSTODIAN_ADDRESS_POSTAL_CODE,
            "country": cls.DEFAULT_COUNTRY,
        }


# Module-level convenience instance
config = Config()
