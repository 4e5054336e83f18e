"""Shared fixtures for QRDA tests."""

from datetime import datetime, timezone

import pytest

from qrda_src.models import QRDAOptions, ReportingPeriod


class SequentialIds:
    """Deterministic id generator producing UUID-shaped ids."""

    def __init__(self):
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        return f"00000000-0000-4000-8000-{self.calls:012d}"


@pytest.fixture
def id_generator():
    return SequentialIds()


@pytest.fixture
def now():
    return datetime(2024, 3, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def patient_resource():
    return {
        "resourceType": "Patient",
        "id": "patient-123",
        "name": [
            {"given": ["Jane", "Marie"], "family": "Smith"},
            {"given": ["Janie"], "family": "Smyth"},
        ],
        "gender": "female",
        "birthDate": "1980-05-17",
        "address": [
            {
                "line": ["100 Main St", "Apt 4"],
                "city": "Boston",
                "state": "MA",
                "postalCode": "02115",
            },
            {"line": ["1 Other Rd"], "city": "Salem"},
        ],
        "telecom": [
            {"system": "phone", "value": "555-1234"},
            {"system": "email", "value": "jane@example.com"},
            {"system": "phone", "value": "555-9999"},
        ],
    }


@pytest.fixture
def bundle(patient_resource):
    return {
        "resourceType": "Bundle",
        "type": "collection",
        "entry": [
            {"resource": {"resourceType": "Encounter", "id": "enc-1"}},
            {"resource": patient_resource},
        ],
    }


@pytest.fixture
def options():
    return QRDAOptions(
        reporting_period=ReportingPeriod(start="2023-01-01", end="2023-12-31"),
    )
