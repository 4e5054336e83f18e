"""Identifier generation and CDA timestamp formatting."""

import uuid
from datetime import datetime, timezone

_DATE_FORMATS = (
    ("%Y-%m-%d", "%Y%m%d"),
    ("%Y-%m", "%Y%m"),
    ("%Y", "%Y"),
)


def generate_id() -> str:
    """Generate a UUID for document and entry identifiers."""
    return str(uuid.uuid4())


def canonicalize_timestamp(value: str) -> str:
    """Convert an ISO 8601 date or date-time to a CDA TS string.

    Dates map to YYYYMMDD, reduced-precision dates to YYYYMM or YYYY.
    Date-times map to YYYYMMDDHHMMSS followed by the UTC offset (+HHMM);
    naive values and "Z" are treated as UTC. Fractional seconds are dropped.

    Args:
        value: ISO 8601 date ("2023-01-01") or date-time
            ("2023-01-01T08:30:00.000Z").

    Returns:
        CDA timestamp string.

    Raises:
        ValueError: If the value is not a parseable date or date-time.
    """
    if not isinstance(value, str) or not value:
        raise ValueError(f"Invalid timestamp: {value!r}")

    if "T" not in value:
        # FHIR dates may be reduced to YYYY or YYYY-MM
        for pattern, output in _DATE_FORMATS:
            try:
                return datetime.strptime(value, pattern).strftime(output)
            except ValueError:
                continue
        raise ValueError(f"Invalid date: {value!r}")

    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.strftime("%Y%m%d%H%M%S%z")

