"""Domain models for QRDA document generation.

All models are frozen dataclasses. Value types (identifiers, codes, time
intervals, demographics) render themselves into the dict tree consumed by
the renderer, where keys prefixed with "@_" are XML attributes.

The caller-facing options record also lives here, together with the
resolvers that apply the configured fallback values once per builder.
"""

import re
from dataclasses import dataclass, field, replace
from typing import Any

from .config import config

ATTR = "@_"

_OID_PATTERN = re.compile(r"^[0-2](\.(0|[1-9][0-9]*))+$")
_UUID_PATTERN = re.compile(r"^[0-9A-Fa-f]{8}(-[0-9A-Fa-f]{4}){3}-[0-9A-Fa-f]{12}$")

NULL_FLAVOR_UNKNOWN = "UNK"


# ============================================================
# Value types
# ============================================================

@dataclass(frozen=True)
class Identifier:
    """Instance identifier (II): an OID or UUID root plus optional extension."""
    root: str
    extension: str | None = None

    def __post_init__(self) -> None:
        if not self.root:
            raise ValueError("Identifier root must not be empty")
        if not (_OID_PATTERN.match(self.root) or _UUID_PATTERN.match(self.root)):
            raise ValueError(f"Identifier root is not an OID or UUID: {self.root!r}")
        if self.extension is not None and not self.extension:
            raise ValueError("Identifier extension must not be empty when present")

    def to_dict(self) -> dict[str, str]:
        result = {f"{ATTR}root": self.root}
        if self.extension is not None:
            result[f"{ATTR}extension"] = self.extension
        return result


@dataclass(frozen=True)
class GeneratedIdentifier(Identifier):
    """Identifier whose root is an opaque token from the id generator."""

    def __post_init__(self) -> None:
        if not self.root:
            raise ValueError("Generated identifier root must not be empty")
        if self.extension is not None and not self.extension:
            raise ValueError("Identifier extension must not be empty when present")


# Template identifiers share the II shape
TemplateId = Identifier


@dataclass(frozen=True)
class CodedValue:
    """Reference into an external controlled vocabulary."""
    code: str
    code_system: str | None = None
    code_system_name: str | None = None
    display_name: str | None = None

    def to_dict(self) -> dict[str, str]:
        result = {f"{ATTR}code": self.code}
        if self.code_system:
            result[f"{ATTR}codeSystem"] = self.code_system
        if self.code_system_name:
            result[f"{ATTR}codeSystemName"] = self.code_system_name
        if self.display_name:
            result[f"{ATTR}displayName"] = self.display_name
        return result


@dataclass(frozen=True)
class TimeInterval:
    """IVL_TS with canonicalized bounds; a missing bound renders as UNK."""
    low: str | None = None
    high: str | None = None

    @classmethod
    def unknown(cls) -> "TimeInterval":
        return cls()

    @staticmethod
    def _bound(value: str | None) -> dict[str, str]:
        if value is None:
            return {f"{ATTR}nullFlavor": NULL_FLAVOR_UNKNOWN}
        return {f"{ATTR}value": value}

    def to_dict(self) -> dict[str, Any]:
        return {"low": self._bound(self.low), "high": self._bound(self.high)}


@dataclass(frozen=True)
class PartyAddress:
    """Postal address (AD). All parts optional."""
    line: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None

    @classmethod
    def from_dict(cls, data: dict | None) -> "PartyAddress | None":
        if data is None:
            return None
        return cls(
            line=data.get("line"),
            city=data.get("city"),
            state=data.get("state"),
            postal_code=data.get("postalCode", data.get("postal_code")),
            country=data.get("country"),
        )

    def to_dict(self, use: str | None = None) -> dict[str, str]:
        result = {}
        if use:
            result[f"{ATTR}use"] = use
        result.update({
            "streetAddressLine": self.line or "",
            "city": self.city or "",
            "state": self.state or "",
            "postalCode": self.postal_code or "",
            "country": self.country or "",
        })
        return result


@dataclass(frozen=True)
class PartyTelecom:
    """Telecommunication address (TEL) already carrying its URL scheme."""
    value: str
    use: str = "HP"

    def to_dict(self) -> dict[str, str]:
        return {f"{ATTR}use": self.use, f"{ATTR}value": self.value}


@dataclass(frozen=True)
class PersonName:
    """Person name (PN) reduced to one given and one family part."""
    given: str = ""
    family: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"given": self.given, "family": self.family}


# ============================================================
# Caller options
# ============================================================

@dataclass(frozen=True)
class ReportingPeriod:
    """Measurement period; both bounds are ISO-like timestamps."""
    start: str
    end: str


@dataclass(frozen=True)
class MeasureInfo:
    """Quality measure being reported."""
    id: str | None = None
    title: str | None = None
    version: str | None = None  # version-specific identifier
    set_id: str | None = None   # version-independent GUID


@dataclass(frozen=True)
class OrganizationInfo:
    """Reporting organization."""
    name: str | None = None
    id: str | None = None   # CMS Certification Number
    npi: str | None = None
    address: PartyAddress | None = None


@dataclass(frozen=True)
class AuthorInfo:
    """Authoring device/system."""
    name: str | None = None
    npi: str | None = None


@dataclass(frozen=True)
class QRDAOptions:
    """Options for assembling a QRDA document."""
    reporting_period: ReportingPeriod
    category: str = "I"
    measure: MeasureInfo | None = None
    organization: OrganizationInfo | None = None
    author: AuthorInfo | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "QRDAOptions":
        """Build options from the camelCase options record.

        Args:
            data: Dict with "reportingPeriod" (required) and optional
                "category", "measure", "organization", "author" groups.

        Returns:
            QRDAOptions

        Raises:
            ValueError: If the reporting period is missing or incomplete.
        """
        period = data.get("reportingPeriod") or data.get("reporting_period")
        if not period or not period.get("start") or not period.get("end"):
            raise ValueError("reportingPeriod with start and end is required")

        measure = None
        if (m := data.get("measure")) is not None:
            measure = MeasureInfo(
                id=m.get("id"),
                title=m.get("title"),
                version=m.get("version"),
                set_id=m.get("setId", m.get("set_id")),
            )

        organization = None
        if (o := data.get("organization")) is not None:
            organization = OrganizationInfo(
                name=o.get("name"),
                id=o.get("id"),
                npi=o.get("npi"),
                address=PartyAddress.from_dict(o.get("address")),
            )

        author = None
        if (a := data.get("author")) is not None:
            author = AuthorInfo(name=a.get("name"), npi=a.get("npi"))

        return cls(
            reporting_period=ReportingPeriod(start=period["start"], end=period["end"]),
            category=data.get("category") or "I",
            measure=measure,
            organization=organization,
            author=author,
        )


# ============================================================
# Fallback resolution
# ============================================================

def _supplied(value: str | None, fallback: str) -> str:
    """Return the supplied value unless it is missing or empty."""
    return value or fallback


def resolve_measure(measure: MeasureInfo | None) -> MeasureInfo:
    """Fill every measure field, falling back to the reference measure."""
    measure = measure or MeasureInfo()
    return MeasureInfo(
        id=_supplied(measure.id, config.DEFAULT_MEASURE_ID),
        title=_supplied(measure.title, config.DEFAULT_MEASURE_TITLE),
        version=_supplied(measure.version, config.DEFAULT_MEASURE_VERSION_ID),
        set_id=_supplied(measure.set_id, config.DEFAULT_MEASURE_SET_ID),
    )


def resolve_author(author: AuthorInfo | None) -> AuthorInfo:
    author = author or AuthorInfo()
    return AuthorInfo(
        name=_supplied(author.name, config.DEFAULT_AUTHOR_NAME),
        npi=_supplied(author.npi, config.DEFAULT_AUTHOR_NPI),
    )


def resolve_organization(
    organization: OrganizationInfo | None,
    default_name: str,
) -> OrganizationInfo:
    """Fill organization name and id.

    The address is left as supplied; each header block resolves it against
    its own fallback with resolve_address().
    """
    organization = organization or OrganizationInfo()
    return replace(
        organization,
        name=_supplied(organization.name, default_name),
        id=_supplied(organization.id, config.DEFAULT_ORGANIZATION_ID),
    )


def resolve_address(address: PartyAddress | None, fallback: dict[str, str]) -> PartyAddress:
    """Fill each address part independently from the fallback address."""
    address = address or PartyAddress()
    return PartyAddress(
        line=_supplied(address.line, fallback["line"]),
        city=_supplied(address.city, fallback["city"]),
        state=_supplied(address.state, fallback["state"]),
        postal_code=_supplied(address.postal_code, fallback["postal_code"]),
        country=_supplied(address.country, fallback["country"]),
    )


@dataclass(frozen=True)
class PatientDemographics:
    """Demographics taken from the subject Patient record."""
    id: str | None = None
    name: PersonName = field(default_factory=PersonName)
    address: PartyAddress | None = None
    telecom: tuple[PartyTelecom, ...] = ()
    gender: str | None = None
    birth_date: str | None = None  # YYYY-MM-DD

    @classmethod
    def from_resource(cls, resource: dict) -> "PatientDemographics":
        """Extract demographics from a FHIR Patient resource.

        Only the first name entry (first given name) and the first address are
        used. The first phone and the first email are kept independently.
        """
        name = PersonName()
        if names := resource.get("name", []):
            name_obj = names[0]
            given = name_obj.get("given") or [""]
            name = PersonName(given=given[0] or "", family=name_obj.get("family") or "")

        address = None
        if addresses := resource.get("address", []):
            addr_obj = addresses[0]
            lines = addr_obj.get("line") or [""]
            address = PartyAddress(
                line=lines[0] or "",
                city=addr_obj.get("city") or "",
                state=addr_obj.get("state") or "",
                postal_code=addr_obj.get("postalCode") or "",
                country=addr_obj.get("country") or config.DEFAULT_COUNTRY,
            )

        telecom = []
        contacts = resource.get("telecom") or []
        phone = next((t for t in contacts if t.get("system") == "phone"), None)
        email = next((t for t in contacts if t.get("system") == "email"), None)
        if phone:
            telecom.append(PartyTelecom(value=f"tel:{phone.get('value', '')}"))
        if email:
            telecom.append(PartyTelecom(value=f"mailto:{email.get('value', '')}"))

        return cls(
            id=resource.get("id"),
            name=name,
            address=address,
            telecom=tuple(telecom),
            gender=resource.get("gender"),
            birth_date=resource.get("birthDate"),
        )
