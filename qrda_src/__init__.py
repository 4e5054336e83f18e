"""QRDA Category I quality reporting document generation from FHIR bundles."""

from .bundle import FHIRBundle
from .cda import QRDAGenerator, assemble, render_xml
from .exceptions import MissingRequiredResource, QRDAError
from .models import QRDAOptions

__all__ = [
    "FHIRBundle",
    "MissingRequiredResource",
    "QRDAError",
    "QRDAGenerator",
    "QRDAOptions",
    "assemble",
    "render_xml",
]
