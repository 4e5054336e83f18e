"""QRDA Category I XML generator.

Combines document assembly and XML rendering for one or more patient
bundles reported under the same options.
"""

import logging
from datetime import datetime
from typing import Any, Callable

from ..bundle import FHIRBundle
from ..models import QRDAOptions
from .assembler import assemble
from .renderer import render_xml

logger = logging.getLogger(__name__)


class QRDAGenerator:
    """Generates QRDA Category I XML documents."""

    def __init__(
        self,
        options: QRDAOptions,
        id_generator: Callable[[], str] | None = None,
        timestamp_formatter: Callable[[str], str] | None = None,
    ):
        """Initialize the generator.

        Args:
            options: Reporting options shared by every document
            id_generator: Unique id source (optional)
            timestamp_formatter: ISO timestamp -> CDA TS (optional)
        """
        self.options = options
        self.id_generator = id_generator
        self.timestamp_formatter = timestamp_formatter

    def generate_document(
        self,
        bundle: FHIRBundle | dict,
        now: datetime | None = None,
    ) -> dict[str, Any]:
        """Assemble the document tree without rendering it."""
        return assemble(
            bundle,
            self.options,
            id_generator=self.id_generator,
            timestamp_formatter=self.timestamp_formatter,
            now=now,
        )

    def generate(self, bundle: FHIRBundle | dict, now: datetime | None = None) -> str:
        """Generate a QRDA document.

        Args:
            bundle: FHIR Bundle for one patient
            now: Document creation time (optional)

        Returns:
            QRDA XML string

        Raises:
            MissingRequiredResource: If the bundle holds no Patient
        """
        return render_xml(self.generate_document(bundle, now=now))

    def generate_batch(self, bundles: list[FHIRBundle | dict]) -> list[str]:
        """Generate one QRDA document per bundle.

        Args:
            bundles: List of per-patient FHIR Bundles

        Returns:
            List of QRDA XML strings
        """
        documents = [self.generate(bundle) for bundle in bundles]
        logger.info(f"Generated {len(documents)} QRDA documents")
        return documents
