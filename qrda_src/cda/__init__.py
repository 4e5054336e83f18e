"""QRDA Category I (CDA R2) document generation."""

from .assembler import QRDAAssembler, assemble
from .generator import QRDAGenerator
from .renderer import render_xml
from .templates import TemplateRole, template_ids

__all__ = [
    "QRDAAssembler",
    "QRDAGenerator",
    "TemplateRole",
    "assemble",
    "render_xml",
    "template_ids",
]
