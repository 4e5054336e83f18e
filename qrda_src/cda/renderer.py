"""Render a document tree to CDA XML.

Tree conventions:
- keys prefixed with "@_" become attributes ("@_xsi:type" style prefixes
  resolve against the registered namespaces)
- dict values become child elements, list values repeat the element
- scalar values become element text, None values are skipped
"""

from typing import Any
from xml.dom import minidom
from xml.etree import ElementTree as ET

from ..models import ATTR

# CDA namespaces
CDA_NS = "urn:hl7-org:v3"
SDTC_NS = "urn:hl7-org:sdtc"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"

NAMESPACES = {
    "sdtc": SDTC_NS,
    "xsi": XSI_NS,
}


def _qualify(name: str) -> str:
    """Qualify a tag or attribute name with its namespace (Clark notation)."""
    if ":" in name:
        prefix, local = name.split(":", 1)
        if prefix in NAMESPACES:
            return f"{{{NAMESPACES[prefix]}}}{local}"
    return name


def _populate(element: ET.Element, value: Any) -> None:
    """Fill an element from a tree node."""
    if isinstance(value, dict):
        for key, child in value.items():
            if child is None:
                continue
            if key.startswith(ATTR):
                element.set(_qualify(key[len(ATTR):]), str(child))
            else:
                _append(element, key, child)
    elif isinstance(value, bool):
        element.text = "true" if value else "false"
    else:
        element.text = str(value)


def _append(parent: ET.Element, tag: str, value: Any) -> None:
    """Append one child element per value (lists repeat the tag)."""
    items = value if isinstance(value, list) else [value]
    for item in items:
        if item is None:
            continue
        if ":" in tag:
            qualified = _qualify(tag)
        else:
            qualified = f"{{{CDA_NS}}}{tag}"
        _populate(ET.SubElement(parent, qualified), item)


def to_element(document: dict[str, Any]) -> ET.Element:
    """Convert a ClinicalDocument tree to an ElementTree element."""
    ET.register_namespace("", CDA_NS)
    ET.register_namespace("sdtc", SDTC_NS)
    ET.register_namespace("xsi", XSI_NS)

    root = ET.Element(
        f"{{{CDA_NS}}}ClinicalDocument",
        {f"{{{XSI_NS}}}schemaLocation": f"{CDA_NS} CDA.xsd"},
    )
    _populate(root, document)
    return root


def render_xml(document: dict[str, Any], pretty: bool = True) -> str:
    """Render a ClinicalDocument tree to an XML string.

    Args:
        document: Tree returned by assemble()
        pretty: Indent the output

    Returns:
        CDA XML string
    """
    rough_string = ET.tostring(to_element(document), encoding="unicode")
    if not pretty:
        return rough_string

    reparsed = minidom.parseString(rough_string)
    return reparsed.toprettyxml(indent="  ", encoding=None)
