#!/usr/bin/env python3
"""XML parse provider for WSDL 1.1 and XSD documents.

Turns XML text into a namespace-agnostic dictionary tree:

- element names and attribute names lose their ``{namespace}`` qualifier,
  so ``wsdl:``, ``s:``, ``xs:`` or default-namespace documents look the same
- attributes are stored under ``"@" + name`` (e.g. ``"@name"``, ``"@type"``)
- text is stored under ``"#text"`` when the element also has attributes or
  children; a bare element collapses to its stripped text
- repeating WSDL/XSD constructs are always lists, even for one occurrence,
  so downstream code can iterate without shape checks
"""

import logging
from typing import Any, Optional
from xml.etree.ElementTree import Element, ParseError

import defusedxml.ElementTree as ET
from defusedxml import DefusedXmlException

from ....core.errors import WsdlParseError

logger = logging.getLogger(__name__)

ATTR_PREFIX = "@"
TEXT_KEY = "#text"

# Elements materialized as lists regardless of how often they occur
ARRAY_TAGS = frozenset({
    "operation", "message", "part", "portType", "binding", "service", "port",
    "element", "complexType", "simpleType", "enumeration",
    "sequence", "all", "choice",
    "import", "include",
    "fault", "input", "output",
    "annotation", "documentation",
})

# Elements whose inline markup children still count as their text
MIXED_CONTENT_TAGS = frozenset({"documentation"})


def local_name(tag: str) -> str:
    """Strip a ``{namespace}`` qualifier from a tag or attribute name."""
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def _element_to_node(elem: Element) -> Any:
    node: dict[str, Any] = {}

    for key, value in elem.attrib.items():
        node[ATTR_PREFIX + local_name(key)] = value

    for child in elem:
        # Comments and processing instructions have non-string tags
        if not isinstance(child.tag, str):
            continue
        name = local_name(child.tag)
        value = _element_to_node(child)
        if name in ARRAY_TAGS:
            node.setdefault(name, []).append(value)
        elif name in node:
            existing = node[name]
            if isinstance(existing, list):
                existing.append(value)
            else:
                node[name] = [existing, value]
        else:
            node[name] = value

    if local_name(elem.tag) in MIXED_CONTENT_TAGS:
        content = "".join(elem.itertext()).strip()
    else:
        parts = [elem.text or ""] + [child.tail or "" for child in elem]
        content = " ".join(part.strip() for part in parts if part.strip())
    if not node:
        return content
    if content:
        node[TEXT_KEY] = content
    return node


def _parse_root(xml: str, location: Optional[str]) -> Element:
    if xml is None or not xml.strip():
        raise WsdlParseError("Not a valid WSDL document: missing <definitions> root element (empty input)", location)
    try:
        return ET.fromstring(xml)
    except ParseError as e:
        logger.error(f"Failed to parse XML: {e}", extra={"location": location})
        raise WsdlParseError(f"Failed to parse XML: {e}", location) from e
    except DefusedXmlException as e:
        logger.error(f"Refused unsafe XML construct: {e}", extra={"location": location})
        raise WsdlParseError(f"Refused unsafe XML construct: {e}", location) from e


def parse_xml(xml: str, location: Optional[str] = None) -> dict[str, Any]:
    """Parse XML text into ``{root_local_name: node}``.

    Raises:
        WsdlParseError: if the input is empty, malformed or unsafe
    """
    root = _parse_root(xml, location)
    node = _element_to_node(root)
    if not isinstance(node, dict):
        node = {TEXT_KEY: node} if node else {}
    return {local_name(root.tag): node}


def parse_wsdl(xml: str, location: Optional[str] = None) -> dict[str, Any]:
    """Parse a WSDL document into ``{"definitions": {...}}``.

    Args:
        xml: Raw WSDL XML text
        location: Where the text came from, used in error messages only

    Raises:
        WsdlParseError: if the XML is not well-formed or lacks a <definitions> root
    """
    result = parse_xml(xml, location)
    if "definitions" not in result:
        root_name = next(iter(result))
        raise WsdlParseError(
            f"Not a valid WSDL document: missing <definitions> root element (found <{root_name}>)",
            location,
        )
    return result


def parse_schema(xml: str, location: Optional[str] = None) -> dict[str, Any]:
    """Parse a standalone XSD document and return its schema node.

    A WSDL document is accepted too, in which case the first schema inside
    its <types> is returned. Any other root yields an empty schema.

    Raises:
        WsdlParseError: if the XML is not well-formed or unsafe
    """
    result = parse_xml(xml, location)
    if "schema" in result:
        return result["schema"]
    if "definitions" in result:
        types = first(result["definitions"].get("types"))
        if isinstance(types, dict):
            schema = first(types.get("schema"))
            if isinstance(schema, dict):
                return schema
    logger.warning("No schema found in imported document", extra={"location": location})
    return {}


def as_list(value: Any) -> list:
    """Return value as a list: [] for None, itself for a list, else [value]."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def first(value: Any) -> Any:
    """First item of a maybe-list value, or None when absent/empty."""
    items = as_list(value)
    return items[0] if items else None


def text(node: Any) -> str:
    """Plain text of a node that may be a string, a list, or an element dict."""
    if not node:
        return ""
    if isinstance(node, str):
        return node.strip()
    if isinstance(node, list):
        return text(node[0])
    if isinstance(node, dict):
        return str(node.get(TEXT_KEY, "")).strip()
    return str(node).strip()


def attr(node: Any, name: str, default: str = "") -> str:
    """Attribute value of an element dict, or default when missing."""
    if isinstance(node, dict):
        value = node.get(ATTR_PREFIX + name)
        if value is not None:
            return value
    return default


def strip_ns(value: Optional[str]) -> str:
    """Remove a namespace prefix from a QName value: "tns:AddRequest" -> "AddRequest"."""
    if not value:
        return ""
    return value.split(":", 1)[1] if ":" in value else value
