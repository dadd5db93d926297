#!/usr/bin/env python3
"""
Async WSDL loader that recursively resolves <xsd:import>, <xsd:include> and
<wsdl:import> references before the tree is handed to build_model().

Location rules:
1. "http://" / "https://" locations are fetched over HTTP unchanged
2. Anything else is a path relative to the importing document's location

One visited-location set is shared by the whole top-level resolution, so
cyclic, self-referencing and diamond-shaped import graphs fetch each
location once. Imports inside a fetched document are resolved against that
document's own location, so nested import chains work at any depth.

Schema merging appends top-level XSD declarations of each imported schema to
the importing schema. WSDL import merging appends message, portType, binding
and service nodes, dropping names already present (first definition wins).

Any fetch or parse failure aborts the whole resolution; no partial tree is
returned.
"""

import logging
import os
from typing import Any, Optional
from urllib.parse import urljoin, urlsplit, urlunsplit

from ....clients.source_client import SourceFetcher, is_url
from ....core.config import loader_config
from .parser import as_list, attr, parse_schema, parse_wsdl

logger = logging.getLogger(__name__)

XSD_DECLARATION_KEYS = ("element", "complexType", "simpleType", "group", "attributeGroup")
WSDL_DEFINITION_KEYS = ("message", "portType", "binding", "service")
XSD_DIRECTIVE_KEYS = ("import", "include")


async def load_wsdl(
    xml: str,
    base_location: Optional[str] = None,
    fetcher: Optional[SourceFetcher] = None,
    location: Optional[str] = None,
) -> dict[str, Any]:
    """Parse a WSDL document and merge everything it imports into one raw tree.

    Args:
        xml: Raw WSDL XML text
        base_location: Directory path or URL prefix used for relative imports.
            Defaults to the directory of ``location``, else the configured base dir.
        fetcher: SourceFetcher to use; a private one is opened and closed if omitted
        location: Absolute path/URL of the document itself, if known. It is
            marked visited so imports pointing back at the root are skipped.

    Returns:
        Merged raw tree ({"definitions": {...}}) with no import directives left

    Raises:
        WsdlParseError: if the root or any imported document is not well-formed
        ImportFetchError: if any imported location cannot be retrieved
    """
    if base_location is None:
        base_location = base_of(location) if location else loader_config.base_location()

    visited: set[str] = set()
    if location:
        visited.add(absolute_location(location, base_location))

    if fetcher is not None:
        return await _resolve_wsdl(xml, base_location, visited, fetcher, location)

    async with SourceFetcher() as own_fetcher:
        return await _resolve_wsdl(xml, base_location, visited, own_fetcher, location)


async def _resolve_wsdl(
    xml: str,
    base_location: str,
    visited: set[str],
    fetcher: SourceFetcher,
    location: Optional[str] = None,
) -> dict[str, Any]:
    raw = parse_wsdl(xml, location)
    defs = raw["definitions"]
    schema = ensure_schema(defs)
    await _resolve_schema_imports(schema, base_location, visited, fetcher)
    await _resolve_wsdl_imports(defs, schema, base_location, visited, fetcher)
    return raw


async def _resolve_schema_imports(
    schema: dict[str, Any],
    base_location: str,
    visited: set[str],
    fetcher: SourceFetcher,
):
    """Fetch, resolve and merge every xsd:import/xsd:include of a schema node."""
    directives = [d for key in XSD_DIRECTIVE_KEYS for d in as_list(schema.pop(key, None))]
    for directive in directives:
        schema_location = attr(directive, "schemaLocation")
        if not schema_location:
            continue
        abs_location = absolute_location(schema_location, base_location)
        if abs_location in visited:
            logger.debug(f"Skipping already visited schema {abs_location}", extra={"location": abs_location})
            continue
        visited.add(abs_location)

        logger.debug(f"Resolving schema import {abs_location}", extra={"location": abs_location})
        source = await fetcher.fetch(abs_location)
        imported = parse_schema(source, abs_location)
        await _resolve_schema_imports(imported, base_of(abs_location), visited, fetcher)
        merge_schema(schema, imported)


async def _resolve_wsdl_imports(
    defs: dict[str, Any],
    schema: dict[str, Any],
    base_location: str,
    visited: set[str],
    fetcher: SourceFetcher,
):
    """Fetch, resolve and merge every wsdl:import of a definitions node."""
    for directive in as_list(defs.pop("import", None)):
        import_location = attr(directive, "location")
        if not import_location:
            continue
        abs_location = absolute_location(import_location, base_location)
        if abs_location in visited:
            logger.debug(f"Skipping already visited document {abs_location}", extra={"location": abs_location})
            continue
        visited.add(abs_location)

        logger.debug(f"Resolving document import {abs_location}", extra={"location": abs_location})
        source = await fetcher.fetch(abs_location)
        imported = await _resolve_wsdl(source, base_of(abs_location), visited, fetcher, abs_location)
        imported_defs = imported["definitions"]
        merge_wsdl_definitions(defs, imported_defs)
        merge_schema(schema, imported_defs["types"]["schema"], skip_existing=True)


def ensure_schema(defs: dict[str, Any]) -> dict[str, Any]:
    """Return the schema node of a definitions node, creating it when absent.

    Several inline schemas under <types> are folded into the first one so the
    rest of the pipeline sees a single schema node.
    """
    types = defs.get("types")
    if isinstance(types, list):
        types = next((t for t in types if isinstance(t, dict)), None)
    if not isinstance(types, dict):
        types = {}
    defs["types"] = types

    schemas = [s for s in as_list(types.get("schema")) if isinstance(s, dict)]
    if not schemas:
        schemas = [{}]
    primary = schemas[0]
    for extra in schemas[1:]:
        merge_schema(primary, extra)
        for key in XSD_DIRECTIVE_KEYS:
            if extra.get(key):
                primary[key] = as_list(primary.get(key)) + as_list(extra[key])
    types["schema"] = primary
    return primary


def merge_schema(dest: dict[str, Any], src: dict[str, Any], skip_existing: bool = False):
    """Append top-level XSD declarations from src to dest, keeping order.

    With skip_existing, declarations whose name dest already declares are
    dropped (used for schemas carried by imported WSDL documents).
    """
    for key in XSD_DECLARATION_KEYS:
        items = as_list(src.get(key))
        if not items:
            continue
        existing = as_list(dest.get(key))
        if skip_existing:
            items = _without_names(items, {attr(node, "name") for node in existing}, key)
        dest[key] = existing + items


def merge_wsdl_definitions(dest: dict[str, Any], src: dict[str, Any]):
    """Append WSDL definition nodes from src to dest, skipping names dest already has."""
    for key in WSDL_DEFINITION_KEYS:
        items = as_list(src.get(key))
        if not items:
            continue
        existing = as_list(dest.get(key))
        dest[key] = existing + _without_names(items, {attr(node, "name") for node in existing}, key)


def _without_names(items: list, names: set[str], key: str) -> list:
    kept = []
    for node in items:
        name = attr(node, "name")
        if name in names:
            logger.debug(f"Dropping duplicate {key} '{name}' from imported document")
            continue
        kept.append(node)
    return kept


def absolute_location(location: str, base_location: str) -> str:
    """Resolve a location against a base directory path or URL prefix.

    URLs are returned unchanged; relative paths are joined to the base.
    """
    if is_url(location):
        return location
    if is_url(base_location):
        base = base_location if base_location.endswith("/") else base_location + "/"
        return urljoin(base, location)
    return os.path.abspath(os.path.join(base_location, location))


def base_of(location: str) -> str:
    """Directory (or URL prefix ending in "/") containing a loaded document."""
    if is_url(location):
        parts = urlsplit(location)
        path = parts.path[: parts.path.rfind("/") + 1] or "/"
        return urlunsplit((parts.scheme, parts.netloc, path, "", ""))
    return os.path.dirname(location)
