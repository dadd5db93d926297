#!/usr/bin/env python3
"""
WSDL pipeline business logic.

Chains the domain steps used by both the CLI and the HTTP API:
load_wsdl() -> build_model() -> build_index().
"""

import logging
from typing import Optional

from ..clients.source_client import SourceFetcher
from .domain.wsdl import ReferenceIndex, Service, build_index, build_model, load_wsdl

logger = logging.getLogger(__name__)


async def load_service(
    xml: str,
    base_location: Optional[str] = None,
    fetcher: Optional[SourceFetcher] = None,
    location: Optional[str] = None,
) -> tuple[Service, ReferenceIndex]:
    """Resolve imports, normalize and index a WSDL document.

    Args:
        xml: Raw WSDL XML text
        base_location: Directory or URL prefix for relative imports
        fetcher: Optional shared SourceFetcher
        location: Absolute path/URL of the document itself, if known

    Returns:
        Tuple of (service, index)

    Raises:
        WsdlParseError: if any document in the graph is not well-formed
        ImportFetchError: if any imported location cannot be retrieved
    """
    raw = await load_wsdl(xml, base_location=base_location, fetcher=fetcher, location=location)
    service = build_model(raw)
    index = build_index(service)
    logger.info(
        f"Loaded WSDL '{service.name}': {len(service.types)} types, {len(service.messages)} messages, "
        f"{len(service.operations)} operations, {len(service.bindings)} bindings, "
        f"{len(service.endpoints)} endpoints",
        extra={"document": location or service.name},
    )
    return service, index
