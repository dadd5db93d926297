#!/usr/bin/env python3
"""
Handlers for WSDL reference operations.

Runs uploaded or remote WSDL documents through the loading pipeline and
maps pipeline errors onto HTTP errors.
"""

import logging
from typing import Optional

from fastapi import HTTPException, UploadFile

from ..clients.source_client import SourceFetcher, is_url
from ..core.config import loader_config
from ..core.errors import ImportFetchError, WsdlParseError
from ..models.models import ServiceResponse
from ..services.domain.wsdl import ReferenceIndex, Service, render_html, service_to_dict
from ..services.domain.wsdl.loader import base_of
from ..services.wsdl_service import load_service

logger = logging.getLogger(__name__)


def confined_fetcher() -> SourceFetcher:
    """Fetcher for API requests: local reads stay inside the configured base directory."""
    return SourceFetcher(allowed_root=loader_config.base_location())


def to_response(service: Service) -> ServiceResponse:
    """Convert the normalized dataclass model into the API response model."""
    return ServiceResponse.model_validate(service_to_dict(service))


async def _run_pipeline(
    xml: str,
    base_location: Optional[str],
    location: Optional[str] = None,
    fetcher: Optional[SourceFetcher] = None,
) -> tuple[Service, ReferenceIndex]:
    try:
        return await load_service(xml, base_location=base_location, fetcher=fetcher, location=location)
    except WsdlParseError as e:
        logger.error(f"WSDL parse failed: {e}", extra={"location": e.location})
        raise HTTPException(status_code=400, detail=str(e)) from e
    except ImportFetchError as e:
        logger.error(f"WSDL import failed: {e}", extra={"location": e.location})
        raise HTTPException(
            status_code=422,
            detail={"message": str(e), "location": e.location},
        ) from e


async def _read_upload(file: UploadFile) -> str:
    content = await file.read()
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise HTTPException(status_code=400, detail=f"{file.filename} is not valid UTF-8") from e


async def handle_wsdl_model(file: UploadFile, base_location: Optional[str] = None) -> ServiceResponse:
    """Load an uploaded WSDL and return its normalized model.

    Args:
        file: Uploaded WSDL document
        base_location: Directory or URL prefix for relative imports

    Returns:
        ServiceResponse with all sections
    """
    xml = await _read_upload(file)
    logger.info(f"Processing uploaded WSDL {file.filename}", extra={"document": file.filename})
    async with confined_fetcher() as fetcher:
        service, _ = await _run_pipeline(xml, base_location or None, fetcher=fetcher)
    return to_response(service)


async def handle_wsdl_html(
    file: UploadFile,
    base_location: Optional[str] = None,
    title: Optional[str] = None,
) -> str:
    """Load an uploaded WSDL and render its HTML reference page."""
    xml = await _read_upload(file)
    logger.info(f"Rendering uploaded WSDL {file.filename}", extra={"document": file.filename})
    async with confined_fetcher() as fetcher:
        service, index = await _run_pipeline(xml, base_location or None, fetcher=fetcher)
    return render_html(service, index, title=title or None)


async def handle_wsdl_url(url: str, output_format: str = "model", title: Optional[str] = None):
    """Fetch a WSDL by URL, resolve its imports against the URL, and return model or HTML."""
    if not is_url(url):
        raise HTTPException(status_code=400, detail="Only http(s) URLs can be loaded")

    async with confined_fetcher() as fetcher:
        try:
            xml = await fetcher.fetch(url)
        except ImportFetchError as e:
            logger.error(f"WSDL fetch failed: {e}", extra={"location": url})
            raise HTTPException(status_code=422, detail={"message": str(e), "location": e.location}) from e
        service, index = await _run_pipeline(xml, base_of(url), location=url, fetcher=fetcher)

    if output_format == "html":
        return render_html(service, index, title=title)
    return to_response(service)
