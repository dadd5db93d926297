#!/usr/bin/env python3
"""
Source Fetcher Client

A low-level client that retrieves document text for an absolute local path
or an http(s) URL. It contains no WSDL knowledge: locations are resolved
by the loader before they reach this client.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import Optional

import httpx

from ..core.config import loader_config
from ..core.errors import ImportFetchError

logger = logging.getLogger(__name__)


def is_url(location: str) -> bool:
    """Check if a location is an http(s) URL"""
    return location.startswith("http://") or location.startswith("https://")


class SourceFetcher:
    """
    Fetches WSDL/XSD sources from the filesystem or over HTTP.

    Use as an async context manager so the underlying httpx client is closed:

        async with SourceFetcher() as fetcher:
            text = await fetcher.fetch("https://example.com/service.wsdl")

    A caller-supplied httpx.AsyncClient is used as-is and is not closed here.
    No retries are performed; the first failure is raised.

    With allowed_root set, local paths must resolve (after symlinks) to a
    file under that directory; anything else is refused without being read.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
        allowed_root: Optional[str] = None,
    ):
        self._owns_client = client is None
        self._client = client
        self._timeout = timeout if timeout is not None else loader_config.FETCH_TIMEOUT
        self._allowed_root = os.path.realpath(allowed_root) if allowed_root else None

    async def __aenter__(self) -> "SourceFetcher":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout, follow_redirects=True)
        return self._client

    async def aclose(self):
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch(self, location: str) -> str:
        """Return the text of the document at an absolute path or URL.

        Raises:
            ImportFetchError: if the location is missing or unreachable
        """
        if is_url(location):
            return await self._fetch_url(location)
        return await self._read_file(location)

    async def _fetch_url(self, url: str) -> str:
        logger.debug(f"Fetching {url}", extra={"location": url})
        try:
            response = await self._get_client().get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ImportFetchError(url, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise ImportFetchError(url, str(e) or type(e).__name__) from e
        return response.text

    def _check_allowed(self, path: str):
        if self._allowed_root is None:
            return
        real_path = os.path.realpath(path)
        if os.path.commonpath([self._allowed_root, real_path]) != self._allowed_root:
            logger.warning(f"Refusing to read {path} outside {self._allowed_root}", extra={"location": path})
            raise ImportFetchError(path, "outside the allowed base directory")

    async def _read_file(self, path: str) -> str:
        self._check_allowed(path)
        logger.debug(f"Reading {path}", extra={"location": path})
        try:
            return await asyncio.to_thread(Path(path).read_text, encoding="utf-8")
        except FileNotFoundError as e:
            raise ImportFetchError(path, "no such file") from e
        except UnicodeDecodeError as e:
            raise ImportFetchError(path, f"not valid UTF-8 ({e.reason})") from e
        except OSError as e:
            raise ImportFetchError(path, e.strerror or str(e)) from e
