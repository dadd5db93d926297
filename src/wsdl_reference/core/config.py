#!/usr/bin/env python3
"""
Configuration settings for WSDL loading, rendering and the HTTP API.

These settings can be overridden via environment variables to adjust
fetch limits and defaults per deployment environment (local CLI vs server).
"""

import logging
import os
from importlib.metadata import PackageNotFoundError, version

from .env_utils import getenv_clean, getenv_float

logger = logging.getLogger(__name__)

EDIBLE_CSS_URL = "https://cdn.jsdelivr.net/npm/@svmukhin/edible-css@latest/dist/edible.min.css"
DEFAULT_DEV_TOKEN = "devtoken"


def get_package_version() -> str:
    """Installed distribution version, or "unknown" when running from a checkout."""
    try:
        return version("wsdl-reference-api")
    except PackageNotFoundError:
        return "unknown"


class LoaderConfig:
    """WSDL loading and rendering configuration.

    All values can be overridden via environment variables. A new instance
    picks up the environment at construction time.
    """

    def __init__(self):
        # Timeout: Max seconds per network fetch (schema or document import)
        self.FETCH_TIMEOUT = getenv_float("WSDL_FETCH_TIMEOUT", 30.0)

        # Base location for relative imports when the caller gives none
        self.BASE_DIR = getenv_clean("WSDL_BASE_DIR")

        # Stylesheet linked (or embedded with --inline-css) by the HTML renderer
        self.CSS_URL = getenv_clean("WSDL_REFERENCE_CSS_URL", EDIBLE_CSS_URL)
        self.CSS_FILE = getenv_clean("WSDL_REFERENCE_CSS_FILE")

        self.LOG_LEVEL = getenv_clean("WSDL_LOG_LEVEL", "WARNING")

        # Bearer token required by every /api route
        self.DEV_TOKEN = getenv_clean("DEV_TOKEN", DEFAULT_DEV_TOKEN)

        self.APP_VERSION = getenv_clean("APP_VERSION") or get_package_version()

    def base_location(self) -> str:
        """Directory used to resolve relative imports of a document with no known location."""
        return self.BASE_DIR or os.getcwd()


# Singleton instance
loader_config = LoaderConfig()
