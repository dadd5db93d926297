#!/usr/bin/env python3
"""
Utility functions for reading environment variables with cross-platform support.

Handles Windows CRLF line endings and other whitespace issues that can occur
when .env files are edited on different operating systems.
"""

import os
import logging
from typing import Optional

logger = logging.getLogger(__name__)


def getenv_clean(key: str, default: str = None, strip: bool = True) -> Optional[str]:
    """Get environment variable with automatic cleaning of line endings and whitespace.

    Args:
        key: Environment variable name
        default: Default value if variable is not set
        strip: If True, strip whitespace and line endings (default: True)

    Returns:
        Cleaned environment variable value, or default if not set

    Example:
        >>> # .env file has: WSDL_BASE_DIR=/srv/wsdl\r\n
        >>> value = getenv_clean("WSDL_BASE_DIR")
        >>> # Returns: "/srv/wsdl" (without \r\n)
    """
    raw_value = os.getenv(key, default)

    if raw_value is None:
        return None

    if not strip:
        return raw_value

    cleaned = raw_value.strip().rstrip("\r\n")

    # Trailing line endings usually mean a .env file saved with CRLF
    if raw_value != cleaned:
        logger.warning(
            f"Environment variable {key} had trailing whitespace/line endings: "
            f"raw={repr(raw_value)}, cleaned={repr(cleaned)}"
        )

    return cleaned


def getenv_float(key: str, default: float) -> float:
    """Get environment variable as float with automatic cleaning.

    Args:
        key: Environment variable name
        default: Default value if variable is not set or invalid

    Returns:
        Float value

    Example:
        >>> # .env file has: WSDL_FETCH_TIMEOUT=12.5\r\n
        >>> value = getenv_float("WSDL_FETCH_TIMEOUT", 30.0)
        >>> # Returns: 12.5
    """
    raw_value = getenv_clean(key, None)

    if raw_value is None or raw_value == "":
        return default

    try:
        return float(raw_value)
    except ValueError:
        logger.warning(
            f"Environment variable {key} is not a valid number: {repr(raw_value)}. "
            f"Using default: {default}"
        )
        return default


def getenv_list(key: str, default: list[str] = None, separator: str = ",") -> list[str]:
    """Get environment variable as list with automatic cleaning.

    Splits the value by separator and cleans each item.

    Args:
        key: Environment variable name
        default: Default list value if variable is not set
        separator: Separator character (default: ",")

    Returns:
        List of cleaned strings
    """
    if default is None:
        default = []

    raw_value = getenv_clean(key, None)

    if raw_value is None or raw_value == "":
        return default

    items = [item.strip() for item in raw_value.split(separator) if item.strip()]
    return items if items else default
