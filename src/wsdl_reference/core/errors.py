#!/usr/bin/env python3
"""Exceptions raised by the WSDL loading pipeline."""

from typing import Optional


class WsdlReferenceError(Exception):
    """Base class for fatal WSDL pipeline errors."""
    pass


class WsdlParseError(WsdlReferenceError):
    """
    Exception raised when a document cannot be turned into a raw tree.

    Used for:
    - Empty input
    - XML that is not well-formed
    - Forbidden XML constructs (entity expansion, external entities)
    - A WSDL document without a <definitions> root element
    """

    def __init__(self, message: str, location: Optional[str] = None):
        self.location = location
        if location:
            message = f"{message} (in {location})"
        super().__init__(message)


class ImportFetchError(WsdlReferenceError):
    """
    Exception raised when an imported location cannot be retrieved.

    Used for:
    - Missing or unreadable local files
    - Network/transport failures
    - Non-2xx HTTP responses
    - Content that is not valid UTF-8
    """

    def __init__(self, location: str, reason: str):
        self.location = location
        self.reason = reason
        super().__init__(f"Failed to fetch {location}: {reason}")
