"""
Client Layer

This package contains low-level client wrappers for external resources.
Clients handle communication with external systems but contain no business logic.

Modules:
- source_client: local file / HTTP(S) document fetcher
"""

from .source_client import SourceFetcher, is_url

__all__ = [
    'SourceFetcher',
    'is_url',
]
