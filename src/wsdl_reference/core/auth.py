#!/usr/bin/env python3
"""Bearer-token guard for the /api routes."""

import logging
import secrets

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import DEFAULT_DEV_TOKEN, loader_config

logger = logging.getLogger(__name__)
security = HTTPBearer()


def uses_default_token() -> bool:
    return loader_config.DEV_TOKEN == DEFAULT_DEV_TOKEN


def warn_if_default_token():
    """Log once at startup when the API is guarded by the well-known dev token."""
    if uses_default_token():
        logger.warning(f"Using default DEV_TOKEN='{DEFAULT_DEV_TOKEN}'. Set DEV_TOKEN for any shared deployment!")


def verify_token(credentials: HTTPAuthorizationCredentials = Depends(security)) -> str:
    """Check the bearer token against the configured DEV_TOKEN."""
    if not secrets.compare_digest(credentials.credentials.encode(), loader_config.DEV_TOKEN.encode()):
        raise HTTPException(status_code=401, detail="Invalid authentication token")
    return credentials.credentials
