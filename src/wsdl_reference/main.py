#!/usr/bin/env python3

import logging
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, File, Form, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from .core.auth import verify_token, warn_if_default_token
from .core.config import loader_config
from .core.env_utils import getenv_list
from .core.logging import setup_logging
from .models.models import ServiceResponse, WsdlUrlRequest

logger = logging.getLogger(__name__)

# Application start time for uptime calculation
_app_start_time = time.time()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    setup_logging()
    logger.info("Starting WSDL reference service")
    warn_if_default_token()

    yield

    logger.info("Shutting down WSDL reference service")


app = FastAPI(
    title="WSDL Reference API",
    description="API for turning WSDL documents and their imports into a normalized service model",
    version=loader_config.APP_VERSION,
    lifespan=lifespan
)

# CORS middleware
allowed_origins = getenv_list("CORS_ORIGINS", ["http://localhost:3000"])
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_version_header(request, call_next):
    """Add version information to response headers"""
    response = await call_next(request)
    response.headers["X-API-Version"] = loader_config.APP_VERSION
    return response


@app.get("/healthz")
async def health_check():
    """Liveness check - checks if application is alive and can serve requests"""
    current_time = time.time()
    return {
        "status": "healthy",
        "timestamp": current_time,
        "uptime": current_time - _app_start_time,
        "api_version": loader_config.APP_VERSION,
    }


# WSDL Routes

@app.post("/api/wsdl/model", response_model=ServiceResponse)
async def wsdl_model(
    file: UploadFile = File(...),
    base_location: str = Form(""),
    token: str = Depends(verify_token),
):
    """Upload a WSDL and get its normalized model.

    Relative imports are resolved against base_location (a directory or URL
    prefix); the configured base directory is used when it is empty.
    """
    from .handlers.wsdl import handle_wsdl_model

    return await handle_wsdl_model(file, base_location)


@app.post("/api/wsdl/html", response_class=HTMLResponse)
async def wsdl_html(
    file: UploadFile = File(...),
    base_location: str = Form(""),
    title: str = Form(""),
    token: str = Depends(verify_token),
):
    """Upload a WSDL and get its HTML reference page."""
    from .handlers.wsdl import handle_wsdl_html

    return HTMLResponse(await handle_wsdl_html(file, base_location, title))


@app.post("/api/wsdl/url")
async def wsdl_from_url(request: WsdlUrlRequest, token: str = Depends(verify_token)):
    """Load a WSDL from an http(s) URL; imports resolve relative to that URL."""
    from .handlers.wsdl import handle_wsdl_url

    result = await handle_wsdl_url(request.url, request.format, request.title)
    if isinstance(result, str):
        return HTMLResponse(result)
    return result
