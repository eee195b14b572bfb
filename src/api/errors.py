"""
Exception handlers mapping domain faults to HTTP responses.

Expected outcomes never reach these handlers; only faults do, and the
caller gets an opaque 500. The domain services have already logged the
failure with its call context.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.domain.exceptions import NameServiceError, ResolverNotConfigured

logger = logging.getLogger(__name__)


async def name_service_error_handler(request: Request, exc: NameServiceError) -> JSONResponse:
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An error occurred on the server"},
    )


async def resolver_not_configured_handler(
    request: Request, exc: ResolverNotConfigured
) -> JSONResponse:
    logger.error("Default resolver %s is not configured", exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Default resolver is not configured"},
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ResolverNotConfigured, resolver_not_configured_handler)
    app.add_exception_handler(NameServiceError, name_service_error_handler)
