"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures exception handlers, routes and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, HTTPException, Request, status

from src.adapters.chain import Web3Transactor, get_web3
from src.api.errors import install_error_handlers
from src.api.v1 import router as v1_router
from src.config.settings import get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Private ENS API v1 - Commit, register, configure and transfer .eth names",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates the Web3 client and the signing transactor on startup
    - Creates the pooled HTTP client for the subgraph on startup
    - Closes the HTTP client on shutdown
    """
    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level.upper())

    logger.info("Starting application...")
    logger.info("Connecting to RPC endpoint %s...", settings.rpc_url)

    private_key = settings.wallet_private_key.get_secret_value()
    if not private_key:
        raise RuntimeError("WALLET_PRIVATE_KEY is not set")

    web3 = get_web3(settings.rpc_url, settings.rpc_timeout, settings.chain_id)
    transactor = Web3Transactor(
        web3,
        private_key,
        wait_for_receipt=settings.tx_wait_for_receipt,
        receipt_timeout=settings.tx_receipt_timeout,
    )
    logger.info("Orchestrating identity: %s", transactor.address)

    http_client = httpx.Client(timeout=settings.subgraph_timeout)

    # Store shared clients in app state for dependency injection
    app.state.web3 = web3
    app.state.transactor = transactor
    app.state.http_client = http_client

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    http_client.close()
    logger.info("Subgraph HTTP client closed")


app = FastAPI(
    title="ens-orchestrator",
    description="ENS registration API - commit-reveal registration and record management for .eth names",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

install_error_handlers(app)

# Include private v1 API routes
app.include_router(v1_router, prefix="/api/v1/private")


@app.get("/health")
def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint with RPC validation.

    Returns 200 OK if the application can reach its chain endpoint,
    503 otherwise.
    """
    if not request.app.state.web3.is_connected():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="RPC endpoint unreachable",
        )
    return {"status": "healthy"}
