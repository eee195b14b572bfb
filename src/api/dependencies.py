"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting domain services
and infrastructure adapters into routes, plus the operator credential
check guarding the private API.
"""

import logging
import secrets

import bcrypt
import httpx
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from src.adapters.chain import (
    Web3RegistrarController,
    Web3RegistrarToken,
    Web3Registry,
    Web3Resolver,
    Web3Transactor,
)
from src.adapters.index import SubgraphDomainIndex
from src.config.settings import Settings, get_settings
from src.domain.ownership import OwnershipChecker
from src.domain.pricing import PriceOracle
from src.domain.queries import DomainQueryService
from src.domain.records import RecordService
from src.domain.registration import RegistrationService
from src.domain.resolver import ResolverLocator

logger = logging.getLogger(__name__)


def get_transactor(request: Request) -> Web3Transactor:
    """
    Get the transaction transport from app state.

    Created during app lifespan startup; shared so that every request
    goes through the same nonce lock.
    """
    return request.app.state.transactor


def get_http_client(request: Request) -> httpx.Client:
    return request.app.state.http_client


def get_registry(
    transactor: Web3Transactor = Depends(get_transactor),
    settings: Settings = Depends(get_settings),
) -> Web3Registry:
    return Web3Registry(transactor, settings.ens_registry_address)


def get_controller(
    transactor: Web3Transactor = Depends(get_transactor),
    settings: Settings = Depends(get_settings),
) -> Web3RegistrarController:
    return Web3RegistrarController(transactor, settings.registrar_controller_address)


def get_registrar_token(
    transactor: Web3Transactor = Depends(get_transactor),
    settings: Settings = Depends(get_settings),
) -> Web3RegistrarToken:
    return Web3RegistrarToken(transactor, settings.base_registrar_address)


def get_ownership_checker(
    transactor: Web3Transactor = Depends(get_transactor),
    registry: Web3Registry = Depends(get_registry),
    controller: Web3RegistrarController = Depends(get_controller),
    token: Web3RegistrarToken = Depends(get_registrar_token),
    settings: Settings = Depends(get_settings),
) -> OwnershipChecker:
    return OwnershipChecker(
        registry=registry,
        controller=controller,
        token=token,
        identity=transactor.address,
        tld=settings.tld,
        source=settings.availability_source,
    )


def get_registration_service(
    transactor: Web3Transactor = Depends(get_transactor),
    registry: Web3Registry = Depends(get_registry),
    controller: Web3RegistrarController = Depends(get_controller),
    ownership: OwnershipChecker = Depends(get_ownership_checker),
    settings: Settings = Depends(get_settings),
) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires the controller, ownership checks, resolver lookup and pricing
    for the commit-reveal flow.
    """
    return RegistrationService(
        controller=controller,
        ownership=ownership,
        resolvers=ResolverLocator(registry, settings.default_resolver_name),
        pricing=PriceOracle(controller),
        identity=transactor.address,
    )


def get_record_service(
    transactor: Web3Transactor = Depends(get_transactor),
    registry: Web3Registry = Depends(get_registry),
    token: Web3RegistrarToken = Depends(get_registrar_token),
    ownership: OwnershipChecker = Depends(get_ownership_checker),
) -> RecordService:
    return RecordService(
        registry=registry,
        token=token,
        resolver=Web3Resolver(transactor),
        ownership=ownership,
        identity=transactor.address,
    )


def get_query_service(
    transactor: Web3Transactor = Depends(get_transactor),
    client: httpx.Client = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> DomainQueryService:
    index = SubgraphDomainIndex(client, settings.subgraph_url)
    return DomainQueryService(index=index, identity=transactor.address)


# HTTP BASIC AUTH security scheme for OpenAPI documentation
http_basic = HTTPBasic()


def require_operator(
    credentials: HTTPBasicCredentials = Depends(http_basic),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Check the HTTP BASIC AUTH credentials against the configured operator.

    FastAPI's HTTPBasic already returns 401 for a missing or malformed
    header. The username is compared in constant time and the password
    with bcrypt; both checks always run. An unset password hash rejects
    every request.

    Returns:
        The authenticated username
    """
    username_ok = secrets.compare_digest(
        credentials.username.encode(), settings.api_username.encode()
    )
    password_hash = settings.api_password_hash.get_secret_value()
    password_ok = False
    if password_hash:
        try:
            password_ok = bcrypt.checkpw(credentials.password.encode(), password_hash.encode())
        except ValueError:
            logger.error("API_PASSWORD_HASH is not a valid bcrypt hash")

    if not (username_ok and password_ok):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username
