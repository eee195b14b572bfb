"""
API v1 routes.

Defines the private REST endpoints for registering and managing names.
Handlers are plain functions so FastAPI runs them in its threadpool:
every one of them blocks on RPC or index calls.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.api.dependencies import (
    get_query_service,
    get_record_service,
    get_registration_service,
    require_operator,
)
from src.api.models import (
    AvailabilityResponse,
    CommitmentRequest,
    CommitmentResponse,
    DomainListResponse,
    DomainResponse,
    ErrorResponse,
    RegisterRequest,
    SetAddressRequest,
    TransactionResponse,
    TransferRequest,
)
from src.config.settings import Settings, get_settings
from src.domain.exceptions import InvalidLabel
from src.domain.names import normalize_label
from src.domain.ports import MutationResult
from src.domain.queries import DomainQueryService
from src.domain.records import RecordService
from src.domain.registration import RegistrationService

router = APIRouter(tags=["v1"], dependencies=[Depends(require_operator)])

_rejections = {
    400: {"model": ErrorResponse, "description": "Request rejected"},
    401: {"model": ErrorResponse, "description": "Invalid credentials"},
    500: {"model": ErrorResponse, "description": "Remote call failed"},
}


def _label(name: str, settings: Settings) -> str:
    try:
        label = normalize_label(name, settings.tld)
    except InvalidLabel:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid name",
        ) from None
    if not label or "." in label:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid name")
    return label


def _transaction(result: MutationResult) -> TransactionResponse:
    if not result.ok:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.error.value)
    return TransactionResponse(tx=result.tx_hash)


@router.get(
    "/check",
    response_model=AvailabilityResponse,
    responses=_rejections,
    summary="Check domain availability",
)
def check_availability(
    name: str = Query(..., min_length=1),
    service: RegistrationService = Depends(get_registration_service),
    settings: Settings = Depends(get_settings),
) -> AvailabilityResponse:
    return AvailabilityResponse(available=service.check_availability(_label(name, settings)))


@router.post(
    "/commitment",
    response_model=CommitmentResponse,
    response_model_exclude_none=True,
    responses=_rejections,
    summary="Commit to registering a domain",
    description="Submits a blinded commitment, the first phase of registration. "
    "Keep the returned salt: /register needs it.",
)
def make_commitment(
    request_data: CommitmentRequest,
    service: RegistrationService = Depends(get_registration_service),
    settings: Settings = Depends(get_settings),
) -> CommitmentResponse:
    """
    - **name**: label to register
    - **address**: address the name will resolve to

    Returns `{"available": false}` when the name is already taken.
    """
    result = service.commit(_label(request_data.name, settings), request_data.address)
    return CommitmentResponse(available=result.available, salt=result.salt, tx=result.tx_hash)


@router.post(
    "/register",
    response_model=TransactionResponse,
    responses=_rejections,
    summary="Register a committed domain",
    description="Reveals a previous commitment. name, salt and address must match "
    "the commit call or the controller reverts.",
)
def register(
    request_data: RegisterRequest,
    service: RegistrationService = Depends(get_registration_service),
    settings: Settings = Depends(get_settings),
) -> TransactionResponse:
    tx_hash = service.reveal(
        _label(request_data.name, settings),
        request_data.duration,
        request_data.salt,
        request_data.address,
    )
    return TransactionResponse(tx=tx_hash)


@router.post(
    "/setAddress",
    response_model=TransactionResponse,
    responses=_rejections,
    summary="Set the address a domain resolves to",
)
def set_address(
    request_data: SetAddressRequest,
    service: RecordService = Depends(get_record_service),
    settings: Settings = Depends(get_settings),
) -> TransactionResponse:
    result = service.set_address(_label(request_data.name, settings), request_data.newAddress)
    return _transaction(result)


@router.post(
    "/transferEns",
    response_model=TransactionResponse,
    responses=_rejections,
    summary="Transfer the registrar token of a domain",
)
def transfer_ens(
    request_data: TransferRequest,
    service: RecordService = Depends(get_record_service),
    settings: Settings = Depends(get_settings),
) -> TransactionResponse:
    result = service.transfer_ens(_label(request_data.name, settings), request_data.address)
    return _transaction(result)


@router.post(
    "/transferRegister",
    response_model=TransactionResponse,
    responses=_rejections,
    summary="Transfer registry ownership of a domain",
)
def transfer_register(
    request_data: TransferRequest,
    service: RecordService = Depends(get_record_service),
    settings: Settings = Depends(get_settings),
) -> TransactionResponse:
    result = service.transfer_register(_label(request_data.name, settings), request_data.address)
    return _transaction(result)


@router.get(
    "/ens",
    response_model=DomainListResponse,
    responses=_rejections,
    summary="List domains owned by this service",
)
def list_owned_domains(
    service: DomainQueryService = Depends(get_query_service),
) -> DomainListResponse:
    records = service.owned_domains()
    return DomainListResponse(domains=[DomainResponse.from_record(r) for r in records])


@router.get(
    "/ens/{name}",
    response_model=DomainListResponse,
    responses=_rejections,
    summary="Get index metadata for a label",
)
def get_domain_info(
    name: str,
    service: DomainQueryService = Depends(get_query_service),
    settings: Settings = Depends(get_settings),
) -> DomainListResponse:
    records = service.domain_info(_label(name, settings))
    return DomainListResponse(domains=[DomainResponse.from_record(r) for r in records])
