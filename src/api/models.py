"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Addresses on mutation requests are plain strings: the domain
reports malformed ones as a 400 rejection rather than a 422.
"""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field

from src.domain.names import is_valid_address
from src.domain.ports import DomainRecord

ADDRESS_PATTERN = r"^0x[0-9a-fA-F]{40}$"
SALT_PATTERN = r"^0x[0-9a-fA-F]{64}$"
NAME_PATTERN = r"^\s*[^.\s]+(\.[^.\s]+)?\s*$"


def _checksummed(value: str) -> str:
    if not is_valid_address(value):
        raise ValueError("address checksum does not match")
    return value


# Mixed-case addresses must carry a valid EIP-55 checksum
Address = Annotated[str, Field(pattern=ADDRESS_PATTERN), AfterValidator(_checksummed)]


class CommitmentRequest(BaseModel):
    """Request model for the commit phase."""

    name: str = Field(..., pattern=NAME_PATTERN, description="Label to register, e.g. alice")
    address: Address = Field(..., description="Address the name will resolve to")


class CommitmentResponse(BaseModel):
    """Commit outcome. salt and tx are omitted when the name is unavailable."""

    available: bool
    salt: str | None = None
    tx: str | None = None


class RegisterRequest(BaseModel):
    """Request model for the reveal phase."""

    name: str = Field(..., pattern=NAME_PATTERN)
    duration: int = Field(..., gt=0, description="Registration duration in seconds")
    salt: str = Field(..., pattern=SALT_PATTERN, description="Salt returned by /commitment")
    address: Address = Field(..., description="Same address used at commit time")


class SetAddressRequest(BaseModel):
    name: str = Field(..., pattern=NAME_PATTERN)
    newAddress: str = Field(..., min_length=1)


class TransferRequest(BaseModel):
    name: str = Field(..., pattern=NAME_PATTERN)
    address: str = Field(..., min_length=1, description="New owner")


class TransactionResponse(BaseModel):
    """Hash of a submitted transaction."""

    tx: str


class AvailabilityResponse(BaseModel):
    available: bool


class DomainResponse(BaseModel):
    """Domain metadata as reported by the index."""

    id: str
    name: str | None = None
    labelName: str | None = None
    labelhash: str | None = None
    expiryDate: int | None = None

    @classmethod
    def from_record(cls, record: DomainRecord) -> "DomainResponse":
        return cls(
            id=record.id,
            name=record.name,
            labelName=record.label_name,
            labelhash=record.labelhash,
            expiryDate=record.expiry_date,
        )


class DomainListResponse(BaseModel):
    domains: list[DomainResponse]


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
