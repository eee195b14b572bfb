"""
Domain layer - Name registration business logic.

This package contains the commit-reveal orchestration, pricing,
ownership guards and record mutations. It defines its own port
interfaces for the contracts and the index, so infrastructure stays
behind adapters.
"""

from .exceptions import (
    CommitmentMismatch,
    InvalidLabel,
    NameServiceError,
    RemoteCallError,
    ResolverNotConfigured,
)
from .ownership import OwnershipChecker
from .ports import (
    CommitResult,
    DomainIndex,
    DomainRecord,
    MutationError,
    MutationResult,
    RegistrarController,
    RegistrarToken,
    Registry,
    Resolver,
)
from .pricing import PriceOracle
from .queries import DomainQueryService
from .records import RecordService
from .registration import RegistrationService, generate_salt
from .resolver import ResolverLocator

__all__ = [
    "CommitResult",
    "CommitmentMismatch",
    "DomainIndex",
    "DomainQueryService",
    "DomainRecord",
    "InvalidLabel",
    "MutationError",
    "MutationResult",
    "NameServiceError",
    "OwnershipChecker",
    "PriceOracle",
    "RecordService",
    "RegistrarController",
    "RegistrarToken",
    "RegistrationService",
    "Registry",
    "RemoteCallError",
    "Resolver",
    "ResolverLocator",
    "ResolverNotConfigured",
    "generate_salt",
]
