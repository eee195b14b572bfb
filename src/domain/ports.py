"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure: one narrow protocol per contract ABI plus the
off-chain index. Adapters implement these protocols.

Read methods return plain Python values. Write methods submit a signed
transaction from the orchestrating identity and return its hash.
Every method raises RemoteCallError on transport failure or revert.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class MutationError(str, Enum):
    """
    Expected rejection of a state-changing operation.

    The value is the message returned to the caller.
    """

    INVALID_ADDRESS = "Invalid address"
    NOT_REGISTERED = "Domain is not registered"
    NO_RESOLVER = "Domain has no resolver"
    ALREADY_SET = "Domain already resolves to this address"
    NOT_OWNER = "Domain is not owned by this service"


@dataclass(frozen=True)
class MutationResult:
    """Outcome of setAddress / transferEns / transferRegister."""

    tx_hash: str | None = None
    error: MutationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class CommitResult:
    """Outcome of the commit phase. salt/tx_hash are set only when available."""

    available: bool
    salt: str | None = None
    tx_hash: str | None = None


@dataclass(frozen=True)
class DomainRecord:
    """Domain metadata as reported by the off-chain index."""

    id: str
    name: str | None
    label_name: str | None
    labelhash: str | None
    expiry_date: int | None = None


class Registry(Protocol):
    """ENS registry: authoritative owner and resolver per node."""

    def owner(self, node: bytes) -> str: ...

    def resolver(self, node: bytes) -> str: ...

    def set_owner(self, node: bytes, new_owner: str) -> str: ...


class RegistrarController(Protocol):
    """Registrar controller: pricing, availability and commit-reveal."""

    def rent_price(self, name: str, duration: int) -> int: ...

    def available(self, name: str) -> bool: ...

    def make_commitment(
        self, name: str, owner: str, salt: str, resolver: str, addr: str
    ) -> bytes:
        """Pure derivation, no transaction is sent."""
        ...

    def commit(self, commitment: bytes) -> str: ...

    def register(
        self,
        name: str,
        owner: str,
        duration: int,
        salt: str,
        resolver: str,
        addr: str,
        value: int,
    ) -> str:
        """Reveal: payable registerWithConfig carrying `value` wei."""
        ...


class RegistrarToken(Protocol):
    """Base registrar: ERC-721 token per .eth label."""

    def owner_of(self, token_id: int) -> str: ...

    def safe_transfer_from(self, from_address: str, to_address: str, token_id: int) -> str: ...


class Resolver(Protocol):
    """Resolver contracts, addressed per call since each name may use its own."""

    def addr(self, resolver: str, node: bytes) -> str: ...

    def set_addr(self, resolver: str, node: bytes, new_address: str) -> str: ...


class DomainIndex(Protocol):
    """Eventually-consistent off-chain index of domains."""

    def domains_owned_by(self, owner: str) -> list[DomainRecord]: ...

    def domains_by_label(self, label: str) -> list[DomainRecord]: ...
