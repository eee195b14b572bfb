"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- An in-memory chain standing in for the registry, controller,
  base registrar and resolver contracts
- An in-memory domain index
- Domain services wired to those doubles
"""

import itertools

import pytest

from src.domain.exceptions import RemoteCallError
from src.domain.names import ZERO_ADDRESS, commitment_hash, namehash, token_id
from src.domain.ownership import OwnershipChecker
from src.domain.ports import DomainRecord
from src.domain.pricing import PriceOracle
from src.domain.queries import DomainQueryService
from src.domain.records import RecordService
from src.domain.registration import RegistrationService
from src.domain.resolver import ResolverLocator

IDENTITY = "0x1111111111111111111111111111111111111111"
RESOLVER = "0x2222222222222222222222222222222222222222"
TARGET = "0xabcabcabcabcabcabcabcabcabcabcabcabcabca"
OTHER = "0x3333333333333333333333333333333333333333"


class FakeChain:
    """
    In-memory contracts with the same rules the real ones enforce.

    Implements the Registry, RegistrarController, RegistrarToken and
    Resolver ports at once. Every write records its operation in `sent`.
    """

    def __init__(self, resolver: str = RESOLVER, base_price: int = 1_000_000) -> None:
        self.owners: dict[bytes, str] = {}
        self.resolvers: dict[bytes, str] = {namehash("resolver.eth"): resolver}
        self.addrs: dict[tuple[str, bytes], str] = {}
        self.tokens: dict[int, str] = {}
        self.commitments: set[bytes] = set()
        self.base_price = base_price
        self.last_value: int | None = None
        self.sent: list[str] = []
        self._counter = itertools.count(1)

    def _tx(self, operation: str) -> str:
        self.sent.append(operation)
        return "0x%064x" % next(self._counter)

    # Registry
    def owner(self, node: bytes) -> str:
        return self.owners.get(node, ZERO_ADDRESS)

    def resolver(self, node: bytes) -> str:
        return self.resolvers.get(node, ZERO_ADDRESS)

    def set_owner(self, node: bytes, new_owner: str) -> str:
        self.owners[node] = new_owner
        return self._tx("setOwner")

    # Registrar controller
    def rent_price(self, name: str, duration: int) -> int:
        return self.base_price

    def available(self, name: str) -> bool:
        return self.owner(namehash(f"{name}.eth")) == ZERO_ADDRESS

    def make_commitment(self, name: str, owner: str, salt: str, resolver: str, addr: str) -> bytes:
        return commitment_hash(name, owner, salt, resolver, addr)

    def commit(self, commitment: bytes) -> str:
        self.commitments.add(commitment)
        return self._tx("commit")

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
        commitment = commitment_hash(name, owner, salt, resolver, addr)
        if commitment not in self.commitments:
            raise RemoteCallError("controller.registerWithConfig", "execution reverted")
        if value < self.base_price:
            raise RemoteCallError("controller.registerWithConfig", "insufficient value")
        self.commitments.discard(commitment)
        self.last_value = value
        node = namehash(f"{name}.eth")
        self.owners[node] = owner
        self.resolvers[node] = resolver
        self.addrs[(resolver.lower(), node)] = addr
        self.tokens[token_id(name)] = owner
        return self._tx("registerWithConfig")

    # Base registrar
    def owner_of(self, token: int) -> str:
        if token not in self.tokens:
            raise RemoteCallError("registrar.ownerOf", "execution reverted")
        return self.tokens[token]

    def safe_transfer_from(self, from_address: str, to_address: str, token: int) -> str:
        self.tokens[token] = to_address
        return self._tx("safeTransferFrom")

    # Resolver
    def addr(self, resolver: str, node: bytes) -> str:
        return self.addrs.get((resolver.lower(), node), ZERO_ADDRESS)

    def set_addr(self, resolver: str, node: bytes, new_address: str) -> str:
        self.addrs[(resolver.lower(), node)] = new_address
        return self._tx("setAddr")

    def seed_registration(self, label: str, owner: str, addr: str = TARGET) -> None:
        """Place an already-registered name on the chain."""
        node = namehash(f"{label}.eth")
        self.owners[node] = owner
        self.resolvers[node] = RESOLVER
        self.addrs[(RESOLVER.lower(), node)] = addr
        self.tokens[token_id(label)] = owner


class FakeIndex:
    """In-memory DomainIndex."""

    def __init__(self, records: dict[str, list[DomainRecord]] | None = None) -> None:
        self.records = records or {}

    def domains_owned_by(self, owner: str) -> list[DomainRecord]:
        return list(self.records.get(owner.lower(), []))

    def domains_by_label(self, label: str) -> list[DomainRecord]:
        return [
            record
            for records in self.records.values()
            for record in records
            if record.label_name == label
        ]


@pytest.fixture
def chain() -> FakeChain:
    return FakeChain()


@pytest.fixture
def ownership(chain: FakeChain) -> OwnershipChecker:
    return OwnershipChecker(registry=chain, controller=chain, token=chain, identity=IDENTITY)


@pytest.fixture
def registration_service(chain: FakeChain, ownership: OwnershipChecker) -> RegistrationService:
    return RegistrationService(
        controller=chain,
        ownership=ownership,
        resolvers=ResolverLocator(chain),
        pricing=PriceOracle(chain),
        identity=IDENTITY,
    )


@pytest.fixture
def record_service(chain: FakeChain, ownership: OwnershipChecker) -> RecordService:
    return RecordService(
        registry=chain, token=chain, resolver=chain, ownership=ownership, identity=IDENTITY
    )


@pytest.fixture
def index() -> FakeIndex:
    return FakeIndex(
        {
            IDENTITY.lower(): [
                DomainRecord(
                    id="0x" + "aa" * 32,
                    name="alice.eth",
                    label_name="alice",
                    labelhash="0x" + "bb" * 32,
                    expiry_date=1735689600,
                )
            ]
        }
    )


@pytest.fixture
def query_service(index: FakeIndex) -> DomainQueryService:
    return DomainQueryService(index=index, identity=IDENTITY)
