"""
Registration domain service - commit-reveal orchestration.

This module contains the core business logic for registering a name,
implementing the two-phase commit-reveal protocol that keeps a pending
registration hidden from front-runners.

Commit-Reveal State Machine
===========================

States:
- UNAVAILABLE: Name already owned (terminal, reported as a normal outcome)
- AVAILABLE: Name has no owner
- COMMITTED: Commitment transaction submitted, caller holds the salt
- REGISTERED: Reveal transaction mined, name owned by this service

Transitions (each externally triggered):
    AVAILABLE -> COMMITTED    commit(name, target)
    COMMITTED -> REGISTERED   reveal(name, duration, salt, target)

Nothing is stored locally between the two phases. The controller
enforces the minimum wait and maximum age of a commitment, and rejects
a reveal whose (name, owner, salt, resolver, target) differs from the
committed tuple.
"""

import logging
import secrets
from dataclasses import dataclass

from .exceptions import CommitmentMismatch, RemoteCallError
from .names import commitment_hash
from .ownership import OwnershipChecker
from .ports import CommitResult, RegistrarController
from .pricing import PriceOracle
from .resolver import ResolverLocator

logger = logging.getLogger(__name__)

SALT_BYTES = 32


def generate_salt() -> str:
    """
    Generate a cryptographically secure commitment salt.

    Returns 32 random bytes as 0x-prefixed lowercase hex.
    """
    return "0x" + secrets.token_hex(SALT_BYTES)


@dataclass
class RegistrationService:
    """
    Domain service for name registration.

    Orchestrates availability, resolver lookup, salt generation, pricing
    and the commit / register transactions.

    The orchestrating identity is the registrant: the caller's target
    address is only written to the resolver's address record.
    """

    controller: RegistrarController
    ownership: OwnershipChecker
    resolvers: ResolverLocator
    pricing: PriceOracle
    identity: str

    def check_availability(self, name: str) -> bool:
        try:
            return self.ownership.is_available(name)
        except RemoteCallError:
            logger.exception("checkAvailability failed: name=%s", name)
            raise

    def commit(self, name: str, target_address: str) -> CommitResult:
        """
        Submit a blinded commitment for `name`.

        Args:
            name: Normalized label
            target_address: Address the name should resolve to

        Returns:
            CommitResult(available=False) if the name is taken, otherwise
            the salt the caller must replay at reveal time and the commit
            transaction hash

        Raises:
            RemoteCallError: If any contract call fails
            ResolverNotConfigured: If no default resolver exists
            CommitmentMismatch: If the controller disagrees on the commitment
        """
        try:
            if not self.ownership.is_available(name):
                logger.info("Commit skipped, name unavailable: %s", name)
                return CommitResult(available=False)

            resolver = self.resolvers.locate()
            salt = generate_salt()
            commitment = self._make_commitment(name, salt, resolver, target_address)
            tx_hash = self.controller.commit(commitment)
        except RemoteCallError:
            logger.exception("makeCommitment failed: name=%s target=%s", name, target_address)
            raise

        logger.info("Commitment submitted: name=%s tx=%s", name, tx_hash)
        return CommitResult(available=True, salt=salt, tx_hash=tx_hash)

    def reveal(self, name: str, duration: int, salt: str, target_address: str) -> str:
        """
        Register `name` using a salt returned by a previous commit.

        Price and resolver are fetched again rather than carried over from
        the commit phase. A mismatched salt or target address makes the
        controller revert, which surfaces as RemoteCallError; the caller
        may resubmit while the commitment is still within its window.

        Returns:
            Registration transaction hash
        """
        try:
            price = self.pricing.quote(name, duration)
            resolver = self.resolvers.locate()
            tx_hash = self.controller.register(
                name, self.identity, duration, salt, resolver, target_address, price
            )
        except RemoteCallError:
            logger.exception(
                "register failed: name=%s duration=%s target=%s", name, duration, target_address
            )
            raise

        logger.info("Registration submitted: name=%s value=%s tx=%s", name, price, tx_hash)
        return tx_hash

    def _make_commitment(self, name: str, salt: str, resolver: str, target_address: str) -> bytes:
        """
        Derive the commitment and confirm the controller derives the same.

        Argument order is (name, owner, salt, resolver, addr) on both sides.
        """
        local = commitment_hash(name, self.identity, salt, resolver, target_address)
        remote = self.controller.make_commitment(
            name, self.identity, salt, resolver, target_address
        )
        if bytes(remote) != local:
            logger.error(
                "Commitment mismatch for %s: local=%s remote=%s",
                name,
                local.hex(),
                bytes(remote).hex(),
            )
            raise CommitmentMismatch(name)
        return local
