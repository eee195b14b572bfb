"""
Record mutations on already-registered names.

Every operation checks its preconditions first and returns a
MutationResult error instead of submitting a transaction that the
contracts would reject. Remote failures during the checks or the
write itself propagate as RemoteCallError.
"""

import logging
from dataclasses import dataclass

from .exceptions import RemoteCallError
from .names import is_valid_address, is_zero_address, same_address, token_id
from .ownership import OwnershipChecker
from .ports import MutationError, MutationResult, RegistrarToken, Registry, Resolver

logger = logging.getLogger(__name__)


@dataclass
class RecordService:
    """Resolver address updates and the two kinds of ownership transfer."""

    registry: Registry
    token: RegistrarToken
    resolver: Resolver
    ownership: OwnershipChecker
    identity: str

    def set_address(self, name: str, new_address: str) -> MutationResult:
        """
        Point the name's resolver address record at `new_address`.

        Rejections, in order: invalid address, unregistered name, no
        resolver, record already equal to `new_address`, not our name.
        """
        if not is_valid_address(new_address):
            return self._reject("setAddress", name, MutationError.INVALID_ADDRESS)

        node = self.ownership.node(name)
        try:
            owner = self.registry.owner(node)
            if is_zero_address(owner):
                return self._reject("setAddress", name, MutationError.NOT_REGISTERED)

            resolver = self.registry.resolver(node)
            if is_zero_address(resolver):
                return self._reject("setAddress", name, MutationError.NO_RESOLVER)

            if same_address(self.resolver.addr(resolver, node), new_address):
                return self._reject("setAddress", name, MutationError.ALREADY_SET)

            if not same_address(owner, self.identity):
                return self._reject("setAddress", name, MutationError.NOT_OWNER)

            tx_hash = self.resolver.set_addr(resolver, node, new_address)
        except RemoteCallError:
            logger.exception("setAddress failed: name=%s address=%s", name, new_address)
            raise

        logger.info("Address update submitted: name=%s address=%s tx=%s", name, new_address, tx_hash)
        return MutationResult(tx_hash=tx_hash)

    def transfer_ens(self, name: str, new_owner: str) -> MutationResult:
        """
        Transfer the registrar token (the .eth registration itself).

        The base registrar reverts ownerOf for names that were never
        registered or have expired, so both are rejected before asking.
        """
        if not is_valid_address(new_owner):
            return self._reject("transferEns", name, MutationError.INVALID_ADDRESS)

        try:
            if self.ownership.is_available_by_registry(
                name
            ) or self.ownership.is_available_by_controller(name):
                return self._reject("transferEns", name, MutationError.NOT_REGISTERED)

            if not self.ownership.is_token_held_by_us(name):
                return self._reject("transferEns", name, MutationError.NOT_OWNER)

            tx_hash = self.token.safe_transfer_from(self.identity, new_owner, token_id(name))
        except RemoteCallError:
            logger.exception("transferEns failed: name=%s new_owner=%s", name, new_owner)
            raise

        logger.info("Token transfer submitted: name=%s to=%s tx=%s", name, new_owner, tx_hash)
        return MutationResult(tx_hash=tx_hash)

    def transfer_register(self, name: str, new_owner: str) -> MutationResult:
        """Transfer registry ownership of the name node."""
        if not is_valid_address(new_owner):
            return self._reject("transferRegister", name, MutationError.INVALID_ADDRESS)

        try:
            if not self.ownership.is_owned_by_us(name):
                return self._reject("transferRegister", name, MutationError.NOT_OWNER)

            tx_hash = self.registry.set_owner(self.ownership.node(name), new_owner)
        except RemoteCallError:
            logger.exception("transferRegister failed: name=%s new_owner=%s", name, new_owner)
            raise

        logger.info("Registry transfer submitted: name=%s to=%s tx=%s", name, new_owner, tx_hash)
        return MutationResult(tx_hash=tx_hash)

    def _reject(self, operation: str, name: str, error: MutationError) -> MutationResult:
        logger.info("%s rejected for %s: %s", operation, name, error.value)
        return MutationResult(error=error)
