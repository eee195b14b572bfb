"""
Ownership and availability checks run before any mutating call.

Registry ownership and registrar-token ownership are separate
authorities that can diverge, so each has its own predicate.
"""

import logging
from dataclasses import dataclass
from typing import Literal

from .names import full_name, is_zero_address, namehash, same_address, token_id
from .ports import RegistrarController, RegistrarToken, Registry

logger = logging.getLogger(__name__)

AvailabilitySource = Literal["registry", "controller"]


@dataclass
class OwnershipChecker:
    """
    Answers "is this name free?" and "do we control it?".

    Attributes:
        registry: ENS registry port
        controller: registrar controller port
        token: base registrar (ERC-721) port
        identity: address of the orchestrating account
        tld: top-level suffix appended to labels
        source: which contract answers availability
    """

    registry: Registry
    controller: RegistrarController
    token: RegistrarToken
    identity: str
    tld: str = "eth"
    source: AvailabilitySource = "registry"

    def node(self, label: str) -> bytes:
        return namehash(full_name(label, self.tld))

    def registry_owner(self, label: str) -> str:
        return self.registry.owner(self.node(label))

    def is_available(self, label: str) -> bool:
        if self.source == "controller":
            return self.is_available_by_controller(label)
        return self.is_available_by_registry(label)

    def is_available_by_registry(self, label: str) -> bool:
        """True iff the registry has no owner for the name."""
        return is_zero_address(self.registry_owner(label))

    def is_available_by_controller(self, label: str) -> bool:
        return bool(self.controller.available(label))

    def is_owned_by_us(self, label: str) -> bool:
        """True iff the registry owner is the orchestrating identity."""
        return same_address(self.registry_owner(label), self.identity)

    def is_token_held_by_us(self, label: str) -> bool:
        """True iff the registrar token for the label belongs to the identity."""
        holder = self.token.owner_of(token_id(label))
        return same_address(holder, self.identity)
