"""
Resolver locator - finds the resolver attached to new registrations.
"""

import logging
from dataclasses import dataclass

from .exceptions import ResolverNotConfigured
from .names import is_zero_address, namehash
from .ports import Registry

logger = logging.getLogger(__name__)


@dataclass
class ResolverLocator:
    """
    Resolves the default resolver through the registry.

    The well-known name (resolver.eth by default) is looked up on every
    call; nothing is cached between requests.
    """

    registry: Registry
    resolver_name: str = "resolver.eth"

    def locate(self) -> str:
        """
        Return the default resolver address.

        Raises:
            ResolverNotConfigured: If the registry has no resolver for the name
        """
        resolver = self.registry.resolver(namehash(self.resolver_name))
        if is_zero_address(resolver):
            logger.error("No resolver registered for %s", self.resolver_name)
            raise ResolverNotConfigured(self.resolver_name)
        return resolver
