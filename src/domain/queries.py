"""
Read-only domain lookups against the off-chain index.

Results are whatever the index reports at call time; a lagging index
may omit names registered moments ago.
"""

import logging
from dataclasses import dataclass

from .exceptions import RemoteCallError
from .ports import DomainIndex, DomainRecord

logger = logging.getLogger(__name__)


@dataclass
class DomainQueryService:
    index: DomainIndex
    identity: str

    def owned_domains(self) -> list[DomainRecord]:
        """Domains whose registry owner is the orchestrating identity."""
        try:
            return self.index.domains_owned_by(self.identity)
        except RemoteCallError:
            logger.exception("listOwnedDomains failed: owner=%s", self.identity)
            raise

    def domain_info(self, label: str) -> list[DomainRecord]:
        try:
            return self.index.domains_by_label(label)
        except RemoteCallError:
            logger.exception("getDomainInfo failed: label=%s", label)
            raise
