"""Index adapters - Off-chain domain index implementations."""

from .subgraph import SubgraphDomainIndex

__all__ = ["SubgraphDomainIndex"]
