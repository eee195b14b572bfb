"""
Subgraph index adapter - Implements DomainIndex protocol over GraphQL.

Queries the ENS subgraph with a shared httpx client. The subgraph stores
addresses lowercased, so owner filters are lowercased before sending.
"""

import logging
from typing import Any

import httpx

from src.domain.exceptions import RemoteCallError
from src.domain.ports import DomainRecord

logger = logging.getLogger(__name__)

DOMAIN_FIELDS = """
    id
    name
    labelName
    labelhash
    registration {
      expiryDate
    }
"""

DOMAINS_BY_OWNER_QUERY = (
    "query DomainsByOwner($owner: String!) {\n"
    "  domains(where: {owner: $owner}) {" + DOMAIN_FIELDS + "  }\n"
    "}"
)

DOMAINS_BY_LABEL_QUERY = (
    "query DomainsByLabel($label: String!) {\n"
    "  domains(where: {labelName: $label}) {" + DOMAIN_FIELDS + "  }\n"
    "}"
)


class SubgraphDomainIndex:
    """
    Implements DomainIndex protocol via the ENS subgraph.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, client: httpx.Client, url: str) -> None:
        """
        Args:
            client: Shared httpx client (owns timeouts and pooling)
            url: GraphQL endpoint of the subgraph
        """
        self._client = client
        self._url = url

    def domains_owned_by(self, owner: str) -> list[DomainRecord]:
        data = self._query("domainsByOwner", DOMAINS_BY_OWNER_QUERY, {"owner": owner.lower()})
        return [self._to_record(item) for item in data.get("domains") or []]

    def domains_by_label(self, label: str) -> list[DomainRecord]:
        data = self._query("domainsByLabel", DOMAINS_BY_LABEL_QUERY, {"label": label})
        return [self._to_record(item) for item in data.get("domains") or []]

    def _query(self, operation: str, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        try:
            response = self._client.post(self._url, json={"query": query, "variables": variables})
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise RemoteCallError(f"subgraph.{operation}", str(exc) or type(exc).__name__) from exc

        if payload.get("errors"):
            message = "; ".join(str(error.get("message", error)) for error in payload["errors"])
            raise RemoteCallError(f"subgraph.{operation}", message)

        logger.debug("Subgraph %s returned %s", operation, payload.get("data"))
        return payload.get("data") or {}

    @staticmethod
    def _to_record(item: dict[str, Any]) -> DomainRecord:
        registration = item.get("registration") or {}
        expiry = registration.get("expiryDate")
        return DomainRecord(
            id=item["id"],
            name=item.get("name"),
            label_name=item.get("labelName"),
            labelhash=item.get("labelhash"),
            expiry_date=int(expiry) if expiry is not None else None,
        )
