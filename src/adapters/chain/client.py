"""Web3 client factory."""

import logging

from web3 import HTTPProvider, Web3

logger = logging.getLogger(__name__)


def get_web3(rpc_url: str, timeout: float, chain_id: int | None = None) -> Web3:
    """
    Create the shared Web3 client.

    The connection is not checked here so the service can start while the
    endpoint is down; /health reports connectivity. When `chain_id` is set
    the endpoint must serve that chain.
    """
    logger.debug("Initialising Web3 client for %s", rpc_url)
    web3 = Web3(HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))
    if chain_id is not None:
        actual = web3.eth.chain_id
        if actual != chain_id:
            raise RuntimeError(f"Chain ID mismatch: expected {chain_id} got {actual}")
    return web3
