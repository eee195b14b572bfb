"""
Web3 transaction transport shared by every contract adapter.

Reads are plain eth_call. Writes are built, signed locally with the
orchestrating identity's key and broadcast. The identity is a single
account, so nonce assignment and broadcast are serialized behind a lock;
waiting for the receipt happens outside it so concurrent requests only
queue for the broadcast itself.

Every failure (transport error, timeout, revert) leaves this module as
RemoteCallError.
"""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from web3 import Web3
from web3.contract.contract import ContractFunction
from web3.exceptions import Web3Exception

from src.domain.exceptions import RemoteCallError

logger = logging.getLogger(__name__)


@contextmanager
def remote_call(operation: str) -> Iterator[None]:
    """Translate web3 and transport exceptions into RemoteCallError."""
    try:
        yield
    except (Web3Exception, OSError, ValueError) as exc:
        raise RemoteCallError(operation, str(exc) or type(exc).__name__) from exc


class Web3Transactor:
    """
    Signs and submits transactions for one account.

    Args:
        web3: Shared Web3 client
        private_key: Hex private key of the orchestrating identity
        wait_for_receipt: Block until each transaction is mined
        receipt_timeout: Seconds to wait for a receipt
    """

    def __init__(
        self,
        web3: Web3,
        private_key: str,
        wait_for_receipt: bool = True,
        receipt_timeout: float = 120.0,
    ) -> None:
        self.web3 = web3
        self._account = web3.eth.account.from_key(private_key)
        self._wait_for_receipt = wait_for_receipt
        self._receipt_timeout = receipt_timeout
        self._lock = threading.Lock()

    @property
    def address(self) -> str:
        return self._account.address

    def contract(self, address: str, abi: list) -> Any:
        return self.web3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)

    def call(self, operation: str, function: ContractFunction) -> Any:
        """Execute a read-only call."""
        with remote_call(operation):
            return function.call()

    def send(self, operation: str, function: ContractFunction, value: int = 0) -> str:
        """
        Build, sign and broadcast a transaction, returning its hash.

        Gas and fee fields are filled in by web3 (estimate + node fee
        suggestion); a call that would revert fails at estimation.
        """
        with remote_call(operation):
            with self._lock:
                nonce = self.web3.eth.get_transaction_count(self.address, "pending")
                transaction = function.build_transaction(
                    {"from": self.address, "nonce": nonce, "value": value}
                )
                signed = self._account.sign_transaction(transaction)
                tx_hash = self.web3.eth.send_raw_transaction(signed.raw_transaction)
            tx_id = Web3.to_hex(tx_hash)
            logger.info("%s broadcast: tx=%s nonce=%s", operation, tx_id, nonce)

            if self._wait_for_receipt:
                receipt = self.web3.eth.wait_for_transaction_receipt(
                    tx_hash, timeout=self._receipt_timeout
                )
                if receipt["status"] != 1:
                    raise RemoteCallError(operation, f"transaction {tx_id} reverted")
                logger.info("%s mined: tx=%s block=%s", operation, tx_id, receipt["blockNumber"])
        return tx_id
