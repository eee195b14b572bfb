"""
Unit tests for the web3 transaction transport and contract adapters.

web3 is replaced by MagicMock objects; no RPC endpoint is needed.
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock, Mock

import pytest
from conftest import IDENTITY, RESOLVER, TARGET
from web3 import Web3
from web3.exceptions import ContractLogicError, TimeExhausted

from src.adapters.chain import client as client_module
from src.adapters.chain.abis import (
    BASE_REGISTRAR_ABI,
    ENS_REGISTRY_ABI,
    REGISTRAR_CONTROLLER_ABI,
    RESOLVER_ABI,
)
from src.adapters.chain.client import get_web3
from src.adapters.chain.contracts import (
    Web3RegistrarController,
    Web3RegistrarToken,
    Web3Registry,
    Web3Resolver,
)
from src.adapters.chain.transactor import Web3Transactor, remote_call
from src.domain.exceptions import RemoteCallError

SALT = "0x" + "5a" * 32
TX_HASH = bytes.fromhex("ab" * 32)
CONTRACT = "0x5555555555555555555555555555555555555555"


def make_web3(status: int = 1) -> MagicMock:
    web3 = MagicMock()
    web3.eth.account.from_key.return_value.address = Web3.to_checksum_address(IDENTITY)
    web3.eth.get_transaction_count.return_value = 7
    web3.eth.send_raw_transaction.return_value = TX_HASH
    web3.eth.wait_for_transaction_receipt.return_value = {"status": status, "blockNumber": 42}
    return web3


class TestRemoteCall:
    @pytest.mark.parametrize(
        "error",
        [
            ContractLogicError("execution reverted"),
            TimeExhausted("no receipt"),
            ConnectionError("refused"),
            ValueError({"code": -32000, "message": "nonce too low"}),
        ],
    )
    def test_translates_remote_errors(self, error: Exception) -> None:
        with pytest.raises(RemoteCallError) as exc_info, remote_call("registry.owner"):
            raise error

        assert exc_info.value.operation == "registry.owner"
        assert exc_info.value.__cause__ is error

    def test_other_errors_pass_through(self) -> None:
        with pytest.raises(KeyError), remote_call("registry.owner"):
            raise KeyError("bug")


class TestWeb3Transactor:
    def test_address_from_private_key(self) -> None:
        web3 = make_web3()
        transactor = Web3Transactor(web3, "0x" + "01" * 32)

        web3.eth.account.from_key.assert_called_once_with("0x" + "01" * 32)
        assert transactor.address == Web3.to_checksum_address(IDENTITY)

    def test_call_returns_value(self) -> None:
        function = Mock()
        function.call.return_value = 123

        assert Web3Transactor(make_web3(), "key").call("controller.rentPrice", function) == 123

    def test_call_translates_revert(self) -> None:
        function = Mock()
        function.call.side_effect = ContractLogicError("execution reverted")

        with pytest.raises(RemoteCallError):
            Web3Transactor(make_web3(), "key").call("registrar.ownerOf", function)

    def test_send_builds_signs_and_broadcasts(self) -> None:
        web3 = make_web3()
        transactor = Web3Transactor(web3, "key")
        function = Mock()
        function.build_transaction.return_value = {"to": CONTRACT}

        tx = transactor.send("controller.registerWithConfig", function, value=1_100_000)

        function.build_transaction.assert_called_once_with(
            {"from": transactor.address, "nonce": 7, "value": 1_100_000}
        )
        account = web3.eth.account.from_key.return_value
        account.sign_transaction.assert_called_once_with({"to": CONTRACT})
        web3.eth.send_raw_transaction.assert_called_once_with(
            account.sign_transaction.return_value.raw_transaction
        )
        assert tx == "0x" + "ab" * 32

    def test_nonce_from_pending_block(self) -> None:
        web3 = make_web3()
        transactor = Web3Transactor(web3, "key")

        transactor.send("controller.commit", Mock())

        web3.eth.get_transaction_count.assert_called_once_with(transactor.address, "pending")

    def test_waits_for_receipt(self) -> None:
        web3 = make_web3()
        Web3Transactor(web3, "key", receipt_timeout=30).send("controller.commit", Mock())

        web3.eth.wait_for_transaction_receipt.assert_called_once_with(TX_HASH, timeout=30)

    def test_skips_receipt_when_disabled(self) -> None:
        web3 = make_web3()
        Web3Transactor(web3, "key", wait_for_receipt=False).send("controller.commit", Mock())

        web3.eth.wait_for_transaction_receipt.assert_not_called()

    def test_reverted_receipt_raises(self) -> None:
        transactor = Web3Transactor(make_web3(status=0), "key")

        with pytest.raises(RemoteCallError) as exc_info:
            transactor.send("controller.registerWithConfig", Mock())

        assert "reverted" in str(exc_info.value)

    def test_estimation_revert_raises_before_broadcast(self) -> None:
        web3 = make_web3()
        function = Mock()
        function.build_transaction.side_effect = ContractLogicError("execution reverted")

        with pytest.raises(RemoteCallError):
            Web3Transactor(web3, "key").send("registry.setOwner", function)

        web3.eth.send_raw_transaction.assert_not_called()

    def test_concurrent_sends_get_distinct_nonces(self) -> None:
        """Nonce read and broadcast are serialized for one account."""
        web3 = make_web3()
        pending = {"count": 0}
        guard = threading.Lock()

        def transaction_count(address: str, block: str) -> int:
            value = pending["count"]
            time.sleep(0.01)
            return value

        def broadcast(raw: bytes) -> bytes:
            with guard:
                pending["count"] += 1
            return TX_HASH

        web3.eth.get_transaction_count.side_effect = transaction_count
        web3.eth.send_raw_transaction.side_effect = broadcast
        transactor = Web3Transactor(web3, "key", wait_for_receipt=False)

        nonces: list[int] = []

        def send() -> None:
            function = Mock()
            function.build_transaction.side_effect = lambda tx: nonces.append(tx["nonce"]) or tx
            transactor.send("controller.commit", function)

        with ThreadPoolExecutor(max_workers=5) as executor:
            for future in [executor.submit(send) for _ in range(5)]:
                future.result()

        assert sorted(nonces) == [0, 1, 2, 3, 4]


class TestContractAdapters:
    def test_registry(self) -> None:
        transactor = Mock()
        contract = transactor.contract.return_value
        registry = Web3Registry(transactor, CONTRACT)
        node = b"\x01" * 32

        registry.owner(node)
        registry.set_owner(node, TARGET)

        transactor.contract.assert_called_once_with(CONTRACT, ENS_REGISTRY_ABI)
        contract.functions.owner.assert_called_once_with(node)
        contract.functions.setOwner.assert_called_once_with(
            node, Web3.to_checksum_address(TARGET)
        )
        transactor.send.assert_called_once_with(
            "registry.setOwner", contract.functions.setOwner.return_value
        )

    def test_controller_rent_price_is_int(self) -> None:
        transactor = Mock()
        transactor.call.return_value = 5
        controller = Web3RegistrarController(transactor, CONTRACT)

        assert controller.rent_price("alice", 31536000) == 5
        transactor.contract.assert_called_once_with(CONTRACT, REGISTRAR_CONTROLLER_ABI)
        transactor.contract.return_value.functions.rentPrice.assert_called_once_with(
            "alice", 31536000
        )

    def test_controller_make_commitment_argument_order(self) -> None:
        transactor = Mock()
        transactor.call.return_value = b"\x02" * 32
        contract = transactor.contract.return_value
        controller = Web3RegistrarController(transactor, CONTRACT)

        result = controller.make_commitment("alice", IDENTITY, SALT, RESOLVER, TARGET)

        contract.functions.makeCommitmentWithConfig.assert_called_once_with(
            "alice",
            Web3.to_checksum_address(IDENTITY),
            bytes.fromhex("5a" * 32),
            Web3.to_checksum_address(RESOLVER),
            Web3.to_checksum_address(TARGET),
        )
        assert result == b"\x02" * 32
        transactor.send.assert_not_called()

    def test_controller_register_is_payable(self) -> None:
        transactor = Mock()
        contract = transactor.contract.return_value
        controller = Web3RegistrarController(transactor, CONTRACT)

        controller.register("alice", IDENTITY, 31536000, SALT, RESOLVER, TARGET, 1_100_000)

        contract.functions.registerWithConfig.assert_called_once_with(
            "alice",
            Web3.to_checksum_address(IDENTITY),
            31536000,
            bytes.fromhex("5a" * 32),
            Web3.to_checksum_address(RESOLVER),
            Web3.to_checksum_address(TARGET),
        )
        transactor.send.assert_called_once_with(
            "controller.registerWithConfig",
            contract.functions.registerWithConfig.return_value,
            value=1_100_000,
        )

    def test_registrar_token_transfer(self) -> None:
        transactor = Mock()
        contract = transactor.contract.return_value
        token = Web3RegistrarToken(transactor, CONTRACT)

        token.safe_transfer_from(IDENTITY, TARGET, 99)

        transactor.contract.assert_called_once_with(CONTRACT, BASE_REGISTRAR_ABI)
        contract.functions.safeTransferFrom.assert_called_once_with(
            Web3.to_checksum_address(IDENTITY), Web3.to_checksum_address(TARGET), 99
        )

    def test_resolver_uses_given_address(self) -> None:
        transactor = Mock()
        resolver = Web3Resolver(transactor)
        node = b"\x03" * 32

        resolver.set_addr(RESOLVER, node, TARGET)

        transactor.contract.assert_called_once_with(RESOLVER, RESOLVER_ABI)
        transactor.contract.return_value.functions.setAddr.assert_called_once_with(
            node, Web3.to_checksum_address(TARGET)
        )


class TestGetWeb3:
    def test_creates_client_without_probing(self) -> None:
        assert isinstance(get_web3("http://127.0.0.1:1", 1.0), Web3)

    def test_chain_id_mismatch_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        fake = MagicMock()
        fake.return_value.eth.chain_id = 5
        monkeypatch.setattr(client_module, "Web3", fake)

        with pytest.raises(RuntimeError, match="Chain ID mismatch"):
            get_web3("http://127.0.0.1:1", 1.0, chain_id=1)
