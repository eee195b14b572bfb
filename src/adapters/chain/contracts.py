"""
Contract adapters - Implement the domain's contract ports via web3.

Each class wraps one ABI and routes reads and writes through the shared
Web3Transactor. They use structural subtyping: no explicit inheritance
from the Protocols in src.domain.ports.
"""

from eth_utils import to_bytes
from web3 import Web3

from .abis import BASE_REGISTRAR_ABI, ENS_REGISTRY_ABI, REGISTRAR_CONTROLLER_ABI, RESOLVER_ABI
from .transactor import Web3Transactor


def _checksum(address: str) -> str:
    return Web3.to_checksum_address(address)


class Web3Registry:
    """Implements Registry against the ENS registry contract."""

    def __init__(self, transactor: Web3Transactor, address: str) -> None:
        self._transactor = transactor
        self._contract = transactor.contract(address, ENS_REGISTRY_ABI)

    def owner(self, node: bytes) -> str:
        return self._transactor.call("registry.owner", self._contract.functions.owner(node))

    def resolver(self, node: bytes) -> str:
        return self._transactor.call("registry.resolver", self._contract.functions.resolver(node))

    def set_owner(self, node: bytes, new_owner: str) -> str:
        function = self._contract.functions.setOwner(node, _checksum(new_owner))
        return self._transactor.send("registry.setOwner", function)


class Web3RegistrarController:
    """Implements RegistrarController against the legacy ETHRegistrarController."""

    def __init__(self, transactor: Web3Transactor, address: str) -> None:
        self._transactor = transactor
        self._contract = transactor.contract(address, REGISTRAR_CONTROLLER_ABI)

    def rent_price(self, name: str, duration: int) -> int:
        function = self._contract.functions.rentPrice(name, duration)
        return int(self._transactor.call("controller.rentPrice", function))

    def available(self, name: str) -> bool:
        function = self._contract.functions.available(name)
        return bool(self._transactor.call("controller.available", function))

    def make_commitment(self, name: str, owner: str, salt: str, resolver: str, addr: str) -> bytes:
        function = self._contract.functions.makeCommitmentWithConfig(
            name, _checksum(owner), to_bytes(hexstr=salt), _checksum(resolver), _checksum(addr)
        )
        return bytes(self._transactor.call("controller.makeCommitmentWithConfig", function))

    def commit(self, commitment: bytes) -> str:
        return self._transactor.send("controller.commit", self._contract.functions.commit(commitment))

    def register(
        self,
        name: str,
        owner: str,
        duration: int,
        salt: str,
        resolver: str,
        addr: str,
        value: int,
    ) -> str:
        function = self._contract.functions.registerWithConfig(
            name,
            _checksum(owner),
            duration,
            to_bytes(hexstr=salt),
            _checksum(resolver),
            _checksum(addr),
        )
        return self._transactor.send("controller.registerWithConfig", function, value=value)


class Web3RegistrarToken:
    """Implements RegistrarToken against the .eth base registrar (ERC-721)."""

    def __init__(self, transactor: Web3Transactor, address: str) -> None:
        self._transactor = transactor
        self._contract = transactor.contract(address, BASE_REGISTRAR_ABI)

    def owner_of(self, token_id: int) -> str:
        return self._transactor.call("registrar.ownerOf", self._contract.functions.ownerOf(token_id))

    def safe_transfer_from(self, from_address: str, to_address: str, token_id: int) -> str:
        function = self._contract.functions.safeTransferFrom(
            _checksum(from_address), _checksum(to_address), token_id
        )
        return self._transactor.send("registrar.safeTransferFrom", function)


class Web3Resolver:
    """Implements Resolver for any resolver exposing addr/setAddr."""

    def __init__(self, transactor: Web3Transactor) -> None:
        self._transactor = transactor

    def addr(self, resolver: str, node: bytes) -> str:
        contract = self._transactor.contract(resolver, RESOLVER_ABI)
        return self._transactor.call("resolver.addr", contract.functions.addr(node))

    def set_addr(self, resolver: str, node: bytes, new_address: str) -> str:
        contract = self._transactor.contract(resolver, RESOLVER_ABI)
        function = contract.functions.setAddr(node, _checksum(new_address))
        return self._transactor.send("resolver.setAddr", function)
