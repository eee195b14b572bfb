"""Chain adapters - web3 implementations of the contract ports."""

from .client import get_web3
from .contracts import Web3RegistrarController, Web3RegistrarToken, Web3Registry, Web3Resolver
from .transactor import Web3Transactor, remote_call

__all__ = [
    "Web3RegistrarController",
    "Web3RegistrarToken",
    "Web3Registry",
    "Web3Resolver",
    "Web3Transactor",
    "get_web3",
    "remote_call",
]
