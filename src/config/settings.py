"""
Application settings - pydantic-settings configuration.

This module defines application configuration using pydantic-settings
for environment variable loading with validation and defaults.
Defaults target the legacy .eth deployment on Ethereum mainnet.
"""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Chain endpoint
    rpc_url: str = "http://localhost:8545"
    rpc_timeout: float = 30.0  # Seconds per JSON-RPC request
    chain_id: int | None = None  # Refuse to start on a different chain when set

    # Orchestrating identity (signs every transaction)
    wallet_private_key: SecretStr = SecretStr("")

    # Contract addresses
    ens_registry_address: str = "0x00000000000C2E074eC69A0dFb2997BA6C7d2e1e"
    registrar_controller_address: str = "0x283Af0B28c62C092C9727F1Ee09c02CA627EB7F5"
    base_registrar_address: str = "0x57f1887a8BF19b14fC0dF6Fd9B2acc9Af147eA85"

    # Naming
    tld: str = "eth"
    default_resolver_name: str = "resolver.eth"
    availability_source: Literal["registry", "controller"] = "registry"

    # Transactions
    tx_wait_for_receipt: bool = True
    tx_receipt_timeout: float = 120.0

    # Off-chain index
    subgraph_url: str = "https://api.thegraph.com/subgraphs/name/ensdomains/ens"
    subgraph_timeout: float = 10.0

    # Operator credentials for the private API (bcrypt hash, cost >= 10)
    api_username: str = "admin"
    api_password_hash: SecretStr = SecretStr("")

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
