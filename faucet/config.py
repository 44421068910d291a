"""Application configuration using pydantic-settings."""

import logging
from functools import lru_cache
from typing import Any, Optional

from limits import parse_many
from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEVNET = "devnet"
TESTNET = "testnet"

LAMPORTS_PER_SOL = 1_000_000_000


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Solana Faucet Gateway"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Upstream RPC
    solana_rpc_url: Optional[str] = None  # overrides every network when set
    devnet_rpc_url: str = "https://api.devnet.solana.com"
    testnet_rpc_url: str = "https://api.testnet.solana.com"
    rpc_timeout_secs: float = 30.0

    # Faucet policy
    airdrop_amount: int = 5 * LAMPORTS_PER_SOL  # lamports
    rate_limit_secs: int = 3600
    rate_limit_prune_threshold: int = 10_000

    # Per-IP request limit applied by slowapi, independent of the claim cooldown
    request_rate_limit: str = "60/minute"

    @field_validator(
        "port",
        "airdrop_amount",
        "rate_limit_secs",
        "rate_limit_prune_threshold",
        mode="before",
    )
    @classmethod
    def _lenient_unsigned(cls, value: Any, info: ValidationInfo) -> Any:
        """Fall back to the field default when a value does not parse."""
        default = cls.model_fields[info.field_name].default
        try:
            parsed = int(str(value).strip())
        except (TypeError, ValueError):
            logger.warning(
                f"Invalid value {value!r} for {info.field_name}, using default {default}"
            )
            return default
        if parsed < 0:
            logger.warning(
                f"Negative value {value!r} for {info.field_name}, using default {default}"
            )
            return default
        return parsed

    @field_validator("rpc_timeout_secs", mode="before")
    @classmethod
    def _lenient_timeout(cls, value: Any, info: ValidationInfo) -> Any:
        default = cls.model_fields[info.field_name].default
        try:
            parsed = float(str(value).strip())
        except (TypeError, ValueError):
            logger.warning(f"Invalid RPC timeout {value!r}, using default {default}")
            return default
        return parsed if parsed > 0 else default

    @field_validator("log_level", mode="before")
    @classmethod
    def _known_log_level(cls, value: Any, info: ValidationInfo) -> Any:
        default = cls.model_fields[info.field_name].default
        level = str(value).strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            logger.warning(f"Unknown log level {value!r}, using default {default}")
            return default
        return level

    @field_validator("request_rate_limit", mode="before")
    @classmethod
    def _parsable_rate_limit(cls, value: Any, info: ValidationInfo) -> Any:
        """slowapi only parses the limit per request, so reject bad strings up front."""
        default = cls.model_fields[info.field_name].default
        try:
            if not parse_many(str(value)):
                raise ValueError("no limits given")
        except ValueError:
            logger.warning(f"Invalid request rate limit {value!r}, using default {default}")
            return default
        return str(value)

    @field_validator("solana_rpc_url", mode="before")
    @classmethod
    def _blank_override_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def airdrop_sol(self) -> float:
        """Configured airdrop amount in SOL."""
        return self.airdrop_amount / 1e9

    def rpc_url_for(self, network: Optional[str]) -> str:
        """Resolve the upstream endpoint for a network name.

        Unknown or missing networks fall back to devnet.
        """
        if self.solana_rpc_url:
            return self.solana_rpc_url
        if network == TESTNET:
            return self.testnet_rpc_url
        return self.devnet_rpc_url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
