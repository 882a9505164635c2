"""Settings module with unified configuration precedence: CLI > ENV > CONFIG FILE."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import tomllib

from dotenv import load_dotenv
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    field_validator,
    model_validator,
)
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from .constants import DEFAULT_MAINNET_RPC_URL, DEFAULT_PYTH_HERMES_ENDPOINT

load_dotenv()

CONFIG_ENV_VAR = "FAIR_LP_ORACLE_CONFIG"
CONFIG_TABLE = "fair_lp_oracle"
SECRET_FIELDS = {"rpc_api_key"}

KNOWN_POOL_ADAPTERS = {"uniswap_v2"}
KNOWN_PRICE_SOURCES = {"chainlink", "pyth"}


class PriceFeedSettings(BaseModel):
    """Where to read the external price of one asset.

    ``feed`` is a Chainlink aggregator address or a Pyth price feed id.
    """

    source: str
    feed: str

    model_config = ConfigDict(extra="ignore")

    @field_validator("source")
    @classmethod
    def known_source(cls, v: str) -> str:
        normalized = v.lower()
        if normalized not in KNOWN_PRICE_SOURCES:
            valid = ", ".join(sorted(KNOWN_PRICE_SOURCES))
            raise ValueError(f"Invalid price source '{v}'. Available sources: {valid}")
        return normalized


class OracleSettings(BaseSettings):
    """Single source of truth for configuration. Values may come from:
    - CLI (init kwargs)
    - ENV / .env (prefixed with FAIR_LP_ORACLE_)
    - Config file (TOML), lowest precedence

    Do not read os.environ or files elsewhere in the codebase.
    """

    # --- endpoints ---
    rpc_url: str = DEFAULT_MAINNET_RPC_URL
    rpc_api_key: SecretStr | None = None
    block_number: int | None = None

    # --- pool resolution ---
    pool_adapter: str = "uniswap_v2"
    base_token_index: int = 0

    # --- price feeds, keyed by asset address ---
    price_feeds: dict[str, PriceFeedSettings] = Field(default_factory=dict)
    max_price_age_seconds: int = Field(
        default=3600,
        gt=0,
        description="Quotes older than this are rejected as stale.",
    )

    # Pyth-specific settings
    pyth_hermes_endpoint: str = DEFAULT_PYTH_HERMES_ENDPOINT
    pyth_max_confidence_ratio: float = Field(default=0.03, gt=0, lt=1.0)

    # --- retries / timeouts ---
    transport_retries: int = Field(default=3, ge=0)
    transport_backoff_seconds: float = Field(default=0.5, ge=0)
    query_timeout_seconds: float | None = 30.0

    # --- logging ---
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="FAIR_LP_ORACLE_",
        env_file=".env",
        extra="ignore",  # ignore unknown keys in env/config file
    )

    @field_validator("rpc_api_key", mode="before")
    @classmethod
    def wrap_secrets(cls, v: Any) -> SecretStr | None:
        """Wrap string secrets in SecretStr."""
        if v is None or isinstance(v, SecretStr):
            return v
        return SecretStr(v)

    @field_validator("pool_adapter")
    @classmethod
    def known_pool_adapter(cls, v: str) -> str:
        normalized = v.lower()
        if normalized not in KNOWN_POOL_ADAPTERS:
            valid = ", ".join(sorted(KNOWN_POOL_ADAPTERS))
            raise ValueError(f"Invalid pool adapter '{v}'. Available adapters: {valid}")
        return normalized

    @field_validator("base_token_index")
    @classmethod
    def two_sided_pool(cls, v: int) -> int:
        if v not in (0, 1):
            raise ValueError(f"base_token_index must be 0 or 1, got {v}")
        return v

    @field_validator("price_feeds", mode="after")
    @classmethod
    def lowercase_feed_keys(
        cls, v: dict[str, PriceFeedSettings]
    ) -> dict[str, PriceFeedSettings]:
        return {address.lower(): feed for address, feed in v.items()}

    @model_validator(mode="after")
    def disable_non_positive_timeout(self) -> "OracleSettings":
        if self.query_timeout_seconds is not None and self.query_timeout_seconds <= 0:
            self.query_timeout_seconds = None
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Custom config-file source with explicit precedence: CLI > ENV > FILE."""
        env_cfg = os.environ.get(CONFIG_ENV_VAR)
        cfg_path = Path(env_cfg) if env_cfg else None

        return (
            init_settings,  # CLI (highest)
            env_settings,  # ENV
            dotenv_settings,  # .env
            TomlConfigSource(settings_cls, cfg_path),  # CONFIG (lowest)
            file_secret_settings,  # optional secrets dir
        )

    def as_safe_dict(self) -> dict[str, Any]:
        """Return the config as a dict with secrets redacted."""
        data = self.model_dump(mode="json")
        if self.rpc_api_key:
            data["rpc_api_key"] = "***redacted***"
        return data

    def price_feed_for(self, asset: str) -> PriceFeedSettings | None:
        return self.price_feeds.get(asset.lower())

    @property
    def rpc_endpoint(self) -> str:
        """RPC URL with the API key appended as a path segment, if configured."""
        if self.rpc_api_key is None:
            return self.rpc_url
        return f"{self.rpc_url.rstrip('/')}/{self.rpc_api_key.get_secret_value()}"


def find_config_file(path: Path | None) -> Path | None:
    """Find the configuration file.

    Search order:
    1. Explicit path (FAIR_LP_ORACLE_CONFIG / --config)
    2. ./fair-lp-oracle.toml
    3. ~/.config/fair-lp-oracle/config.toml
    """
    if path is not None:
        return path if path.exists() else None

    local_config = Path("fair-lp-oracle.toml")
    if local_config.exists():
        return local_config

    user_config = Path.home() / ".config" / "fair-lp-oracle" / "config.toml"
    if user_config.exists():
        return user_config

    return None


class TomlConfigSource(PydanticBaseSettingsSource):
    def __init__(self, settings_cls: type[BaseSettings], path: Path | None):
        super().__init__(settings_cls)
        self._path = path

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return None, "", False

    def __call__(self) -> dict[str, Any]:
        path = find_config_file(self._path)
        if path is None:
            return {}

        with path.open("rb") as f:
            data = tomllib.load(f)  # supports top-level or [fair_lp_oracle]
        body = data.get(CONFIG_TABLE, data)
        if not isinstance(body, dict):
            return {}

        for key in SECRET_FIELDS:
            if key in body:
                raise ValueError(
                    f"Security violation: '{key}' found in TOML config file. "
                    f"Secrets must only be provided via environment variables or CLI flags."
                )

        return body
