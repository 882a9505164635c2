"""Tests for settings configuration loading."""

from __future__ import annotations

from textwrap import dedent

import pytest
from pydantic import ValidationError

from fair_lp_oracle.adapters import POOL_ADAPTERS, PRICE_FEEDS
from fair_lp_oracle.settings import (
    KNOWN_POOL_ADAPTERS,
    KNOWN_PRICE_SOURCES,
    OracleSettings,
)

USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep developer config files and env vars out of these tests."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    for key in (
        "FAIR_LP_ORACLE_CONFIG",
        "FAIR_LP_ORACLE_RPC_URL",
        "FAIR_LP_ORACLE_RPC_API_KEY",
        "FAIR_LP_ORACLE_MAX_PRICE_AGE_SECONDS",
    ):
        monkeypatch.delenv(key, raising=False)


def test_defaults():
    settings = OracleSettings()

    assert settings.pool_adapter == "uniswap_v2"
    assert settings.base_token_index == 0
    assert settings.price_feeds == {}
    assert settings.rpc_endpoint == settings.rpc_url


def test_known_names_match_registries():
    assert KNOWN_POOL_ADAPTERS == set(POOL_ADAPTERS)
    assert KNOWN_PRICE_SOURCES == set(PRICE_FEEDS)


def test_loads_price_feeds_from_toml_table(tmp_path, monkeypatch):
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        dedent(
            f"""
            [fair_lp_oracle]
            rpc_url = "https://rpc.example"
            max_price_age_seconds = 600
            base_token_index = 1

            [fair_lp_oracle.price_feeds."{USDC}"]
            source = "Chainlink"
            feed = "0x8fFfFfd4AfB6115b954Bd326cbe7B4BA576818f6"
            """
        ).strip()
    )
    monkeypatch.setenv("FAIR_LP_ORACLE_CONFIG", str(config_path))

    settings = OracleSettings()

    assert settings.rpc_url == "https://rpc.example"
    assert settings.max_price_age_seconds == 600
    assert settings.base_token_index == 1
    feed = settings.price_feed_for(USDC)
    assert feed is not None
    assert feed.source == "chainlink"
    assert feed.feed == "0x8fFfFfd4AfB6115b954Bd326cbe7B4BA576818f6"
    assert list(settings.price_feeds) == [USDC.lower()]


def test_local_config_file_is_discovered(tmp_path):
    (tmp_path / "fair-lp-oracle.toml").write_text('transport_retries = 9\n')

    settings = OracleSettings()

    assert settings.transport_retries == 9


def test_precedence_cli_over_env_over_file(tmp_path, monkeypatch):
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        'rpc_url = "https://file.example"\nmax_price_age_seconds = 10\n'
    )
    monkeypatch.setenv("FAIR_LP_ORACLE_CONFIG", str(config_path))
    monkeypatch.setenv("FAIR_LP_ORACLE_MAX_PRICE_AGE_SECONDS", "20")
    monkeypatch.setenv("FAIR_LP_ORACLE_RPC_URL", "https://env.example")

    settings = OracleSettings(rpc_url="https://cli.example")

    assert settings.rpc_url == "https://cli.example"
    assert settings.max_price_age_seconds == 20


def test_secret_in_toml_is_rejected(tmp_path, monkeypatch):
    config_path = tmp_path / "config.toml"
    config_path.write_text('rpc_api_key = "leaked"\n')
    monkeypatch.setenv("FAIR_LP_ORACLE_CONFIG", str(config_path))

    with pytest.raises(ValueError, match="Security violation: 'rpc_api_key'"):
        OracleSettings()


def test_api_key_is_redacted_and_appended(monkeypatch):
    monkeypatch.setenv("FAIR_LP_ORACLE_RPC_API_KEY", "s3cret")

    settings = OracleSettings(rpc_url="https://rpc.example/v2/")

    assert settings.rpc_endpoint == "https://rpc.example/v2/s3cret"
    dumped = settings.as_safe_dict()
    assert dumped["rpc_api_key"] == "***redacted***"
    assert "s3cret" not in str(dumped)


def test_unknown_price_source_rejected():
    with pytest.raises(ValidationError, match="Invalid price source 'coingecko'"):
        OracleSettings(price_feeds={USDC: {"source": "coingecko", "feed": "usd-coin"}})


def test_unknown_pool_adapter_rejected():
    with pytest.raises(ValidationError, match="Invalid pool adapter 'curve'"):
        OracleSettings(pool_adapter="curve")


@pytest.mark.parametrize("index", [-1, 2])
def test_base_token_index_must_pick_a_side(index):
    with pytest.raises(ValidationError, match="base_token_index must be 0 or 1"):
        OracleSettings(base_token_index=index)


def test_non_positive_timeout_disables_it():
    assert OracleSettings(query_timeout_seconds=0).query_timeout_seconds is None
    assert OracleSettings(query_timeout_seconds=2.5).query_timeout_seconds == 2.5
