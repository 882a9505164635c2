from unittest.mock import AsyncMock, MagicMock

import pytest
import requests

from fair_lp_oracle.adapters.price_feeds.pyth import PythPriceFeed
from fair_lp_oracle.errors import PriceUnavailable, StalePrice, TransportError
from fair_lp_oracle.settings import OracleSettings, PriceFeedSettings

NOW = 1_700_000_000
FEED_ID = "ff61491a931112ddf1bd8147cd1b641375f79f5825126d665480874634fd0ace"


@pytest.fixture
def config():
    return OracleSettings(
        pyth_hermes_endpoint="https://hermes.example/",
        pyth_max_confidence_ratio=0.03,
        max_price_age_seconds=60,
    )


@pytest.fixture
def feed_settings():
    return PriceFeedSettings(source="pyth", feed=f"0x{FEED_ID}")


def hermes_response(price="250012345678", conf="100000000", expo=-8, publish_time=NOW, status=200):
    response = MagicMock()
    response.status_code = status
    response.json.return_value = {
        "parsed": [
            {
                "id": FEED_ID,
                "price": {
                    "price": price,
                    "conf": conf,
                    "expo": expo,
                    "publish_time": publish_time,
                },
            }
        ]
    }
    return response


@pytest.fixture
def feed(config):
    feed = PythPriceFeed(config)
    feed.now = lambda: NOW
    return feed


def test_feed_name(feed):
    assert feed.feed_name == "pyth"


def test_endpoint_trailing_slash_stripped(feed):
    assert feed.hermes_endpoint == "https://hermes.example"


@pytest.mark.asyncio
async def test_fetch_quote_parses_hermes_price(feed, feed_settings):
    feed._http_get = AsyncMock(return_value=hermes_response())

    quote = await feed.fetch_quote("0xWETH", feed_settings)

    assert quote.unit_price == 250012345678
    assert quote.decimals == 8
    assert quote.as_of == NOW
    assert quote.source == "pyth"
    feed._http_get.assert_awaited_once_with(
        "https://hermes.example/v2/updates/price/latest",
        params=[("ids[]", FEED_ID), ("parsed", "true")],
    )


@pytest.mark.asyncio
async def test_fetch_quote_folds_positive_exponent(feed, feed_settings):
    feed._http_get = AsyncMock(return_value=hermes_response(price="5", conf="0", expo=2))

    quote = await feed.fetch_quote("0xWETH", feed_settings)

    assert quote.unit_price == 500
    assert quote.decimals == 0


@pytest.mark.asyncio
async def test_fetch_quote_rejects_wide_confidence(feed, feed_settings):
    feed._http_get = AsyncMock(
        return_value=hermes_response(price="100000000", conf="5000000")
    )

    with pytest.raises(PriceUnavailable, match=r"confidence ratio .* exceeds maximum"):
        await feed.fetch_quote("0xWETH", feed_settings)


@pytest.mark.asyncio
async def test_fetch_quote_rejects_zero_price(feed, feed_settings):
    feed._http_get = AsyncMock(return_value=hermes_response(price="0"))

    with pytest.raises(PriceUnavailable, match="non-positive price"):
        await feed.fetch_quote("0xWETH", feed_settings)


@pytest.mark.asyncio
async def test_fetch_quote_rejects_stale_publish_time(feed, feed_settings):
    feed._http_get = AsyncMock(return_value=hermes_response(publish_time=NOW - 61))

    with pytest.raises(StalePrice):
        await feed.fetch_quote("0xWETH", feed_settings)


@pytest.mark.asyncio
async def test_fetch_quote_unknown_feed(feed, feed_settings):
    feed._http_get = AsyncMock(return_value=hermes_response(status=404))

    with pytest.raises(PriceUnavailable, match="not found"):
        await feed.fetch_quote("0xWETH", feed_settings)


@pytest.mark.asyncio
async def test_fetch_quote_feed_missing_from_response(feed, feed_settings):
    response = hermes_response()
    response.json.return_value = {"parsed": []}
    feed._http_get = AsyncMock(return_value=response)

    with pytest.raises(PriceUnavailable, match="not in response"):
        await feed.fetch_quote("0xWETH", feed_settings)


@pytest.mark.asyncio
async def test_fetch_quote_connection_error(feed, feed_settings):
    feed._http_get = AsyncMock(side_effect=requests.ConnectionError("unreachable"))

    with pytest.raises(TransportError, match="unreachable"):
        await feed.fetch_quote("0xWETH", feed_settings)


@pytest.mark.asyncio
async def test_fetch_quote_server_error(feed, feed_settings):
    response = hermes_response(status=503)
    response.raise_for_status.side_effect = requests.HTTPError("503 Server Error")
    feed._http_get = AsyncMock(return_value=response)

    with pytest.raises(TransportError, match="503"):
        await feed.fetch_quote("0xWETH", feed_settings)
