from __future__ import annotations

import asyncio
import logging

import requests

from ...constants import HTTP_TIMEOUT
from ...domain import AssetQuote
from ...errors import PriceUnavailable, TransportError
from ...settings import OracleSettings, PriceFeedSettings
from ...units import exponent_to_decimals
from .base import BasePriceFeed

logger = logging.getLogger(__name__)


class PythPriceFeed(BasePriceFeed):
    """Reads Pyth Network prices from a Hermes endpoint."""

    def __init__(self, config: OracleSettings):
        super().__init__(config)
        self.hermes_endpoint = config.pyth_hermes_endpoint.rstrip("/")
        self.max_confidence_ratio = config.pyth_max_confidence_ratio

    @property
    def feed_name(self) -> str:
        return "pyth"

    async def _http_get(self, url: str, *, params: list | dict | None = None):
        return await asyncio.to_thread(
            lambda: requests.get(url, params=params, timeout=HTTP_TIMEOUT)
        )

    def _check_confidence(self, price: int, conf: int, asset: str) -> None:
        if price == 0:
            raise PriceUnavailable(f"Pyth price for {asset} is zero")
        conf_ratio = conf / abs(price)
        if conf_ratio > self.max_confidence_ratio:
            raise PriceUnavailable(
                f"Pyth confidence ratio {conf_ratio:.4f} for {asset} exceeds maximum {self.max_confidence_ratio}"
            )

    async def fetch_quote(self, asset: str, feed: PriceFeedSettings) -> AssetQuote:
        """Fetch the latest Hermes update for the configured feed id.

        Raises:
            PriceUnavailable: If Hermes does not know the feed, the price is
                non-positive, or its confidence interval is too wide.
            StalePrice: If ``publish_time`` is older than the maximum age.
            TransportError: If the HTTP request fails.
        """
        feed_id = feed.feed.lower().removeprefix("0x")
        url = f"{self.hermes_endpoint}/v2/updates/price/latest"

        try:
            response = await self._http_get(
                url, params=[("ids[]", feed_id), ("parsed", "true")]
            )
        except requests.RequestException as exc:
            raise TransportError(f"Pyth Hermes request failed: {exc}") from exc

        if response.status_code == 404:
            raise PriceUnavailable(f"Pyth feed {feed_id} for {asset} not found")
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise TransportError(f"Pyth Hermes returned an error: {exc}") from exc

        parsed_feeds = response.json().get("parsed", [])
        logger.debug("Received %d price feeds", len(parsed_feeds))
        feeds_by_id = {entry.get("id"): entry for entry in parsed_feeds}
        entry = feeds_by_id.get(feed_id)
        if not entry:
            raise PriceUnavailable(f"Pyth feed {feed_id} for {asset} not in response")

        price_obj = entry.get("price", {}) or {}
        price = int(price_obj.get("price", 0))
        conf = int(price_obj.get("conf", 0))
        expo = int(price_obj.get("expo", 0))
        publish_time = int(price_obj.get("publish_time", 0))

        if price <= 0:
            raise PriceUnavailable(
                f"Pyth feed {feed_id} returned non-positive price {price} for {asset}"
            )
        self._check_confidence(price, conf, asset)

        unit_price, decimals = exponent_to_decimals(price, expo)
        quote = AssetQuote(
            asset=asset,
            unit_price=unit_price,
            decimals=decimals,
            as_of=publish_time,
            source=self.feed_name,
        )
        return self.validate_quote(quote)
