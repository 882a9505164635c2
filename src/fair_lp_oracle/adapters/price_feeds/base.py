from __future__ import annotations

import time
from abc import ABC, abstractmethod

from ...domain import AssetQuote
from ...errors import PriceUnavailable, StalePrice
from ...settings import OracleSettings, PriceFeedSettings


class BasePriceFeed(ABC):
    """Abstract base class for asset price feeds."""

    def __init__(self, config: OracleSettings):
        """Initialize the feed with configuration."""
        self.config = config
        self.max_price_age = config.max_price_age_seconds

    @property
    @abstractmethod
    def feed_name(self) -> str:
        """Return the name of this feed."""
        ...

    @abstractmethod
    async def fetch_quote(self, asset: str, feed: PriceFeedSettings) -> AssetQuote:
        """Fetch the current quote for ``asset`` from the configured ``feed``."""
        ...

    def now(self) -> int:
        return int(time.time())

    def validate_quote(self, quote: AssetQuote) -> AssetQuote:
        """Reject quotes that are non-positive or older than the maximum age.

        Raises:
            PriceUnavailable: If the price is zero.
            StalePrice: If the quote is older than ``max_price_age_seconds``.
        """
        if quote.unit_price <= 0:
            raise PriceUnavailable(
                f"{self.feed_name} returned non-positive price for {quote.asset}: {quote.unit_price}"
            )

        age = self.now() - quote.as_of
        if age > self.max_price_age:
            raise StalePrice(
                f"{self.feed_name} price for {quote.asset} is stale "
                f"(age: {age}s, max: {self.max_price_age}s)"
            )
        return quote
