from __future__ import annotations

from .base import BasePriceFeed
from .chainlink import ChainlinkPriceFeed
from .pyth import PythPriceFeed

PRICE_FEEDS: dict[str, type[BasePriceFeed]] = {
    "chainlink": ChainlinkPriceFeed,
    "pyth": PythPriceFeed,
}

__all__ = ["PRICE_FEEDS", "BasePriceFeed", "ChainlinkPriceFeed", "PythPriceFeed"]
