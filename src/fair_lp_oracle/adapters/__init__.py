from __future__ import annotations

from .pool_adapters import POOL_ADAPTERS
from .price_feeds import PRICE_FEEDS

__all__ = ["POOL_ADAPTERS", "PRICE_FEEDS"]
