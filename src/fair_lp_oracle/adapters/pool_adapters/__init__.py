from __future__ import annotations

from .base import BasePoolAdapter
from .uniswap_v2 import UniswapV2PoolAdapter

POOL_ADAPTERS: dict[str, type[BasePoolAdapter]] = {
    "uniswap_v2": UniswapV2PoolAdapter,
}

__all__ = ["POOL_ADAPTERS", "BasePoolAdapter", "UniswapV2PoolAdapter"]
