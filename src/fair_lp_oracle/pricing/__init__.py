from __future__ import annotations

from .calculator import compute_fair_rate, fair_pool_value, reserve_value

__all__ = ["compute_fair_rate", "fair_pool_value", "reserve_value"]
