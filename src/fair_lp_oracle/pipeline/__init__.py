from __future__ import annotations

from .run import get_fair_price

__all__ = ["get_fair_price"]
