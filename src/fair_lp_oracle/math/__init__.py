from __future__ import annotations

from .wide import UINT128_MAX, UINT256_MAX, U256, check_u128, integer_sqrt, wide_multiply

__all__ = [
    "UINT128_MAX",
    "UINT256_MAX",
    "U256",
    "check_u128",
    "integer_sqrt",
    "wide_multiply",
]
