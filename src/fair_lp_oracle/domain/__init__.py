"""Domain models for fair LP pricing."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction

from ..constants import PRICE_DECIMALS
from ..units import validate_decimals


@dataclass(frozen=True)
class AssetReserve:
    """One side of a pool's holdings, in raw token units."""

    asset: str
    amount: int
    decimals: int

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError(f"Reserve amount must be non-negative, got {self.amount}")


@dataclass(frozen=True)
class AssetQuote:
    """Independently sourced price for one asset.

    ``unit_price`` is a fixed-point integer: the price is
    ``unit_price / 10**decimals``. ``as_of`` is a unix timestamp in seconds.
    """

    asset: str
    unit_price: int
    decimals: int
    as_of: int
    source: str = ""

    def __post_init__(self) -> None:
        if self.unit_price < 0:
            raise ValueError(
                f"Price value must be non-negative, got {self.unit_price}"
            )


@dataclass(frozen=True)
class PoolSnapshot:
    """Reserves and LP supply of a two-asset pool at query time."""

    lp_token: str
    reserve_base: AssetReserve
    reserve_quote: AssetReserve
    total_lp_supply: int

    def __post_init__(self) -> None:
        if self.total_lp_supply < 0:
            raise ValueError(
                f"Total LP supply must be non-negative, got {self.total_lp_supply}"
            )


@dataclass(frozen=True)
class FairRate:
    """Fair value of one raw LP share unit.

    ``fair_pool_value`` is expressed with ``PRICE_DECIMALS`` fractional digits.
    ``rate`` is that value divided by ``total_lp_supply``, floored at the same
    precision; ``as_fraction`` gives the exact ratio.

    Flooring per raw unit costs significant digits when the LP token itself has
    many decimals: an 18-decimal LP token with a 1e24 raw supply keeps only a
    few digits in ``rate``. Use ``rate_per_token`` or ``as_fraction`` there.
    """

    lp_token: str
    rate: Decimal
    last_updated: int
    fair_pool_value: int
    total_lp_supply: int

    def as_fraction(self) -> Fraction:
        return Fraction(
            self.fair_pool_value, self.total_lp_supply * 10**PRICE_DECIMALS
        )

    def rate_per_token(self, lp_decimals: int) -> Decimal:
        """Fair value of one whole LP token with ``lp_decimals`` decimals.

        Floored at ``PRICE_DECIMALS`` places, like ``rate``.
        """
        validate_decimals(lp_decimals, "LP token decimals")
        atomics = self.fair_pool_value * 10**lp_decimals // self.total_lp_supply
        return Decimal(f"{atomics}E-{PRICE_DECIMALS}")
