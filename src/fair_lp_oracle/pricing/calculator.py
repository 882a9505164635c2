"""Fair LP token pricing.

The pool is valued from the geometric mean of the external value of its two
reserves rather than from either reserve alone:

    value_i   = reserve_i * price_i / 10**decimals_i
    pool      = 2 * sqrt(value_base * value_quote)
    rate      = pool / total_lp_supply

For a constant-product pool ``reserve_base * reserve_quote`` is unchanged by a
swap, so a same-block trade that skews the reserve ratio leaves the product of
values (priced externally) unchanged too. Summing the two values instead would
let a flash-loan sandwich inflate the LP price.
See https://blog.alphafinance.io/fair-lp-token-pricing/

All intermediates are integers with ``PRICE_DECIMALS`` fractional digits.
``value_i`` is floored, so value below one price atomic is dropped; that loss is
accepted in exchange for exact integer arithmetic downstream.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from ..constants import PRICE_DECIMALS
from ..domain import AssetQuote, AssetReserve, FairRate, PoolSnapshot
from ..errors import DivisionByZero
from ..math import U256, check_u128, integer_sqrt, wide_multiply
from ..units import scale_to_price_decimals, validate_decimals

logger = logging.getLogger(__name__)


def reserve_value(reserve: AssetReserve, quote: AssetQuote) -> int:
    """External value of one reserve, with ``PRICE_DECIMALS`` places.

    The multiplication is done at 256 bits before dividing by the token
    precision, then narrowed back to 128 bits.

    Raises:
        InvalidPrecision: If the reserve or quote decimals are out of range.
        ArithmeticOverflow: If the amount, the rescaled price or the
            resulting value do not fit in 128 bits.
    """
    validate_decimals(reserve.decimals, f"reserve decimals for {reserve.asset}")
    amount = check_u128(reserve.amount, f"reserve amount for {reserve.asset}")
    price = check_u128(
        scale_to_price_decimals(quote.unit_price, quote.decimals),
        f"unit price for {quote.asset}",
    )

    value = wide_multiply(amount, price) // 10**reserve.decimals
    return value.as_u128()


def fair_pool_value(value_base: int, value_quote: int) -> int:
    """Twice the geometric mean of the two reserve values."""
    product = wide_multiply(value_base, value_quote)
    geo_mean = integer_sqrt(product)
    return (U256(2) * geo_mean).as_u128()


def compute_fair_rate(
    snapshot: PoolSnapshot,
    base_quote: AssetQuote,
    quote_quote: AssetQuote,
) -> FairRate:
    """Compute the manipulation-resistant fair rate of an LP share.

    Args:
        snapshot: Pool reserves and total LP supply
        base_quote: External price of ``snapshot.reserve_base``'s asset
        quote_quote: External price of ``snapshot.reserve_quote``'s asset

    Returns:
        FairRate whose ``last_updated`` is the older of the two quote times.

    Raises:
        DivisionByZero: If the pool has no LP supply.
        InvalidPrecision: If any decimals value is out of range.
        ArithmeticOverflow: If any step exceeds its width budget.
    """
    if snapshot.total_lp_supply == 0:
        raise DivisionByZero(f"LP token {snapshot.lp_token} has zero total supply")

    value_base = reserve_value(snapshot.reserve_base, base_quote)
    value_quote = reserve_value(snapshot.reserve_quote, quote_quote)
    pool_value = fair_pool_value(value_base, value_quote)

    # pool_value already carries PRICE_DECIMALS places
    rate_atomics = pool_value // snapshot.total_lp_supply
    rate = Decimal(f"{rate_atomics}E-{PRICE_DECIMALS}")

    logger.debug(
        "LP %s: value_base=%d value_quote=%d pool_value=%d supply=%d",
        snapshot.lp_token,
        value_base,
        value_quote,
        pool_value,
        snapshot.total_lp_supply,
    )

    return FairRate(
        lp_token=snapshot.lp_token,
        rate=rate,
        last_updated=min(base_quote.as_of, quote_quote.as_of),
        fair_pool_value=pool_value,
        total_lp_supply=snapshot.total_lp_supply,
    )
