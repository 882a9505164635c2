from __future__ import annotations

from .constants import MAX_DECIMALS, PRICE_DECIMALS
from .errors import InvalidPrecision


def validate_decimals(decimals: int, what: str = "decimals") -> int:
    """Return ``decimals`` if it lies within ``[0, MAX_DECIMALS]``.

    Raises:
        InvalidPrecision: If ``decimals`` is out of range.
    """
    if not 0 <= decimals <= MAX_DECIMALS:
        raise InvalidPrecision(
            f"{what} {decimals} out of supported range [0, {MAX_DECIMALS}]"
        )
    return decimals


def scale_to_price_decimals(value: int, decimals: int) -> int:
    """Re-express a fixed-point ``value`` with ``PRICE_DECIMALS`` places.

    Args:
        value: Integer amount expressed with ``decimals`` decimal places.
        decimals: Current decimal precision of ``value``.

    Returns:
        The amount scaled to ``PRICE_DECIMALS`` precision.

    Notes:
        - ``decimals`` is validated first, so the scale only ever goes up
          and the conversion is exact.
    """
    validate_decimals(decimals, "price decimals")
    return value * 10 ** (PRICE_DECIMALS - decimals)


def exponent_to_decimals(value: int, expo: int) -> tuple[int, int]:
    """Convert a ``value * 10**expo`` pair into ``(unit_price, decimals)``.

    Positive exponents are folded into the value so that decimals is never
    negative.
    """
    if expo >= 0:
        return value * 10**expo, 0
    return value, -expo
