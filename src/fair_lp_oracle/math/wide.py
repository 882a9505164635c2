"""Fixed-width unsigned integers for overflow-checked pricing arithmetic.

Python ints never overflow, so the width budget has to be enforced
explicitly. Operands of the pricing formula live in native width (128 bits);
their products live in ``U256``. Anything outside those bounds raises
``ArithmeticOverflow`` instead of being carried along silently.

Usage:
    product = wide_multiply(value_base, value_quote)   # U256
    root = integer_sqrt(product)                        # U256
    pool_value = (U256(2) * root).as_u128()             # int
"""

from __future__ import annotations

import math

from ..errors import ArithmeticOverflow

UINT128_MAX = 2**128 - 1
UINT256_MAX = 2**256 - 1


def check_u128(value: int, what: str = "value") -> int:
    """Return ``value`` if it fits in an unsigned 128-bit integer.

    Raises:
        ArithmeticOverflow: If ``value`` is negative or wider than 128 bits.
    """
    if value < 0 or value > UINT128_MAX:
        raise ArithmeticOverflow(f"{what} {value} does not fit in uint128")
    return value


class U256:
    """Unsigned 256-bit integer value type.

    Attributes:
        value: The underlying integer (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | U256) -> None:
        if isinstance(value, U256):
            self._value = value._value
            return
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"U256 requires int, got {type(value).__name__}")
        if value < 0 or value > UINT256_MAX:
            raise ArithmeticOverflow(f"{value} does not fit in uint256")
        self._value = value

    @property
    def value(self) -> int:
        return self._value

    @staticmethod
    def _unwrap(other: int | U256) -> int:
        if isinstance(other, U256):
            return other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return other
        return NotImplemented  # type: ignore[return-value]

    def __mul__(self, other: int | U256) -> U256:
        o = self._unwrap(other)
        if o is NotImplemented:
            return NotImplemented
        return U256(self._value * o)

    __rmul__ = __mul__

    def __add__(self, other: int | U256) -> U256:
        o = self._unwrap(other)
        if o is NotImplemented:
            return NotImplemented
        return U256(self._value + o)

    __radd__ = __add__

    def __floordiv__(self, other: int | U256) -> U256:
        o = self._unwrap(other)
        if o is NotImplemented:
            return NotImplemented
        if o == 0:
            raise ZeroDivisionError("U256 division by zero")
        return U256(self._value // o)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, U256):
            return self._value == other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: int | U256) -> bool:
        o = self._unwrap(other)
        if o is NotImplemented:
            return NotImplemented
        return self._value < o

    def __le__(self, other: int | U256) -> bool:
        o = self._unwrap(other)
        if o is NotImplemented:
            return NotImplemented
        return self._value <= o

    def __gt__(self, other: int | U256) -> bool:
        o = self._unwrap(other)
        if o is NotImplemented:
            return NotImplemented
        return self._value > o

    def __ge__(self, other: int | U256) -> bool:
        o = self._unwrap(other)
        if o is NotImplemented:
            return NotImplemented
        return self._value >= o

    def __hash__(self) -> int:
        return hash(self._value)

    def __int__(self) -> int:
        return self._value

    __index__ = __int__

    def __repr__(self) -> str:
        return f"U256({self._value})"

    def integer_sqrt(self) -> U256:
        return U256(math.isqrt(self._value))

    def as_u128(self) -> int:
        """Narrow to native width, raising instead of truncating."""
        return check_u128(self._value)


def wide_multiply(a: int, b: int) -> U256:
    """Multiply two native-width integers into a 256-bit result.

    Raises:
        ArithmeticOverflow: If either operand is wider than 128 bits.
    """
    check_u128(a, "left operand")
    check_u128(b, "right operand")
    return U256(a) * b


def integer_sqrt(x: U256 | int) -> U256:
    """Return ``floor(sqrt(x))`` exactly, for any 256-bit ``x``."""
    return U256(x).integer_sqrt()
