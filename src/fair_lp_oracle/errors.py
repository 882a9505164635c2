"""Error taxonomy for fair LP price queries.

Every failure surfaced by a query is a ``FairPriceError`` subclass. Callers
branch on ``category`` to tell apart missing data, an undefined computation
and a violated precision budget.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    DIVISION_BY_ZERO = "division_by_zero"
    INVALID_PRECISION = "invalid_precision"
    ARITHMETIC_OVERFLOW = "arithmetic_overflow"
    POOL_NOT_FOUND = "pool_not_found"
    PRICE_UNAVAILABLE = "price_unavailable"
    STALE_PRICE = "stale_price"
    TRANSPORT_ERROR = "transport_error"


class ErrorCategory(str, Enum):
    NO_DATA = "no_data"
    UNDEFINED = "undefined"
    PRECISION_VIOLATED = "precision_violated"


class FairPriceError(Exception):
    """Base class for all fair price query failures."""

    kind: ErrorKind
    category: ErrorCategory

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.kind.value,
            "category": self.category.value,
            "message": self.message,
        }


class DivisionByZero(FairPriceError, ArithmeticError):
    """Total LP supply is zero, so no rate can be defined."""

    kind = ErrorKind.DIVISION_BY_ZERO
    category = ErrorCategory.UNDEFINED


class InvalidPrecision(FairPriceError, ArithmeticError):
    """A decimals value is outside the supported range."""

    kind = ErrorKind.INVALID_PRECISION
    category = ErrorCategory.PRECISION_VIOLATED


class ArithmeticOverflow(FairPriceError, ArithmeticError):
    """A computation step exceeded the arithmetic width budget."""

    kind = ErrorKind.ARITHMETIC_OVERFLOW
    category = ErrorCategory.PRECISION_VIOLATED


class PoolNotFound(FairPriceError):
    """The LP token does not resolve to a readable pool."""

    kind = ErrorKind.POOL_NOT_FOUND
    category = ErrorCategory.NO_DATA


class PriceUnavailable(FairPriceError):
    """No usable price exists for an asset."""

    kind = ErrorKind.PRICE_UNAVAILABLE
    category = ErrorCategory.NO_DATA


class StalePrice(FairPriceError):
    """A price exists but is older than the configured maximum age."""

    kind = ErrorKind.STALE_PRICE
    category = ErrorCategory.NO_DATA


class TransportError(FairPriceError):
    """An RPC or HTTP request to a collaborator failed."""

    kind = ErrorKind.TRANSPORT_ERROR
    category = ErrorCategory.NO_DATA
