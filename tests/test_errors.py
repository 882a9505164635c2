import pytest

from fair_lp_oracle.errors import (
    ArithmeticOverflow,
    DivisionByZero,
    ErrorCategory,
    FairPriceError,
    InvalidPrecision,
    PoolNotFound,
    PriceUnavailable,
    StalePrice,
    TransportError,
)


@pytest.mark.parametrize(
    "error_cls, kind, category",
    [
        (DivisionByZero, "division_by_zero", ErrorCategory.UNDEFINED),
        (InvalidPrecision, "invalid_precision", ErrorCategory.PRECISION_VIOLATED),
        (ArithmeticOverflow, "arithmetic_overflow", ErrorCategory.PRECISION_VIOLATED),
        (PoolNotFound, "pool_not_found", ErrorCategory.NO_DATA),
        (PriceUnavailable, "price_unavailable", ErrorCategory.NO_DATA),
        (StalePrice, "stale_price", ErrorCategory.NO_DATA),
        (TransportError, "transport_error", ErrorCategory.NO_DATA),
    ],
)
def test_error_taxonomy(error_cls, kind, category):
    error = error_cls("boom")

    assert isinstance(error, FairPriceError)
    assert error.kind.value == kind
    assert error.category is category
    assert error.to_dict() == {
        "error": kind,
        "category": category.value,
        "message": "boom",
    }


def test_arithmetic_errors_are_arithmetic_errors():
    for error_cls in (DivisionByZero, InvalidPrecision, ArithmeticOverflow):
        assert issubclass(error_cls, ArithmeticError)

    for error_cls in (PoolNotFound, PriceUnavailable, StalePrice, TransportError):
        assert not issubclass(error_cls, ArithmeticError)
