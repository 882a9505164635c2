"""JSON-safe serialization of fair rates."""

from __future__ import annotations

import json
from typing import Any

from ..domain import FairRate


def fair_rate_to_dict(fair_rate: FairRate) -> dict[str, Any]:
    """Serialize a FairRate without losing precision.

    Wide integers are emitted as decimal strings so that JSON consumers
    with 53-bit numbers do not round them. ``rate_numerator`` over
    ``rate_denominator`` is the exact rate in lowest terms.
    """
    exact = fair_rate.as_fraction()
    return {
        "lp_token": fair_rate.lp_token,
        "rate": format(fair_rate.rate, "f"),
        "rate_numerator": str(exact.numerator),
        "rate_denominator": str(exact.denominator),
        "fair_pool_value": str(fair_rate.fair_pool_value),
        "total_lp_supply": str(fair_rate.total_lp_supply),
        "last_updated": fair_rate.last_updated,
    }


def dumps(fair_rate: FairRate) -> str:
    return json.dumps(fair_rate_to_dict(fair_rate), indent=2)
