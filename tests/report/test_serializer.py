import json
from decimal import Decimal

from rich.console import Console

from fair_lp_oracle.domain import FairRate
from fair_lp_oracle.errors import DivisionByZero
from fair_lp_oracle.report import (
    dumps,
    fair_rate_to_dict,
    format_error_panel,
    format_fair_rate_table,
)

FAIR_RATE = FairRate(
    lp_token="0xB4e16d0168e52d35CaCD2c6185b44281Ec28C9Dc",
    rate=Decimal("1.333333333333333333"),
    last_updated=1_700_000_000,
    fair_pool_value=4 * 10**18,
    total_lp_supply=3,
)


def test_fair_rate_to_dict_preserves_precision():
    data = fair_rate_to_dict(FAIR_RATE)

    assert data == {
        "lp_token": "0xB4e16d0168e52d35CaCD2c6185b44281Ec28C9Dc",
        "rate": "1.333333333333333333",
        "rate_numerator": "4",
        "rate_denominator": "3",
        "fair_pool_value": "4000000000000000000",
        "total_lp_supply": "3",
        "last_updated": 1_700_000_000,
    }


def test_rate_is_never_rendered_in_exponent_form():
    tiny = FairRate(
        lp_token="0xLP",
        rate=Decimal("1E-18"),
        last_updated=0,
        fair_pool_value=10**20,
        total_lp_supply=10**20,
    )

    assert fair_rate_to_dict(tiny)["rate"] == "0.000000000000000001"


def test_wide_values_survive_json():
    wide = FairRate(
        lp_token="0xLP",
        rate=Decimal("200"),
        last_updated=1,
        fair_pool_value=2 * 10**38,
        total_lp_supply=10**18,
    )

    decoded = json.loads(dumps(wide))

    assert int(decoded["fair_pool_value"]) == 2 * 10**38
    assert Decimal(decoded["rate"]) == Decimal(200)


def test_format_fair_rate_table_prints_rate():
    console = Console(record=True, width=120)

    format_fair_rate_table(FAIR_RATE, console=console)

    text = console.export_text()
    assert "Fair LP Price" in text
    assert "1.333333333333333333" in text
    assert "0xB4e16d01...C9Dc" in text
    assert "2023-11-14 22:13:20 UTC" in text


def test_format_error_panel_shows_kind_and_category():
    console = Console(record=True, width=120)

    format_error_panel(DivisionByZero("LP token 0xLP has zero total supply"), console=console)

    text = console.export_text()
    assert "zero total supply" in text
    assert "division_by_zero" in text
    assert "undefined" in text
