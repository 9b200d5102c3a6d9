from decimal import Decimal

import pytest

from common.currency import format_inr, from_minor_units, to_minor_units


@pytest.mark.parametrize(
    "amount, expected",
    [
        (0, "0"),
        (999, "999"),
        (1500, "1,500"),
        (100000, "1,00,000"),
        (Decimal("1234567.5"), "12,34,567.50"),
        ("-25000", "-25,000"),
    ],
)
def test_format_inr(amount, expected):
    assert format_inr(amount) == expected


def test_format_inr_symbol():
    assert format_inr(2500, symbol="Rs. ") == "Rs. 2,500"


def test_minor_unit_conversion():
    assert to_minor_units("1500.50") == 150050
    assert to_minor_units(Decimal("0.005")) == 1
    assert from_minor_units(150050) == Decimal("1500.50")
    assert from_minor_units(None) == Decimal("0.00")
