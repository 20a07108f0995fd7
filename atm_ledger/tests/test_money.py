from decimal import Decimal

import pytest

from ..core.errors import ValidationError
from ..domain import (
    MAX_MINOR_UNITS,
    from_minor_units,
    parse_amount,
    require_non_negative_minor_units,
    require_positive_minor_units,
    to_minor_units,
)


def test_to_minor_units_rounds_half_up() -> None:
    assert to_minor_units("12.345") == 1235
    assert to_minor_units(Decimal("0.005")) == 1
    assert to_minor_units(0.1) == 10
    assert to_minor_units(50) == 5000


def test_comma_decimal_separator_accepted() -> None:
    assert to_minor_units("12,34") == 1234


def test_from_minor_units_is_exact() -> None:
    assert from_minor_units(55000) == Decimal("550.00")
    assert str(from_minor_units(7)) == "0.07"


@pytest.mark.parametrize(
    "value",
    [float("nan"), float("inf"), float("-inf"), Decimal("NaN"), "Infinity", "", "abc", True, None],
)
def test_parse_amount_rejects_non_numbers(value) -> None:
    with pytest.raises(ValidationError):
        parse_amount(value)


@pytest.mark.parametrize("value", [0, "0.00", -5, "0.004"])
def test_positive_amount_required(value) -> None:
    with pytest.raises(ValidationError):
        require_positive_minor_units(value)


def test_non_negative_amount_allows_zero() -> None:
    assert require_non_negative_minor_units("0.00") == 0
    with pytest.raises(ValidationError):
        require_non_negative_minor_units("-0.01")


@pytest.mark.parametrize("value", ["1e30", Decimal("1E+30"), 1e30])
def test_to_minor_units_rejects_amounts_beyond_decimal_precision(value) -> None:
    with pytest.raises(ValidationError):
        to_minor_units(value)


@pytest.mark.parametrize("value", ["1e30", "1e18", "92233720368547758.08"])
def test_amounts_above_column_limit_rejected(value) -> None:
    with pytest.raises(ValidationError):
        require_positive_minor_units(value)
    with pytest.raises(ValidationError):
        require_non_negative_minor_units(value)


def test_largest_storable_amount_accepted() -> None:
    assert require_positive_minor_units("92233720368547758.07") == MAX_MINOR_UNITS


def test_thousands_separator_not_supported() -> None:
    with pytest.raises(ValidationError):
        to_minor_units("1,000.00")
