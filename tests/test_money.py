from decimal import Decimal

import pytest

from app.core.exceptions import InvalidAmount
from app.utils.money import Money, check_percentage


def test_parse_accepts_plain_decimals():
    assert Money.parse("1234.5").amount == Decimal("1234.5")
    assert Money.parse(" 10 ").amount == Decimal(10)
    assert Money.parse("0").is_zero()


def test_parse_allows_trailing_zeros_beyond_cents():
    assert Money.parse("1.500") == Money.parse("1.5")


@pytest.mark.parametrize("text", ["", "abc", "-1", "1.505", "1,000.00", "1e3", ".5", "NaN"])
def test_parse_rejects_malformed_input(text):
    with pytest.raises(InvalidAmount):
        Money.parse(text)


def test_parse_rejects_non_strings():
    with pytest.raises(InvalidAmount):
        Money.parse(12)


def test_floats_are_refused():
    with pytest.raises(InvalidAmount):
        Money.of(0.1)


def test_subtract_can_go_negative():
    result = Money.of("100").subtract(Money.of("150.25"))
    assert result.is_negative()
    assert result.to_display() == "-50.25"


def test_operators_match_methods():
    a, b = Money.of("10.10"), Money.of("0.20")
    assert a + b == a.add(b) == Money.of("10.30")
    assert a - b == a.subtract(b)
    assert -a == Money.of("-10.10")


def test_sum_and_zero():
    assert Money.sum([]) == Money.zero()
    assert Money.sum(["1.10", Decimal("2.20"), Money.of(3)]) == Money.of("6.30")


def test_multiply_by_percentage_keeps_precision():
    assert Money.of("333.33").multiply_by_percentage(10).amount == Decimal("33.333")
    assert Money.of("5000").multiply_by_percentage(Decimal("12.5")).to_display() == "625.00"


@pytest.mark.parametrize("pct", [-1, 101, "100.01"])
def test_multiply_by_percentage_out_of_range(pct):
    with pytest.raises(InvalidAmount):
        Money.of(100).multiply_by_percentage(pct)


def test_check_percentage_bounds():
    assert check_percentage(0) == 0
    assert check_percentage("100") == 100


def test_display_rounds_half_up():
    assert Money(Decimal("2.345")).to_display() == "2.35"
    assert Money(Decimal("2.344")).to_display() == "2.34"
    assert Money(Decimal("1234.5")).to_display() == "1234.50"
    assert str(Money.of(7)) == "7.00"


def test_display_never_shows_negative_zero():
    assert Money(Decimal("-0.001")).to_display() == "0.00"


def test_equality_and_ordering_are_exact():
    assert Money.of("1.50") == Money.of("1.5")
    assert Money.of("0.01") > Money.zero()
    assert Money(Decimal("0.001")) != Money.zero()
    assert sorted([Money.of(3), Money.of(1), Money.of(2)]) == [Money.of(1), Money.of(2), Money.of(3)]


def test_floor_zero():
    assert Money.of(-5).floor_zero() == Money.zero()
    assert Money.of(5).floor_zero() == Money.of(5)


@pytest.mark.parametrize("text", ["1" * 30, "1" * 11, "12345678901.00", "٣", "1.٥"])
def test_parse_rejects_oversized_and_non_ascii_amounts(text):
    with pytest.raises(InvalidAmount):
        Money.parse(text)


def test_parse_accepts_largest_storable_amount():
    assert Money.parse("9999999999.99").to_display() == "9999999999.99"
    # leading zeros do not count towards the size limit
    assert Money.parse("000000000001.10") == Money.of("1.10")


def test_parse_long_fraction_of_zeros():
    assert Money.parse("1." + "0" * 40) == Money.of(1)
