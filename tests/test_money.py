"""Tests for BRL money parsing and formatting."""

from decimal import Decimal
import pytest

from budgetit.utils.money import format_brl, parse_brl, to_decimal


def test_format_brl_groups_thousands():
    """Test dots group thousands and a comma marks cents."""
    assert format_brl(Decimal("1000")) == "R$ 1.000,00"
    assert format_brl(Decimal("1234567.891")) == "R$ 1.234.567,89"


def test_format_brl_small_and_negative():
    """Test amounts below one thousand and negative amounts."""
    assert format_brl(Decimal("200")) == "R$ 200,00"
    assert format_brl(Decimal("0")) == "R$ 0,00"
    assert format_brl(Decimal("-64")) == "-R$ 64,00"


def test_format_brl_rounds_half_up():
    """Test cents are rounded half up."""
    assert format_brl(Decimal("0.005")) == "R$ 0,01"


def test_parse_brl_formats():
    """Test parsing BRL and plain decimal strings."""
    assert parse_brl("R$ 1.234,56") == Decimal("1234.56")
    assert parse_brl("1.234,56") == Decimal("1234.56")
    assert parse_brl("-R$ 50,00") == Decimal("-50.00")
    assert parse_brl("1234.56") == Decimal("1234.56")


def test_parse_brl_reads_formatted_output():
    """Test parsing accepts what format_brl produces."""
    assert parse_brl(format_brl(Decimal("98765.43"))) == Decimal("98765.43")


def test_parse_brl_invalid():
    """Test invalid amounts raise ValueError."""
    with pytest.raises(ValueError):
        parse_brl("")
    with pytest.raises(ValueError):
        parse_brl("abc")


def test_to_decimal_coerces_numbers_and_strings():
    """Test request values are coerced to Decimal."""
    assert to_decimal(10) == Decimal("10")
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal("R$ 2.500,00") == Decimal("2500.00")
    assert to_decimal(Decimal("3")) == Decimal("3")


def test_to_decimal_rejects_booleans():
    """Test booleans are not taken as amounts."""
    with pytest.raises(ValueError):
        to_decimal(True)
