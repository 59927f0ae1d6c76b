"""
Test suite for currency module

Tests currency lookup, Decimal coercion and display formatting.
"""

import pytest
from decimal import Decimal

from treasury_sim.currency import (
    Currency, decimal_from_string, format_amount, is_positive_amount,
    round_to_currency, to_decimal
)


class TestCurrency:
    """Test Currency enum"""

    def test_codes_and_precision(self):
        assert Currency.KES.code == "KES"
        assert Currency.USD.code == "USD"
        assert Currency.NGN.code == "NGN"
        assert all(currency.precision == 2 for currency in Currency)

    def test_from_code(self):
        assert Currency.from_code("usd") is Currency.USD
        assert Currency.from_code(" NGN ") is Currency.NGN

    def test_from_code_unknown(self):
        with pytest.raises(ValueError, match="Unknown currency code"):
            Currency.from_code("EUR")

    def test_compared_by_identity(self):
        assert Currency.from_code("KES") is Currency.KES
        assert Currency.KES != Currency.USD


class TestDecimalConversion:
    """Test Decimal helpers"""

    def test_to_decimal_passthrough(self):
        value = Decimal('12.34')
        assert to_decimal(value) is value

    def test_to_decimal_from_float_uses_str(self):
        assert to_decimal(0.1) == Decimal('0.1')
        assert to_decimal(40) == Decimal('40')

    def test_to_decimal_rejects_bool_and_none(self):
        with pytest.raises(ValueError):
            to_decimal(True)
        with pytest.raises(ValueError):
            to_decimal(None)

    def test_decimal_from_string_formats(self):
        assert decimal_from_string("1,234.56") == Decimal('1234.56')
        assert decimal_from_string("  250 ") == Decimal('250')
        assert decimal_from_string("-12,000") == Decimal('-12000')
        assert decimal_from_string("1e3") == Decimal('1000')

    def test_decimal_from_string_invalid(self):
        with pytest.raises(ValueError):
            decimal_from_string("")
        with pytest.raises(ValueError):
            decimal_from_string("abc")

    @pytest.mark.parametrize("value", ["1abc2", "10 USD", "5 KES", "$99.90", "1,2,3", "12,34.5", "1 000"])
    def test_decimal_from_string_rejects_partial_numbers(self, value):
        """Stray characters are never dropped to salvage a number"""
        with pytest.raises(ValueError):
            decimal_from_string(value)

    def test_non_finite_strings_parse_but_are_not_positive(self):
        assert not is_positive_amount(decimal_from_string("NaN"))
        assert not is_positive_amount(decimal_from_string("inf"))

    def test_is_positive_amount(self):
        assert is_positive_amount(Decimal('0.01'))
        assert not is_positive_amount(Decimal('0'))
        assert not is_positive_amount(Decimal('-5'))


class TestFormatting:
    """Test display formatting"""

    def test_round_to_currency(self):
        assert round_to_currency(Decimal('0.345'), Currency.USD) == Decimal('0.35')

    def test_format_amount(self):
        assert format_amount(Decimal('1234.5'), Currency.USD) == "USD 1,234.50"
        assert format_amount(Decimal('800000'), Currency.NGN) == "NGN 800,000.00"
