"""
Test suite for decimal helpers
"""

import pytest
from decimal import Decimal

from banksim.money import decimal_from_string, format_amount, round_amount, to_decimal


class TestToDecimal:
    """Test conversion to Decimal"""
    
    def test_float_via_string(self):
        assert to_decimal(0.1) == Decimal('0.1')
        assert to_decimal(0.0001) == Decimal('0.0001')
    
    def test_passthrough_and_int(self):
        value = Decimal('12.345')
        
        assert to_decimal(value) is value
        assert to_decimal(7) == Decimal('7')
    
    def test_string(self):
        assert to_decimal("1,250.50") == Decimal('1250.50')
        assert to_decimal("-3") == Decimal('-3')
    
    @pytest.mark.parametrize("value", [True, None, [], float('inf'), Decimal('NaN'), "abc", ""])
    def test_rejected(self, value):
        with pytest.raises(ValueError):
            to_decimal(value)


class TestFormatting:
    """Test rounding and display"""
    
    def test_round_half_up(self):
        assert round_amount(Decimal('2.345')) == Decimal('2.35')
        assert round_amount(Decimal('2.344')) == Decimal('2.34')
        assert round_amount(Decimal('7.5'), places=0) == Decimal('8')
    
    def test_format_amount(self):
        assert format_amount(Decimal('1234567.891')) == "1,234,567.89"
    
    def test_decimal_from_string_strips_symbols(self):
        assert decimal_from_string("$ 1,000") == Decimal('1000')
