"""
Unit Tests for Amount Utilities

Tests cover:
- Native token address recognition
- RPC hex quantity conversion
- Raw balance normalization to decimal strings

Run with:
    pytest tests/unit/test_amounts.py -v
"""

import pytest
from decimal import Decimal

from core.utils.amounts import (
    STARKNET_ETH_ADDRESS,
    format_decimal,
    hex_to_int_string,
    is_native_token_address,
    normalize_balance,
)


# ============================================
# Native Token Detection
# ============================================

class TestIsNativeTokenAddress:
    """Test recognition of the native-asset spellings"""

    @pytest.mark.parametrize("address", [
        "",
        None,
        "0x0",
        "0x0000000000000000000000000000000000000000",
        "0X00",
        STARKNET_ETH_ADDRESS,
        STARKNET_ETH_ADDRESS.upper().replace("0X", "0x"),
    ])
    def test_native_spellings(self, address):
        assert is_native_token_address(address) is True

    @pytest.mark.parametrize("address", [
        "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48",
        "0x0000000000000000000000000000000000000001",
        "0x",
    ])
    def test_token_addresses(self, address):
        assert is_native_token_address(address) is False


# ============================================
# Hex Quantities
# ============================================

class TestHexToIntString:
    """Test conversion of RPC quantities"""

    def test_hex_quantity(self):
        assert hex_to_int_string("0x1bc16d674ec80000") == "2000000000000000000"

    def test_empty_hex_is_zero(self):
        assert hex_to_int_string("0x") == "0"

    def test_int_passthrough(self):
        assert hex_to_int_string(42) == "42"

    def test_decimal_string(self):
        assert hex_to_int_string("1000") == "1000"

    def test_garbage_raises(self):
        with pytest.raises(ValueError):
            hex_to_int_string("0xzz")


# ============================================
# Normalization
# ============================================

class TestFormatDecimal:
    """Test plain decimal rendering"""

    def test_strips_trailing_zeros(self):
        assert format_decimal(Decimal("1.500")) == "1.5"

    def test_no_exponent(self):
        assert format_decimal(Decimal("1E+3")) == "1000"
        assert format_decimal(Decimal("1E-8")) == "0.00000001"

    def test_zero(self):
        assert format_decimal(Decimal("0E-18")) == "0"


class TestNormalizeBalance:
    """Test scaling of raw balances by token precision"""

    def test_eighteen_decimals(self):
        assert normalize_balance("1500000000000000000", 18) == "1.5"

    def test_zero_stays_zero(self):
        assert normalize_balance("0", 6) == "0"

    def test_whole_units(self):
        assert normalize_balance("25000000", 6) == "25"

    def test_zero_decimals(self):
        assert normalize_balance("123", 0) == "123"

    def test_none_means_unknown(self):
        assert normalize_balance(None, 18) is None
        assert normalize_balance("", 18) is None

    def test_exact_for_uint256_max(self):
        """Huge values keep every digit"""
        raw = str(2 ** 256 - 1)
        result = normalize_balance(raw, 18)
        assert result.replace(".", "") == raw

    def test_smallest_unit(self):
        assert normalize_balance("1", 18) == "0.000000000000000001"

    @pytest.mark.parametrize("raw", ["abc", "NaN", "Infinity"])
    def test_non_numeric_raises(self, raw):
        with pytest.raises(ValueError):
            normalize_balance(raw, 18)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
