"""
Amount Utilities

Balances arrive from chain adapters as integer strings in the token's smallest unit
(wei, 10^-6 USDC, ...). Many exceed the float-safe integer range, so every conversion
here goes through Decimal with a context wide enough for uint256 values.

The utilities in this module also recognize the different spellings of "native asset"
used in token address fields.
"""

import re
from decimal import Decimal, InvalidOperation, localcontext
from typing import Optional, Union

# uint256 has 78 decimal digits; leave room for the scale as well
_DECIMAL_PRECISION = 160

_ZERO_ADDRESS_RE = re.compile(r"^0x0+$", re.IGNORECASE)

# Canonical ETH token contract on Starknet; makers register it as the native asset
STARKNET_ETH_ADDRESS = "0x049d36570d4e46f48e99674bd3fcc84644ddd6b96f7c741b1562b82f9e004dc7"


def is_native_token_address(token_address: Optional[str]) -> bool:
    """
    Check whether a token address denotes the chain's native asset.

    Empty strings, zero addresses of any length ("0x0", "0x000...000") and the
    Starknet ETH contract all count as native.

    Examples:
        >>> is_native_token_address("")
        True
        >>> is_native_token_address("0x0000000000000000000000000000000000000000")
        True
        >>> is_native_token_address("0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48")
        False
    """
    if not token_address:
        return True
    address = token_address.strip()
    if _ZERO_ADDRESS_RE.match(address):
        return True
    return address.lower() == STARKNET_ETH_ADDRESS


def hex_to_int_string(value: Union[str, int]) -> str:
    """
    Convert an RPC quantity ("0x1bc16d674ec80000") to a decimal integer string.

    Raises:
        ValueError: If value is not a hex quantity or an integer
    """
    if isinstance(value, int):
        return str(value)
    text = str(value).strip()
    if text.lower().startswith("0x"):
        # "0x" alone is returned by some nodes for an empty balance
        return str(int(text, 16)) if len(text) > 2 else "0"
    return str(int(text))


def format_decimal(value: Decimal) -> str:
    """
    Render a Decimal as a plain string without exponent or trailing zeros.

    Examples:
        >>> format_decimal(Decimal("1.500"))
        '1.5'
        >>> format_decimal(Decimal("1E+3"))
        '1000'
    """
    if value == 0:
        return "0"
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def normalize_balance(raw_value: Optional[str], decimals: int) -> Optional[str]:
    """
    Scale a raw balance down by 10^decimals.

    Args:
        raw_value: Balance in smallest units as a string, or None/"" when unknown
        decimals: Token precision

    Returns:
        Normalized decimal string, or None when there was no value to normalize

    Raises:
        ValueError: If raw_value is not numeric

    Examples:
        >>> normalize_balance("1500000000000000000", 18)
        '1.5'
        >>> normalize_balance("0", 6)
        '0'
        >>> normalize_balance(None, 18) is None
        True
    """
    if raw_value is None or raw_value == "":
        return None

    with localcontext() as ctx:
        ctx.prec = _DECIMAL_PRECISION
        try:
            amount = Decimal(str(raw_value).strip())
        except InvalidOperation:
            raise ValueError(f"Balance is not numeric: {raw_value!r}")
        if not amount.is_finite():
            raise ValueError(f"Balance is not finite: {raw_value!r}")
        return format_decimal(amount / (Decimal(10) ** int(decimals)))
