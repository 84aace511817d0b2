"""Conversion between raw integer amounts and human decimal strings.

Raw amounts are the smallest indivisible unit of a coin. A coin with
``decimals=6`` renders raw ``1500000`` as ``"1.5"``. Both directions use
string manipulation on Python ints only, so no precision is ever lost.
"""

import re

from ..core.exceptions import InvalidAmountError, PrecisionOverflowError
from ..core.types import RawAmount

AMOUNT_PATTERN = re.compile(r"[0-9]+(?:\.[0-9]+)?")


def to_display(raw: RawAmount, decimals: int) -> str:
    """
    Render a raw amount as a decimal string.

    Whole numbers render without a decimal point and trailing fractional
    zeros are stripped.

    Args:
        raw: Non-negative raw amount
        decimals: Number of fractional digits of the coin

    Returns:
        Human-readable decimal string
    """
    if raw < 0:
        raise ValueError(f"Raw amount must be non-negative, got {raw}")

    if decimals <= 0:
        return str(raw)

    digits = str(raw).rjust(decimals + 1, "0")
    integer_part = digits[:-decimals]
    fraction_part = digits[-decimals:].rstrip("0")
    return f"{integer_part}.{fraction_part}" if fraction_part else integer_part


def validate_amount_syntax(amount: str) -> str:
    """Check that ``amount`` is a plain non-negative decimal; return it trimmed."""
    text = str(amount).strip()
    if not AMOUNT_PATTERN.fullmatch(text):
        raise InvalidAmountError(str(amount))
    return text


def to_raw(amount: str, decimals: int) -> RawAmount:
    """
    Parse a decimal string into a raw amount.

    Args:
        amount: Decimal string such as ``"12"`` or ``"0.25"``
        decimals: Number of fractional digits of the coin

    Returns:
        Raw integer amount

    Raises:
        InvalidAmountError: If the string is not a plain decimal number
        PrecisionOverflowError: If it has more fractional digits than ``decimals``
    """
    text = validate_amount_syntax(amount)
    integer_part, _, fraction_part = text.partition(".")

    if len(fraction_part) > max(decimals, 0):
        raise PrecisionOverflowError(text, len(fraction_part), max(decimals, 0))

    if decimals <= 0:
        return int(integer_part)
    return int(integer_part + fraction_part.ljust(decimals, "0"))
