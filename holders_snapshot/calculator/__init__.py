"""Amount conversion and airdrop allocation."""

from .allocation import AirdropCalculator, allocate, normalize_exclusions
from .units import to_display, to_raw, validate_amount_syntax

__all__ = [
    "AirdropCalculator",
    "allocate",
    "normalize_exclusions",
    "to_display",
    "to_raw",
    "validate_amount_syntax",
]
