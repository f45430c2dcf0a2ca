"""
Core math modules

Денежные примитивы с гарантией стабильности (clamp, санитизация, округление).
"""

from src.core.math.money import (
    # Constants
    CURRENCY_DECIMALS_DEFAULT,
    MONEY_EPS,
    PERCENT_MAX,
    PERCENT_MIN,
    # Sanitization
    is_valid_amount,
    sanitize_amount,
    # Clamping
    clamp,
    clamp_non_negative,
    clamp_percent,
    # Comparison and rounding
    is_close_amount,
    round_currency,
)

__all__ = [
    # Money: Constants
    "CURRENCY_DECIMALS_DEFAULT",
    "MONEY_EPS",
    "PERCENT_MAX",
    "PERCENT_MIN",
    # Money: Sanitization
    "is_valid_amount",
    "sanitize_amount",
    # Money: Clamping
    "clamp",
    "clamp_non_negative",
    "clamp_percent",
    # Money: Comparison and rounding
    "is_close_amount",
    "round_currency",
]
