"""Pricing: расчёт подытога, НДС, скидок и итога корзины."""

from .calculator import (
    calculate_discountable_subtotal,
    calculate_pricing,
    calculate_regular_discount,
    calculate_special_discount,
    calculate_subtotal,
    calculate_vat,
    price_cart,
)

__all__ = [
    "calculate_discountable_subtotal",
    "calculate_pricing",
    "calculate_regular_discount",
    "calculate_special_discount",
    "calculate_subtotal",
    "calculate_vat",
    "price_cart",
]
