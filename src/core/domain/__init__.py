"""
Domain models and value objects.

Contains fundamental domain entities like LineItem, DiscountConfig, TaxConfig,
PricingResult, TransactionRequest.
"""

from src.core.domain.cart_state import CartState
from src.core.domain.discount import DiscountConfig, DiscountUpdate
from src.core.domain.line_item import CatalogItem, ItemType, LineItem
from src.core.domain.pricing_result import PricingResult
from src.core.domain.tax import TaxConfig
from src.core.domain.transaction import (
    PaymentMethod,
    TransactionItem,
    TransactionRequest,
)

__all__ = [
    # Line items
    "CatalogItem",
    "ItemType",
    "LineItem",
    # Cart snapshot
    "CartState",
    # Discount
    "DiscountConfig",
    "DiscountUpdate",
    # Tax
    "TaxConfig",
    # Pricing
    "PricingResult",
    # Transaction
    "PaymentMethod",
    "TransactionItem",
    "TransactionRequest",
]
