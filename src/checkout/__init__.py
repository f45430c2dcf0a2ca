"""Checkout: формирование запроса на проведение продажи и проверка оплаты."""

from .transaction import (
    CheckoutConfig,
    CheckoutError,
    build_transaction_request,
    calculate_change,
)

__all__ = [
    "CheckoutConfig",
    "CheckoutError",
    "build_transaction_request",
    "calculate_change",
]
