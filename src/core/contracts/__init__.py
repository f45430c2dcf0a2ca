"""
Contract Validation Module

Модуль для валидации JSON контрактов ядра корзины (cart_state,
transaction_request).
"""

from .validators import (
    CartStateValidator,
    ContractValidator,
    SchemaLoader,
    TransactionRequestValidator,
    validate_cart_state,
    validate_transaction_request,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "CartStateValidator",
    "TransactionRequestValidator",
    # Functions
    "validate_cart_state",
    "validate_transaction_request",
]
