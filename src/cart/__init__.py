"""Cart: хранилище корзины кассы и проверки остатка.

- CartStore: позиции корзины и скидки, инварианты после каждой мутации
- StockGuard: чистые проверки потолка остатка
"""

from .stock_guard import (
    can_add,
    clamp_quantity,
    existing_quantity,
    remaining_room,
)
from .store import CartStore

__all__ = [
    "CartStore",
    "can_add",
    "clamp_quantity",
    "existing_quantity",
    "remaining_room",
]
