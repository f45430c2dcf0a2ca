"""StockGuard: проверки потолка остатка для позиций корзины.

Чистые функции без состояния. can_add: advisory-проверка для UI
(например, сообщение "нельзя добавить больше, чем есть на складе").
CartStore сам ограничивает количество через clamp_quantity, независимо
от того, вызывалась ли проверка.
"""

from collections.abc import Iterable

from src.core.domain.line_item import LineItem


def existing_quantity(items: Iterable[LineItem], item_id: str) -> int:
    """Текущее количество позиции в корзине (0 если позиции нет)."""
    for item in items:
        if item.id == item_id:
            return item.quantity
    return 0


def can_add(
    items: Iterable[LineItem],
    item_id: str,
    quantity_to_add: int,
    max_stock: int,
) -> bool:
    """Можно ли добавить quantity_to_add единиц без превышения остатка.

    Args:
        items: текущие позиции корзины
        item_id: идентификатор позиции
        quantity_to_add: добавляемое количество
        max_stock: потолок остатка

    Returns:
        True если existing_quantity + quantity_to_add <= max_stock
    """
    return existing_quantity(items, item_id) + quantity_to_add <= max_stock


def remaining_room(items: Iterable[LineItem], item_id: str, max_stock: int) -> int:
    """Сколько ещё единиц можно добавить (не меньше 0)."""
    return max(0, max_stock - existing_quantity(items, item_id))


def clamp_quantity(quantity: int, max_stock: int) -> int:
    """Количество, ограниченное остатком: min(quantity, max_stock).

    Результат <= 0 означает, что позиция должна быть удалена.
    """
    return min(quantity, max_stock)
