"""CartStore: хранилище текущей корзины кассы.

Хранит позиции корзины и активную конфигурацию скидок, гарантирует
инварианты после каждой операции:
- каждая позиция в корзине имеет 1 <= quantity <= max_stock
- 0 <= percent_discount <= 100, flat_special_discount >= 0
- позиция с quantity <= 0 удаляется, а не хранится

Некорректные числовые входы ограничиваются (clamp), а не отклоняются:
операции синхронные, атомарные и никогда не бросают исключений при
корректно типизированных аргументах.

Один экземпляр на корзину/сессию, без блокировок. Если корзин несколько,
у каждой свой CartStore.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from src.cart.stock_guard import clamp_quantity
from src.core.domain.cart_state import CartState
from src.core.domain.discount import DiscountConfig, DiscountUpdate
from src.core.domain.line_item import CatalogItem, LineItem
from src.core.math.money import clamp_non_negative, clamp_percent

logger = logging.getLogger(__name__)


# Числовые поля скидки: явно переданный None игнорируется
_NUMERIC_DISCOUNT_FIELDS = ("percent_discount", "flat_special_discount")


class CartStore:
    """Корзина кассы: позиции + скидки.

    Позиции хранятся в порядке добавления. Позиции immutable (LineItem
    frozen), изменение количества заменяет позицию новым экземпляром.
    """

    def __init__(self) -> None:
        self._items: list[LineItem] = []
        self._discount: DiscountConfig = DiscountConfig.default()
        self._last_updated: datetime = self._now()

    # -------------------------------------------------------------------------
    # Чтение
    # -------------------------------------------------------------------------

    @property
    def items(self) -> tuple[LineItem, ...]:
        return tuple(self._items)

    @property
    def discount(self) -> DiscountConfig:
        return self._discount

    @property
    def last_updated(self) -> datetime:
        return self._last_updated

    def get_item(self, item_id: str) -> LineItem | None:
        index = self._find_index(item_id)
        return self._items[index] if index is not None else None

    def item_count(self) -> int:
        """Суммарное количество единиц во всех позициях."""
        return sum(item.quantity for item in self._items)

    def snapshot(self) -> CartState:
        """Immutable снапшот для расчёта стоимости и UI."""
        return CartState(
            items=tuple(self._items),
            discount=self._discount,
            last_updated=self._last_updated,
        )

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return any(item.id == item_id for item in self._items)

    # -------------------------------------------------------------------------
    # Мутации позиций
    # -------------------------------------------------------------------------

    def add_item(self, candidate: CatalogItem, quantity_to_add: int) -> None:
        """Добавление товара в корзину (с объединением по id).

        Существующая позиция: quantity = min(quantity + quantity_to_add,
        candidate.max_stock), max_stock обновляется из candidate.
        Новая позиция: quantity = min(quantity_to_add, candidate.max_stock).
        Превышение остатка молча отбрасывается.

        Args:
            candidate: товар каталога (id, цена, остаток, признак скидки)
            quantity_to_add: добавляемое количество
        """
        index = self._find_index(candidate.id)

        if index is not None:
            existing = self._items[index]
            requested = existing.quantity + quantity_to_add
            new_quantity = clamp_quantity(requested, candidate.max_stock)
            self._log_clamped(candidate.id, requested, new_quantity)

            if new_quantity <= 0:
                del self._items[index]
                logger.debug("cart item removed: id=%s (quantity=%d)", candidate.id, new_quantity)
            else:
                self._items[index] = existing.model_copy(
                    update={"quantity": new_quantity, "max_stock": candidate.max_stock}
                )
                logger.debug(
                    "cart item merged: id=%s quantity=%d->%d max_stock=%d",
                    candidate.id,
                    existing.quantity,
                    new_quantity,
                    candidate.max_stock,
                )
        else:
            new_quantity = clamp_quantity(quantity_to_add, candidate.max_stock)
            self._log_clamped(candidate.id, quantity_to_add, new_quantity)

            if new_quantity <= 0:
                # Нечего добавлять (нет остатка или неположительный запрос)
                logger.debug(
                    "cart item not added: id=%s (quantity=%d, max_stock=%d)",
                    candidate.id,
                    new_quantity,
                    candidate.max_stock,
                )
                return

            self._items.append(candidate.to_line_item(new_quantity))
            logger.debug("cart item added: id=%s quantity=%d", candidate.id, new_quantity)

        self._touch()

    def set_quantity(
        self,
        item_id: str,
        quantity: int,
        max_stock_override: int | None = None,
    ) -> None:
        """Установка количества позиции.

        quantity <= 0 удаляет позицию. Иначе quantity = min(quantity,
        max_stock_override ?? max_stock), max_stock обновляется на override.
        Отсутствующий id: no-op (позиция возвращается только через add_item).

        Args:
            item_id: идентификатор позиции
            quantity: новое количество
            max_stock_override: новый потолок остатка (опционально)
        """
        index = self._find_index(item_id)
        if index is None:
            return

        if quantity <= 0:
            del self._items[index]
            logger.debug("cart item removed: id=%s (quantity=%d)", item_id, quantity)
            self._touch()
            return

        existing = self._items[index]
        stock_limit = max_stock_override if max_stock_override is not None else existing.max_stock
        new_quantity = clamp_quantity(quantity, stock_limit)
        self._log_clamped(item_id, quantity, new_quantity)

        if new_quantity <= 0:
            del self._items[index]
            logger.debug("cart item removed: id=%s (max_stock=%d)", item_id, stock_limit)
        else:
            self._items[index] = existing.model_copy(
                update={"quantity": new_quantity, "max_stock": stock_limit}
            )
            logger.debug("cart item quantity set: id=%s quantity=%d", item_id, new_quantity)

        self._touch()

    def remove_item(self, item_id: str) -> None:
        """Удаление позиции (no-op если позиции нет)."""
        index = self._find_index(item_id)
        if index is None:
            return

        del self._items[index]
        logger.debug("cart item removed: id=%s", item_id)
        self._touch()

    def set_item_stock(self, item_id: str, new_max_stock: int) -> None:
        """Обновление потолка остатка позиции.

        Если текущее количество превышает новый потолок, оно снижается
        до потолка. Потолок 0 удаляет позицию. Отсутствующий id: no-op.
        """
        index = self._find_index(item_id)
        if index is None:
            return

        existing = self._items[index]
        new_quantity = clamp_quantity(existing.quantity, new_max_stock)

        if new_quantity <= 0:
            del self._items[index]
            logger.debug("cart item removed: id=%s (out of stock)", item_id)
        else:
            self._items[index] = existing.model_copy(
                update={"quantity": new_quantity, "max_stock": new_max_stock}
            )
            if new_quantity < existing.quantity:
                logger.debug(
                    "cart item reduced to stock: id=%s quantity=%d->%d",
                    item_id,
                    existing.quantity,
                    new_quantity,
                )

        self._touch()

    def clear(self) -> None:
        """Очистка корзины и сброс скидок к значениям по умолчанию."""
        self._items = []
        self._discount = DiscountConfig.default()
        logger.debug("cart cleared")
        self._touch()

    # -------------------------------------------------------------------------
    # Скидки
    # -------------------------------------------------------------------------

    def set_discount(self, update: DiscountUpdate | None = None, **fields: Any) -> None:
        """Частичное обновление скидок.

        Применяются только переданные поля. percent_discount ограничивается
        [0, 100], flat_special_discount: снизу нулём. NaN → 0.

        Args:
            update: частичное обновление (DiscountUpdate)
            **fields: те же поля keyword-аргументами (имеют приоритет над update)

        Raises:
            ValidationError: если передано неизвестное поле

        Examples:
            >>> cart = CartStore()
            >>> cart.set_discount(percent_discount=150)
            >>> cart.discount.percent_discount
            100.0
        """
        supplied: dict[str, Any] = update.supplied_fields() if update is not None else {}
        if fields:
            supplied.update(DiscountUpdate(**fields).supplied_fields())

        changes: dict[str, Any] = {}
        for name, value in supplied.items():
            if name in _NUMERIC_DISCOUNT_FIELDS and value is None:
                continue
            if name == "percent_discount":
                value = clamp_percent(float(value))
            elif name == "flat_special_discount":
                value = clamp_non_negative(float(value))
            changes[name] = value

        self._discount = self._discount.model_copy(update=changes)
        logger.debug("cart discount updated: %s", changes)
        self._touch()

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _find_index(self, item_id: str) -> int | None:
        for index, item in enumerate(self._items):
            if item.id == item_id:
                return index
        return None

    def _touch(self) -> None:
        self._last_updated = self._now()

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    @staticmethod
    def _log_clamped(item_id: str, requested: int, actual: int) -> None:
        if actual < requested:
            logger.debug(
                "cart item quantity clamped to stock: id=%s requested=%d actual=%d",
                item_id,
                requested,
                actual,
            )
