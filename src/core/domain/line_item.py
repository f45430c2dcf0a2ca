"""
LineItem: Модель позиции корзины

Immutable Pydantic модели:
- CatalogItem: данные товара из каталога/склада (без количества)
- LineItem: позиция в корзине (товар + количество)

Все изменения позиции создают новый экземпляр (model_copy).
"""

from enum import Enum

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class ItemType(str, Enum):
    """Тип позиции каталога"""

    PRODUCT = "Product"
    TEST = "Test"


# =============================================================================
# CATALOG ITEM
# =============================================================================


class CatalogItem(BaseModel):
    """
    Товар, предлагаемый для добавления в корзину.

    Поставляется каталогом/складом. max_stock: авторитетный потолок
    количества, который может находиться в корзине.
    """

    id: str = Field(..., min_length=1, description="Идентификатор позиции каталога")
    name: str = Field(..., description="Наименование")
    unit_price: float = Field(..., ge=0, description="Цена за единицу")
    max_stock: int = Field(..., ge=0, description="Доступный остаток (потолок количества)")
    is_discountable: bool = Field(
        default=True, description="Участвует ли позиция в скидках"
    )
    item_type: ItemType = Field(default=ItemType.PRODUCT, description="Тип позиции")

    model_config = {"frozen": True}

    def to_line_item(self, quantity: int) -> "LineItem":
        """
        Позиция корзины из товара каталога.

        Args:
            quantity: Количество (>= 1, ограничение по остатку: задача вызывающего)
        """
        return LineItem(
            id=self.id,
            name=self.name,
            unit_price=self.unit_price,
            quantity=quantity,
            max_stock=self.max_stock,
            is_discountable=self.is_discountable,
            item_type=self.item_type,
        )


# =============================================================================
# LINE ITEM
# =============================================================================


class LineItem(BaseModel):
    """
    Позиция корзины.

    Инвариант корзины: 1 <= quantity <= max_stock.
    Позиция с quantity <= 0 не хранится, а удаляется из корзины.
    """

    id: str = Field(..., min_length=1, description="Идентификатор позиции каталога")
    name: str = Field(..., description="Наименование")
    unit_price: float = Field(..., ge=0, description="Цена за единицу")
    quantity: int = Field(..., ge=1, description="Количество в корзине")
    max_stock: int = Field(..., ge=0, description="Потолок количества по остатку")
    is_discountable: bool = Field(
        default=True, description="Участвует ли позиция в скидках"
    )
    item_type: ItemType = Field(default=ItemType.PRODUCT, description="Тип позиции")

    model_config = {"frozen": True}

    def line_total(self) -> float:
        """Сумма по позиции: unit_price × quantity"""
        return self.unit_price * self.quantity
