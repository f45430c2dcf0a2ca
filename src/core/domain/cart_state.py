"""
CartState: Снапшот состояния корзины

Immutable снапшот CartStore: позиции, активные скидки, время последнего
изменения. PricingCalculator работает только со снапшотом, поэтому результат
расчёта соответствует состоянию после всех применённых мутаций.
Соответствует контракту contracts/schema/cart_state.json (см. to_contract).
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from .discount import DiscountConfig
from .line_item import LineItem


class CartState(BaseModel):
    """Снапшот корзины."""

    items: tuple[LineItem, ...] = Field(default=(), description="Позиции корзины")
    discount: DiscountConfig = Field(
        default_factory=DiscountConfig.default, description="Активные скидки"
    )
    last_updated: datetime = Field(..., description="Время последнего изменения (UTC)")

    model_config = {"frozen": True}

    def item_count(self) -> int:
        """Суммарное количество единиц в корзине."""
        return sum(item.quantity for item in self.items)

    def is_empty(self) -> bool:
        return not self.items

    def to_contract(self) -> dict[str, Any]:
        """Wire-представление (camelCase) для UI корзины."""
        return {
            "items": [
                {
                    "id": item.id,
                    "name": item.name,
                    "price": item.unit_price,
                    "quantity": item.quantity,
                    "maxStock": item.max_stock,
                    "itemType": item.item_type.value,
                    "isDiscountable": item.is_discountable,
                }
                for item in self.items
            ],
            "discount": {
                "discountId": self.discount.discount_id,
                "discountPercent": self.discount.percent_discount,
                "discountName": self.discount.discount_name,
                "specialDiscountAmount": self.discount.flat_special_discount,
                "seniorId": self.discount.senior_id,
            },
            "lastUpdated": self.last_updated.isoformat(),
        }
