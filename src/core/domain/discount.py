"""
Discount: Конфигурация скидок корзины

Две независимые скидки:
- Regular: процент от скидочной части корзины (подытог + её НДС)
- Special: фиксированная сумма (например, скидка пенсионеру), применяется
  после regular и ограничена остатком скидочной части

discount_id / discount_name / senior_id: метаданные для трассировки,
на расчёт не влияют.
"""

from pydantic import BaseModel, Field

from src.core.math.money import PERCENT_MAX, PERCENT_MIN


# =============================================================================
# DISCOUNT CONFIG
# =============================================================================


class DiscountConfig(BaseModel):
    """
    Активная конфигурация скидок корзины.

    Immutable модель (frozen=True). CartStore заменяет её целиком
    при каждом частичном обновлении.
    """

    percent_discount: float = Field(
        default=0.0, ge=PERCENT_MIN, le=PERCENT_MAX, description="Regular скидка (%)"
    )
    flat_special_discount: float = Field(
        default=0.0, ge=0, description="Special скидка (фиксированная сумма)"
    )

    # Метаданные
    discount_id: str | None = Field(None, description="Идентификатор выбранной скидки")
    discount_name: str | None = Field(None, description="Наименование выбранной скидки")
    senior_id: str | None = Field(None, description="Номер удостоверения пенсионера")

    model_config = {"frozen": True}

    @classmethod
    def default(cls) -> "DiscountConfig":
        """Обнулённая конфигурация (без скидок и метаданных)."""
        return cls()


# =============================================================================
# PARTIAL UPDATE
# =============================================================================


class DiscountUpdate(BaseModel):
    """
    Частичное обновление DiscountConfig.

    Применяются только явно переданные поля (model_fields_set):
    DiscountUpdate(discount_id=None) сбрасывает discount_id,
    а DiscountUpdate() не меняет ничего.

    Числовые поля не валидируются по диапазону: CartStore ограничивает
    их (clamp), а не отклоняет. Неизвестные поля отклоняются.
    """

    percent_discount: float | None = None
    flat_special_discount: float | None = None
    discount_id: str | None = None
    discount_name: str | None = None
    senior_id: str | None = None

    model_config = {"frozen": True, "extra": "forbid"}

    def supplied_fields(self) -> dict:
        """Явно переданные поля и их значения."""
        return {name: getattr(self, name) for name in self.model_fields_set}
