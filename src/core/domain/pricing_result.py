"""
PricingResult: Результат расчёта стоимости корзины

Read-only результат PricingCalculator. Передаётся в checkout
(формирование транзакции) и UI корзины.
"""

from pydantic import BaseModel, Field


class PricingResult(BaseModel):
    """
    Денежные показатели корзины.

    Суммы не округлены (raw float). Округление до валютной точности
    выполняется при формировании транзакции.

    Инварианты:
    - discountable_subtotal <= subtotal
    - regular_discount_amount + special_discount_amount <= discountable_base
    - final_total >= 0
    """

    # Подытоги
    subtotal: float = Field(..., description="Σ unit_price × quantity по всем позициям")
    discountable_subtotal: float = Field(
        ..., description="Σ unit_price × quantity по скидочным позициям"
    )

    # НДС (считается независимо на обе базы)
    vat_amount: float = Field(..., description="НДС на весь подытог")
    discountable_vat_amount: float = Field(..., description="НДС на скидочный подытог")

    # Базы
    base_total: float = Field(..., description="Итог без скидок (subtotal + НДС)")
    discountable_base: float = Field(
        ..., description="Скидочная часть итога (скидочный подытог + его НДС)"
    )

    # Скидки
    regular_discount_amount: float = Field(..., ge=0, description="Regular скидка (сумма)")
    special_discount_amount: float = Field(
        ..., ge=0, description="Special скидка после ограничения остатком"
    )

    # Итог
    final_total: float = Field(..., ge=0, description="К оплате")

    model_config = {"frozen": True}

    @property
    def total_discount_amount(self) -> float:
        """Суммарная скидка (regular + special)."""
        return self.regular_discount_amount + self.special_discount_amount
