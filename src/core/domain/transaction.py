"""
Transaction: Модель запроса на проведение продажи

Payload, который checkout передаёт во внешний сервис транзакций.
Соответствует контракту contracts/schema/transaction_request.json
(в wire-формате camelCase, см. to_contract).
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class PaymentMethod(str, Enum):
    """Способ оплаты"""

    CASH = "Cash"
    GCASH = "GCash"
    MAYA = "Maya"
    GOTYME = "GoTyme"


# =============================================================================
# NESTED MODELS
# =============================================================================


class TransactionItem(BaseModel):
    """Позиция транзакции: идентификатор и количество."""

    item_id: str = Field(..., min_length=1, description="Идентификатор позиции каталога")
    quantity: int = Field(..., ge=1, description="Количество")

    model_config = {"frozen": True}


# =============================================================================
# TRANSACTION REQUEST
# =============================================================================


class TransactionRequest(BaseModel):
    """
    Запрос на проведение продажи.

    Все суммы уже округлены до валютной точности.
    """

    payment_method: PaymentMethod = Field(..., description="Способ оплаты")
    reference_number: str | None = Field(
        None, description="Номер операции для безналичной оплаты"
    )
    cash_in_hand: float | None = Field(None, ge=0, description="Полученные наличные")
    change_amount: float = Field(default=0.0, ge=0, description="Сдача")
    senior_id: str | None = Field(None, description="Номер удостоверения пенсионера")

    # Суммы
    special_discount: float = Field(..., ge=0, description="Special скидка")
    regular_discount: float = Field(..., ge=0, description="Regular скидка")
    subtotal: float = Field(..., ge=0, description="Подытог")
    vat: float = Field(..., ge=0, description="НДС")
    total_amount: float = Field(..., ge=0, description="К оплате")

    items: list[TransactionItem] = Field(..., min_length=1, description="Позиции")

    model_config = {"frozen": True}

    def to_contract(self) -> dict[str, Any]:
        """
        Wire-представление (camelCase) для сервиса транзакций.

        change_amount в контракт не входит: сдачу считает и хранит
        сервис транзакций.
        """
        return {
            "paymentMethod": self.payment_method.value,
            "referenceNumber": self.reference_number,
            "cashInHand": self.cash_in_hand,
            "seniorId": self.senior_id,
            "specialDiscount": self.special_discount,
            "regularDiscount": self.regular_discount,
            "subtotal": self.subtotal,
            "vat": self.vat,
            "totalAmount": self.total_amount,
            "items": [
                {"itemId": item.item_id, "quantity": item.quantity} for item in self.items
            ],
        }
