"""Checkout: формирование запроса на проведение продажи.

Собирает TransactionRequest из снапшота корзины и результата расчёта
стоимости и проверяет оплату:
- пустая корзина не проводится
- Cash: сумма наличных обязательна и должна покрывать итог
- безналичная оплата (GCash/Maya/GoTyme): обязателен номер операции

Все суммы округляются до валютной точности (round half up) только здесь;
PricingCalculator работает с raw float.
"""

import logging
from dataclasses import dataclass

from src.core.domain.cart_state import CartState
from src.core.domain.pricing_result import PricingResult
from src.core.domain.transaction import (
    PaymentMethod,
    TransactionItem,
    TransactionRequest,
)
from src.core.contracts.validators import validate_transaction_request
from src.core.math.money import CURRENCY_DECIMALS_DEFAULT, is_close_amount, round_currency

logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class CheckoutError(ValueError):
    """Оплата не может быть проведена.

    reason: машиночитаемая причина:
    empty_cart, cash_required, insufficient_cash, reference_required
    """

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class CheckoutConfig:
    """Конфигурация checkout."""

    currency_decimals: int = CURRENCY_DECIMALS_DEFAULT
    require_reference_for_non_cash: bool = True


# =============================================================================
# CHECKOUT
# =============================================================================


def calculate_change(final_total: float, cash_in_hand: float) -> float:
    """Сдача: max(0, cash_in_hand - final_total)."""
    return max(0.0, cash_in_hand - final_total)


def build_transaction_request(
    state: CartState,
    pricing: PricingResult,
    payment_method: PaymentMethod,
    cash_in_hand: float | None = None,
    reference_number: str | None = None,
    config: CheckoutConfig | None = None,
) -> TransactionRequest:
    """Формирование запроса на проведение продажи.

    Args:
        state: снапшот корзины (позиции и senior_id)
        pricing: результат расчёта стоимости для этого снапшота
        payment_method: способ оплаты
        cash_in_hand: полученные наличные (только для Cash)
        reference_number: номер операции (для безналичной оплаты)
        config: конфигурация checkout (опционально, используется default)

    Returns:
        TransactionRequest с округлёнными суммами

    Raises:
        CheckoutError: если корзина пуста или оплата некорректна
        jsonschema.ValidationError: если payload не соответствует контракту
            transaction_request
    """
    config = config or CheckoutConfig()
    decimals = config.currency_decimals
    payment_method = PaymentMethod(payment_method)

    if state.is_empty():
        logger.warning("checkout rejected: empty cart")
        raise CheckoutError("empty_cart", "Cart is empty")

    total_amount = round_currency(pricing.final_total, decimals)
    change_amount = 0.0

    if payment_method == PaymentMethod.CASH:
        if cash_in_hand is None:
            logger.warning("checkout rejected: cash amount missing")
            raise CheckoutError("cash_required", "Cash in hand is required for cash payment")

        cash_in_hand = round_currency(cash_in_hand, decimals)
        if cash_in_hand < total_amount and not is_close_amount(cash_in_hand, total_amount):
            logger.warning(
                "checkout rejected: insufficient cash (cash=%.2f total=%.2f)",
                cash_in_hand,
                total_amount,
            )
            raise CheckoutError(
                "insufficient_cash",
                f"Insufficient cash: need {total_amount:.{decimals}f}, got {cash_in_hand:.{decimals}f}",
            )

        change_amount = round_currency(calculate_change(total_amount, cash_in_hand), decimals)
        reference_number = None
    else:
        reference_number = reference_number.strip() if reference_number else None
        if config.require_reference_for_non_cash and not reference_number:
            logger.warning("checkout rejected: reference missing for %s", payment_method.value)
            raise CheckoutError(
                "reference_required",
                f"{payment_method.value} reference number is required",
            )
        cash_in_hand = None

    request = TransactionRequest(
        payment_method=payment_method,
        reference_number=reference_number,
        cash_in_hand=cash_in_hand,
        change_amount=change_amount,
        senior_id=state.discount.senior_id,
        special_discount=round_currency(pricing.special_discount_amount, decimals),
        regular_discount=round_currency(pricing.regular_discount_amount, decimals),
        subtotal=round_currency(pricing.subtotal, decimals),
        vat=round_currency(pricing.vat_amount, decimals),
        total_amount=total_amount,
        items=[TransactionItem(item_id=item.id, quantity=item.quantity) for item in state.items],
    )
    validate_transaction_request(request.to_contract())

    logger.info(
        "transaction request built: method=%s items=%d total=%.2f",
        payment_method.value,
        len(request.items),
        total_amount,
    )
    return request
