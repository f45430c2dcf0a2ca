"""Тесты для Checkout

Покрытие:
- Cash: сдача, недостаточно наличных, отсутствие суммы
- Безналичная оплата: обязательный номер операции
- Округление сумм до валютной точности
- Пустая корзина
- Конфигурация checkout
"""

import logging

import pytest
from jsonschema import ValidationError as JsonSchemaValidationError

from src.cart import CartStore
from src.checkout import (
    CheckoutConfig,
    CheckoutError,
    build_transaction_request,
    calculate_change,
)
from src.core.domain import CatalogItem, PaymentMethod, PricingResult, TaxConfig
from src.core.domain.cart_state import CartState
from src.pricing import price_cart


VAT_12 = TaxConfig(vat_enabled=True, vat_rate_percent=12)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def cart() -> CartStore:
    """A (100 × 2, скидочная), B (50 × 1, нескидочная), 10% + 5, пенсионер."""
    cart = CartStore()
    cart.add_item(CatalogItem(id="A", name="A", unit_price=100.0, max_stock=10), 2)
    cart.add_item(
        CatalogItem(id="B", name="B", unit_price=50.0, max_stock=10, is_discountable=False), 1
    )
    cart.set_discount(percent_discount=10, flat_special_discount=5, senior_id="SC-123")
    return cart


@pytest.fixture
def state(cart: CartStore) -> CartState:
    return cart.snapshot()


@pytest.fixture
def pricing(state: CartState) -> PricingResult:
    return price_cart(state, VAT_12)


# =============================================================================
# CHANGE
# =============================================================================


class TestCalculateChange:
    def test_change(self) -> None:
        assert calculate_change(252.6, 300.0) == pytest.approx(47.4)

    def test_exact_amount(self) -> None:
        assert calculate_change(252.6, 252.6) == 0.0

    def test_never_negative(self) -> None:
        assert calculate_change(252.6, 100.0) == 0.0


# =============================================================================
# CASH
# =============================================================================


class TestCashPayment:
    def test_builds_request(self, state: CartState, pricing: PricingResult) -> None:
        request = build_transaction_request(
            state, pricing, PaymentMethod.CASH, cash_in_hand=300.0
        )

        assert request.payment_method == PaymentMethod.CASH
        assert request.cash_in_hand == 300.0
        assert request.change_amount == 47.4
        assert request.reference_number is None
        assert request.senior_id == "SC-123"
        assert request.subtotal == 250.0
        assert request.vat == 30.0
        assert request.regular_discount == 22.4
        assert request.special_discount == 5.0
        assert request.total_amount == 252.6
        assert [(i.item_id, i.quantity) for i in request.items] == [("A", 2), ("B", 1)]

    def test_reference_dropped_for_cash(self, state: CartState, pricing: PricingResult) -> None:
        request = build_transaction_request(
            state, pricing, PaymentMethod.CASH, cash_in_hand=300.0, reference_number="REF"
        )

        assert request.reference_number is None

    def test_exact_cash_after_rounding(self, state: CartState, pricing: PricingResult) -> None:
        """Наличные сравниваются с округлённым итогом (252.6, а не 252.60000000000002)"""
        request = build_transaction_request(
            state, pricing, PaymentMethod.CASH, cash_in_hand=252.6
        )

        assert request.change_amount == 0.0

    def test_insufficient_cash(
        self, state: CartState, pricing: PricingResult, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="src.checkout.transaction"):
            with pytest.raises(CheckoutError, match="Insufficient cash") as exc_info:
                build_transaction_request(state, pricing, PaymentMethod.CASH, cash_in_hand=100.0)

        assert exc_info.value.reason == "insufficient_cash"
        assert any("insufficient cash" in record.getMessage() for record in caplog.records)

    def test_cash_required(self, state: CartState, pricing: PricingResult) -> None:
        with pytest.raises(CheckoutError) as exc_info:
            build_transaction_request(state, pricing, PaymentMethod.CASH)

        assert exc_info.value.reason == "cash_required"

    def test_wire_value_accepted(self, state: CartState, pricing: PricingResult) -> None:
        request = build_transaction_request(state, pricing, "Cash", cash_in_hand=300.0)

        assert request.payment_method == PaymentMethod.CASH

    def test_checkout_error_is_value_error(self, state: CartState, pricing: PricingResult) -> None:
        with pytest.raises(ValueError):
            build_transaction_request(state, pricing, PaymentMethod.CASH)

    def test_exact_cash_within_float_tolerance(
        self, state: CartState, pricing: PricingResult
    ) -> None:
        """При высокой точности округления шум float не делает наличные недостаточными"""
        config = CheckoutConfig(currency_decimals=15)

        request = build_transaction_request(
            state, pricing, PaymentMethod.CASH, cash_in_hand=252.6, config=config
        )

        assert request.change_amount == 0.0


# =============================================================================
# CONTRACT
# =============================================================================


class TestContractValidation:
    def test_request_validated_against_schema(
        self, state: CartState, pricing: PricingResult, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        validated: list[dict] = []
        monkeypatch.setattr(
            "src.checkout.transaction.validate_transaction_request", validated.append
        )

        request = build_transaction_request(
            state, pricing, PaymentMethod.GCASH, reference_number="GC-1"
        )

        assert validated == [request.to_contract()]

    def test_contract_violation_propagates(
        self, state: CartState, pricing: PricingResult, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def reject(data: dict) -> None:
            raise JsonSchemaValidationError("rejected")

        monkeypatch.setattr("src.checkout.transaction.validate_transaction_request", reject)

        with pytest.raises(JsonSchemaValidationError):
            build_transaction_request(state, pricing, PaymentMethod.CASH, cash_in_hand=300.0)

    def test_large_totals_pass_contract(self) -> None:
        cart = CartStore()
        cart.add_item(CatalogItem(id="A", name="A", unit_price=1e30, max_stock=1), 1)
        state = cart.snapshot()

        request = build_transaction_request(
            state, price_cart(state, TaxConfig()), PaymentMethod.MAYA, reference_number="M-1"
        )

        assert request.total_amount == 1e30


# =============================================================================
# NON-CASH
# =============================================================================


class TestNonCashPayment:
    @pytest.mark.parametrize(
        "method", [PaymentMethod.GCASH, PaymentMethod.MAYA, PaymentMethod.GOTYME]
    )
    def test_builds_request(
        self, state: CartState, pricing: PricingResult, method: PaymentMethod
    ) -> None:
        request = build_transaction_request(
            state, pricing, method, cash_in_hand=500.0, reference_number="  REF-001  "
        )

        assert request.payment_method == method
        assert request.reference_number == "REF-001"
        assert request.cash_in_hand is None
        assert request.change_amount == 0.0

    @pytest.mark.parametrize("reference", [None, "", "   "])
    def test_reference_required(
        self, state: CartState, pricing: PricingResult, reference: str | None
    ) -> None:
        with pytest.raises(CheckoutError, match="GCash reference number is required") as exc_info:
            build_transaction_request(
                state, pricing, PaymentMethod.GCASH, reference_number=reference
            )

        assert exc_info.value.reason == "reference_required"

    def test_reference_optional_by_config(self, state: CartState, pricing: PricingResult) -> None:
        config = CheckoutConfig(require_reference_for_non_cash=False)

        request = build_transaction_request(state, pricing, PaymentMethod.MAYA, config=config)

        assert request.reference_number is None


# =============================================================================
# EDGE CASES
# =============================================================================


class TestCheckoutEdgeCases:
    def test_empty_cart_rejected(self) -> None:
        state = CartStore().snapshot()
        pricing = price_cart(state, VAT_12)

        with pytest.raises(CheckoutError) as exc_info:
            build_transaction_request(state, pricing, PaymentMethod.CASH, cash_in_hand=10.0)

        assert exc_info.value.reason == "empty_cart"

    def test_amounts_rounded_half_up(self) -> None:
        cart = CartStore()
        cart.add_item(CatalogItem(id="A", name="A", unit_price=19.99, max_stock=10), 3)
        cart.set_discount(percent_discount=12.5)
        state = cart.snapshot()
        pricing = price_cart(state, VAT_12)

        request = build_transaction_request(state, pricing, PaymentMethod.CASH, cash_in_hand=100)

        # 59.97 × 1.12 = 67.1664; 12.5% = 8.3958; итог 58.7706
        assert request.subtotal == 59.97
        assert request.vat == 7.2
        assert request.regular_discount == 8.4
        assert request.total_amount == 58.77
        assert request.change_amount == 41.23

    def test_custom_currency_decimals(self, state: CartState, pricing: PricingResult) -> None:
        config = CheckoutConfig(currency_decimals=0)

        request = build_transaction_request(
            state, pricing, PaymentMethod.CASH, cash_in_hand=300.0, config=config
        )

        assert request.total_amount == 253.0
        assert request.regular_discount == 22.0
        assert request.change_amount == 47.0

    def test_request_logged(
        self, state: CartState, pricing: PricingResult, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger="src.checkout.transaction"):
            build_transaction_request(state, pricing, PaymentMethod.CASH, cash_in_hand=300.0)

        assert any("transaction request built" in r.getMessage() for r in caplog.records)
