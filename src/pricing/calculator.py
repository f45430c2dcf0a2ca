"""
PricingCalculator: расчёт стоимости корзины

Чистые функции без состояния: одинаковые входы → одинаковый результат,
входы не изменяются. Вызываются на каждое чтение/рендер корзины.

Скидки применяются только к скидочной части корзины, а НДС начисляется
на всю корзину. Поэтому два итога (общий и скидочный) ведутся параллельно
через НДС и сводятся только при вычитании скидок из общего base_total.
Special скидка применяется после regular и ограничена её остатком.

ФОРМУЛЫ (порядок применения фиксирован):
    1. subtotal               = Σ unit_price × quantity
    2. discountable_subtotal  = Σ unit_price × quantity  (is_discountable)
    3. vat(base)              = base × rate / 100  если vat_enabled и rate > 0, иначе 0
    4. vat_amount             = vat(subtotal)
       discountable_vat       = vat(discountable_subtotal)   (независимо)
    5. base_total             = subtotal + vat_amount
    6. discountable_base      = discountable_subtotal + discountable_vat
    7. regular                = discountable_base × percent / 100
    8. remaining_discountable = max(0, discountable_base - regular)
    9. special                = min(flat_special, remaining_discountable)
   10. final_total            = max(0, base_total - regular - special)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. discountable_subtotal <= subtotal
2. regular + special <= discountable_base (скидка не трогает нескидочные позиции)
3. final_total >= 0
4. Ошибок нет: все граничные случаи закрыты max(0, ...) / min(...)
"""

from collections.abc import Iterable

from src.core.domain.cart_state import CartState
from src.core.domain.discount import DiscountConfig
from src.core.domain.line_item import LineItem
from src.core.domain.pricing_result import PricingResult
from src.core.domain.tax import TaxConfig


# =============================================================================
# ПОДЫТОГИ
# =============================================================================


def calculate_subtotal(items: Iterable[LineItem]) -> float:
    """Подытог по всем позициям: Σ unit_price × quantity."""
    return sum((item.line_total() for item in items), 0.0)


def calculate_discountable_subtotal(items: Iterable[LineItem]) -> float:
    """Подытог по скидочным позициям (is_discountable=True)."""
    return sum((item.line_total() for item in items if item.is_discountable), 0.0)


# =============================================================================
# НДС
# =============================================================================


def calculate_vat(base: float, tax: TaxConfig) -> float:
    """
    НДС на заданную базу.

    Args:
        base: База начисления
        tax: Настройки НДС

    Returns:
        base × vat_rate_percent / 100, либо 0 если НДС выключен или ставка 0

    Examples:
        >>> calculate_vat(250.0, TaxConfig(vat_enabled=True, vat_rate_percent=12))
        30.0
        >>> calculate_vat(250.0, TaxConfig(vat_enabled=False, vat_rate_percent=12))
        0.0
    """
    if not tax.is_vat_applicable:
        return 0.0
    return base * (tax.vat_rate_percent / 100)


# =============================================================================
# СКИДКИ
# =============================================================================


def calculate_regular_discount(discountable_base: float, percent_discount: float) -> float:
    """Regular скидка: процент от скидочной части итога."""
    return discountable_base * (percent_discount / 100)


def calculate_special_discount(
    discountable_base: float,
    regular_discount_amount: float,
    flat_special_discount: float,
) -> float:
    """
    Special скидка, ограниченная остатком скидочной части после regular.

    Args:
        discountable_base: Скидочная часть итога (подытог + НДС)
        regular_discount_amount: Уже применённая regular скидка
        flat_special_discount: Запрошенная фиксированная скидка

    Returns:
        min(flat_special_discount, max(0, discountable_base - regular))

    Examples:
        >>> calculate_special_discount(200.0, 20.0, 5.0)
        5.0
        >>> calculate_special_discount(200.0, 20.0, 500.0)
        180.0
    """
    remaining_discountable = max(0.0, discountable_base - regular_discount_amount)
    return min(flat_special_discount, remaining_discountable)


# =============================================================================
# ПОЛНЫЙ РАСЧЁТ
# =============================================================================


def calculate_pricing(
    items: Iterable[LineItem],
    discount: DiscountConfig,
    tax: TaxConfig,
) -> PricingResult:
    """
    Полный расчёт стоимости корзины.

    Args:
        items: Позиции корзины
        discount: Активные скидки
        tax: Настройки НДС

    Returns:
        PricingResult со всеми денежными показателями
    """
    items = tuple(items)

    # 1-2. Подытоги
    subtotal = calculate_subtotal(items)
    discountable_subtotal = calculate_discountable_subtotal(items)

    # 3-4. НДС на обе базы независимо
    vat_amount = calculate_vat(subtotal, tax)
    discountable_vat_amount = calculate_vat(discountable_subtotal, tax)

    # 5-6. Базы
    base_total = subtotal + vat_amount
    discountable_base = discountable_subtotal + discountable_vat_amount

    # 7-9. Скидки: сначала regular, затем special с ограничением остатком
    regular_discount_amount = calculate_regular_discount(
        discountable_base, discount.percent_discount
    )
    special_discount_amount = calculate_special_discount(
        discountable_base, regular_discount_amount, discount.flat_special_discount
    )

    # 10. Итог
    final_total = max(0.0, base_total - regular_discount_amount - special_discount_amount)

    return PricingResult(
        subtotal=subtotal,
        discountable_subtotal=discountable_subtotal,
        vat_amount=vat_amount,
        discountable_vat_amount=discountable_vat_amount,
        base_total=base_total,
        discountable_base=discountable_base,
        regular_discount_amount=regular_discount_amount,
        special_discount_amount=special_discount_amount,
        final_total=final_total,
    )


def price_cart(state: CartState, tax: TaxConfig) -> PricingResult:
    """Расчёт стоимости по снапшоту корзины."""
    return calculate_pricing(state.items, state.discount, tax)
