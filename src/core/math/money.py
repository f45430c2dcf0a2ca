"""
Money: денежные примитивы для расчётов корзины

Модуль обеспечивает численную устойчивость денежных вычислений:
- Ограничение значений в диапазоне (clamp) вместо отказа
- NaN санитизация входов скидок (±Inf ограничивается как обычное значение)
- Сравнение сумм с учётом машинной точности float
- Округление сумм до валютной точности (round half up)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. NaN никогда не пропагирует в скидки (заменяется на 0)
2. Процент скидки всегда в [0, 100], фиксированная скидка всегда >= 0
3. Все операции детерминированы и воспроизводимы
"""

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Final

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Границы процентной скидки
PERCENT_MIN: Final[float] = 0.0
PERCENT_MAX: Final[float] = 100.0

# Валютная точность по умолчанию (знаков после запятой)
CURRENCY_DECIMALS_DEFAULT: Final[int] = 2

# Абсолютная толерантность для сравнения денежных сумм
MONEY_EPS: Final[float] = 1e-9


# =============================================================================
# NaN/Inf САНИТИЗАЦИЯ
# =============================================================================


def is_valid_amount(value: float) -> bool:
    """
    Проверка, является ли сумма валидным float (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение finite
    """
    return math.isfinite(value)


def sanitize_amount(value: float, fallback: float = 0.0) -> float:
    """
    Санитизация суммы: замена NaN/Inf на fallback.

    Examples:
        >>> sanitize_amount(10.0)
        10.0
        >>> sanitize_amount(float('nan'))
        0.0
        >>> sanitize_amount(float('inf'), fallback=-1.0)
        -1.0
    """
    if is_valid_amount(value):
        return value
    return fallback


# =============================================================================
# ОГРАНИЧЕНИЕ ДИАПАЗОНА
# =============================================================================


def clamp(
    value: float,
    min_value: float | None = None,
    max_value: float | None = None,
) -> float:
    """
    Ограничение значения в заданном диапазоне.

    Args:
        value: Исходное значение
        min_value: Минимальное допустимое значение (optional)
        max_value: Максимальное допустимое значение (optional)

    Returns:
        Значение, ограниченное диапазоном [min_value, max_value]

    Examples:
        >>> clamp(5.0, 0.0, 10.0)
        5.0
        >>> clamp(-1.0, 0.0, 10.0)
        0.0
        >>> clamp(15.0, 0.0, 10.0)
        10.0
    """
    result = value

    if min_value is not None:
        result = max(result, min_value)

    if max_value is not None:
        result = min(result, max_value)

    return result


def clamp_percent(value: float) -> float:
    """
    Процент скидки в диапазоне [0, 100].

    NaN трактуется как 0 (скидка не применяется), ±Inf ограничивается
    как любое значение вне диапазона.

    Examples:
        >>> clamp_percent(150.0)
        100.0
        >>> clamp_percent(-5.0)
        0.0
        >>> clamp_percent(float('inf'))
        100.0
    """
    if math.isnan(value):
        value = 0.0
    return clamp(value, PERCENT_MIN, PERCENT_MAX)


def clamp_non_negative(value: float) -> float:
    """
    Сумма, ограниченная снизу нулём (NaN → 0, -Inf → 0).

    +Inf сохраняется: для фиксированной скидки это "максимально возможная",
    PricingCalculator ограничивает её остатком скидочной части.

    Examples:
        >>> clamp_non_negative(-20.0)
        0.0
        >>> clamp_non_negative(20.0)
        20.0
    """
    if math.isnan(value):
        value = 0.0
    return clamp(value, min_value=0.0)


# =============================================================================
# СРАВНЕНИЕ И ОКРУГЛЕНИЕ
# =============================================================================


def is_close_amount(a: float, b: float, abs_tol: float = MONEY_EPS) -> bool:
    """
    Сравнение двух сумм с учётом погрешности float.

    Пример: 280 - 22.4 - 5 даёт 252.60000000000002, что равно 252.6.
    """
    return math.isclose(a, b, rel_tol=0.0, abs_tol=abs_tol)


def round_currency(value: float, decimals: int = CURRENCY_DECIMALS_DEFAULT) -> float:
    """
    Округление суммы до валютной точности (round half up).

    Округление выполняется через Decimal от строкового представления float,
    чтобы 2.675 округлялось до 2.68, а не до 2.67 (как у встроенного round).
    Точность локального decimal-контекста расширяется под величину суммы,
    поэтому quantize не падает на больших значениях.

    Args:
        value: Сумма
        decimals: Количество знаков после запятой (>= 0)

    Returns:
        Округлённая сумма

    Raises:
        ValueError: Если decimals < 0

    Examples:
        >>> round_currency(252.60000000000002)
        252.6
        >>> round_currency(2.675)
        2.68
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")

    quantum = Decimal(1).scaleb(-decimals)
    amount = Decimal(repr(sanitize_amount(value)))
    with localcontext() as ctx:
        # цифры целой части + знаки после запятой + запас
        ctx.prec = max(ctx.prec, amount.adjusted() + decimals + 2)
        rounded = amount.quantize(quantum, rounding=ROUND_HALF_UP)
    return float(rounded)
