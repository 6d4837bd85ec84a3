"""
Fees — "Double 10" Fee Calculator

Модуль вычисляет денежные разбивки заказа по модели двойной комиссии:
- calculate_order_split: base → (total_captured, app_revenue, seller_payout)
- calculate_order_breakdown: unit_price × quantity → (subtotal, platform_fee, total)
- calculate_fees: полная разбивка для серверной платёжной оркестрации
- calculate_payment_amounts: суммы в центах для платёжного процессора
- base_amount_from_total: восстановление base из оплаченной суммы

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Невалидный вход → исключение (InvalidAmount / InvalidUnitPrice / InvalidQuantity),
   никогда не подмена на 0 или на вход
2. Нефинитный результат при валидном входе → CalculationError
3. seller_payout + app_revenue == total_captured (в пределах epsilon)
4. OrderBreakdown.total == subtotal + platform_fee точно на уровне центов
5. Ставки берутся только из FeeSchedule (единый источник)

ФОРМУЛЫ:
    buyer_fee      = base * buyer_fee_rate
    seller_fee     = base * seller_fee_rate
    total_captured = base + buyer_fee
    app_revenue    = buyer_fee + seller_fee
    seller_payout  = base - seller_fee

    subtotal     = unit_price * quantity           (Decimal, точно)
    platform_fee = subtotal * buyer_fee_rate       (Decimal, точно)
    total        = round(subtotal) + round(platform_fee)
"""

import logging
import math
from decimal import Decimal
from typing import NamedTuple

from platefees.core.domain.fee_schedule import (
    DEFAULT_FEE_SCHEDULE,
    MIN_ORDER_QUANTITY,
    FeeSchedule,
)
from platefees.core.domain.results import (
    FeeBreakdown,
    OrderBreakdown,
    OrderSplit,
    PaymentAmounts,
)
from platefees.core.math.numerical_safeguards import (
    is_integral,
    is_number,
    money_context,
    round_currency,
    to_decimal,
    to_minor_units,
    validate_non_negative,
)

logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class FeeError(Exception):
    """
    Базовая ошибка расчёта комиссий.

    field и value позволяют вызывающему коду показать конкретное
    сообщение валидации (какое поле и какое значение отклонено).
    """

    def __init__(self, message: str, *, field: str | None = None, value: object = None):
        super().__init__(message)
        self.field = field
        self.value = value


class InvalidAmount(FeeError, ValueError):
    """Base amount отсутствует, не число, отрицательный или NaN/Inf."""


class InvalidUnitPrice(FeeError, ValueError):
    """Unit price отсутствует, не число, отрицательный или NaN/Inf."""


class InvalidQuantity(FeeError, ValueError):
    """Quantity не целое число в диапазоне [1, max_order_quantity]."""


class CalculationError(FeeError, ArithmeticError):
    """
    Нефинитный результат арифметики при валидных входах.

    Не должно происходить для реалистичных сумм; возникает при переполнении
    float (например, base около sys.float_info.max).
    """


# =============================================================================
# ВАЛИДАЦИЯ ВХОДОВ
# =============================================================================


def _coerce_money(value: object, field: str, error_cls: type[FeeError]) -> float:
    """Проверка денежного входа и конверсия в float (-0.0 → 0.0)."""
    if value is None:
        logger.debug("Rejected %s: missing value", field)
        raise error_cls(f"{field} is required", field=field, value=value)

    message = f"Invalid {field}: {value}. Must be a finite, non-negative number."

    try:
        validate_non_negative(value, field)
    except ValueError as e:
        logger.debug("Rejected %s: %s", field, e)
        raise error_cls(message, field=field, value=value) from e

    # int вне диапазона float → OverflowError, Decimal вне диапазона → inf
    try:
        amount = float(value)  # type: ignore[arg-type]
    except OverflowError:
        amount = math.inf

    if not math.isfinite(amount):
        logger.debug("Rejected %s: %r is not representable as float", field, value)
        raise error_cls(message, field=field, value=value)

    return amount + 0.0


def _coerce_quantity(value: object, schedule: FeeSchedule) -> int:
    """Проверка количества: целое в [MIN_ORDER_QUANTITY, schedule.max_order_quantity]."""
    max_quantity = schedule.max_order_quantity
    message = (
        f"Invalid quantity: {value}. "
        f"Must be a whole number between {MIN_ORDER_QUANTITY} and {max_quantity}."
    )

    if value is None or not is_number(value):
        logger.debug("Rejected quantity: %r", value)
        raise InvalidQuantity(message, field="quantity", value=value)

    try:
        quantity = float(value)  # type: ignore[arg-type]
    except (OverflowError, ValueError):
        quantity = math.nan

    if (
        not math.isfinite(quantity)
        or not is_integral(quantity)
        or quantity < MIN_ORDER_QUANTITY
        or quantity > max_quantity
    ):
        logger.debug("Rejected quantity: %r", value)
        raise InvalidQuantity(message, field="quantity", value=value)

    return int(quantity)


def _ensure_finite(operation: str, **values: float) -> None:
    """Защитная проверка выходов: любой NaN/Inf — фатальная ошибка."""
    bad = {name: v for name, v in values.items() if not math.isfinite(v)}
    if bad:
        logger.error("%s produced non-finite values: %s", operation, values)
        raise CalculationError(
            f"{operation} resulted in non-finite values: {bad}",
            field=next(iter(bad)),
            value=next(iter(bad.values())),
        )


# =============================================================================
# ORDER SPLIT
# =============================================================================


class _SplitComponents(NamedTuple):
    buyer_fee: float
    seller_fee: float
    total_captured: float
    app_revenue: float
    seller_payout: float


def _split_components(base: float, schedule: FeeSchedule) -> _SplitComponents:
    buyer_fee = base * schedule.buyer_fee_rate
    seller_fee = base * schedule.seller_fee_rate
    components = _SplitComponents(
        buyer_fee=buyer_fee,
        seller_fee=seller_fee,
        total_captured=base + buyer_fee,
        app_revenue=buyer_fee + seller_fee,
        seller_payout=base - seller_fee,
    )
    _ensure_finite("Fee calculation", **components._asdict())
    return components


def calculate_order_split(
    base_amount: float,
    schedule: FeeSchedule = DEFAULT_FEE_SCHEDULE,
) -> OrderSplit:
    """
    Разделение "Double 10": покупатель +10%, продавец -10%, платформа 20%.

    Args:
        base_amount: Сумма заказа до комиссий (цена блюда), >= 0
        schedule: Ставки комиссии (default: DEFAULT_FEE_SCHEDULE)

    Returns:
        OrderSplit без округления (float арифметика)

    Raises:
        InvalidAmount: Если base_amount отсутствует, не число, < 0 или NaN/Inf
        CalculationError: Если результат нефинитный (переполнение)

    Examples:
        >>> calculate_order_split(100).model_dump()
        {'total_captured': 110.0, 'app_revenue': 20.0, 'seller_payout': 90.0}
        >>> calculate_order_split(0).model_dump()
        {'total_captured': 0.0, 'app_revenue': 0.0, 'seller_payout': 0.0}
    """
    base = _coerce_money(base_amount, "base_amount", InvalidAmount)
    parts = _split_components(base, schedule)

    return OrderSplit(
        total_captured=parts.total_captured,
        app_revenue=parts.app_revenue,
        seller_payout=parts.seller_payout,
    )


# =============================================================================
# ORDER BREAKDOWN
# =============================================================================


def calculate_order_breakdown(
    unit_price: float,
    quantity: int,
    schedule: FeeSchedule = DEFAULT_FEE_SCHEDULE,
) -> OrderBreakdown:
    """
    Разбивка строки корзины для UI и API (единое место расчёта).

    subtotal и platform_fee вычисляются точно в Decimal и округляются один раз
    (ROUND_HALF_UP) до центов. total собирается из уже округлённых частей,
    поэтому total == subtotal + platform_fee на уровне центов всегда; для
    цен в центах это совпадает с округлением точного total.

    Args:
        unit_price: Цена за единицу (из каталога), >= 0
        quantity: Количество, целое в [1, max_order_quantity]
        schedule: Ставки комиссии

    Returns:
        OrderBreakdown с значениями, округлёнными до 2 знаков

    Raises:
        InvalidUnitPrice: Если unit_price невалиден (проверяется первым)
        InvalidQuantity: Если quantity вне [1, 999] или не целое
        CalculationError: Если результат непредставим

    Examples:
        >>> calculate_order_breakdown(10, 3).model_dump()
        {'subtotal': 30.0, 'platform_fee': 3.0, 'total': 33.0}
        >>> calculate_order_breakdown(19.99, 3).model_dump()
        {'subtotal': 59.97, 'platform_fee': 6.0, 'total': 65.97}
    """
    price = _coerce_money(unit_price, "unit_price", InvalidUnitPrice)
    units = _coerce_quantity(quantity, schedule)

    try:
        with money_context():
            subtotal_exact = to_decimal(price) * Decimal(units)
            platform_fee_exact = subtotal_exact * to_decimal(schedule.buyer_fee_rate)
            subtotal = round_currency(subtotal_exact)
            platform_fee = round_currency(platform_fee_exact)
            total = subtotal + platform_fee
    except ValueError as e:
        logger.error(
            "Order breakdown rounding failed: unit_price=%r quantity=%r: %s",
            unit_price,
            quantity,
            e,
        )
        raise CalculationError(f"Order breakdown calculation failed: {e}") from e

    values = {
        "subtotal": float(subtotal),
        "platform_fee": float(platform_fee),
        "total": float(total),
    }
    _ensure_finite("Order breakdown calculation", **values)

    return OrderBreakdown(**values)


# =============================================================================
# SERVER-SIDE FEE BREAKDOWN
# =============================================================================


def calculate_fees(
    base_amount: float,
    buyer_fee_percent: float | None = None,
    seller_fee_percent: float | None = None,
    schedule: FeeSchedule = DEFAULT_FEE_SCHEDULE,
) -> FeeBreakdown:
    """
    Полная разбивка комиссий для платежа (buyer fee и seller fee раздельно).

    Проценты по умолчанию берутся из schedule, поэтому без явных процентов
    результат совпадает с calculate_order_split бит в бит.

    Args:
        base_amount: Сумма заказа до комиссий (order.total_price до надбавки)
        buyer_fee_percent: Надбавка покупателя в процентах [0, 100] (optional)
        seller_fee_percent: Удержание продавца в процентах [0, 100] (optional)
        schedule: Базовое расписание ставок

    Returns:
        FeeBreakdown

    Raises:
        InvalidAmount: Если base_amount невалиден
        ValueError: Если проценты вне [0, 100]
        CalculationError: Если результат нефинитный
    """
    if buyer_fee_percent is not None or seller_fee_percent is not None:
        schedule = FeeSchedule.from_percent(
            buyer_fee_percent if buyer_fee_percent is not None else schedule.buyer_fee_percent,
            seller_fee_percent if seller_fee_percent is not None else schedule.seller_fee_percent,
            max_order_quantity=schedule.max_order_quantity,
        )

    base = _coerce_money(base_amount, "base_amount", InvalidAmount)
    parts = _split_components(base, schedule)

    return FeeBreakdown(
        base_amount=base,
        buyer_fee=parts.buyer_fee,
        seller_fee=parts.seller_fee,
        total_charge=parts.total_captured,
        app_total_revenue=parts.app_revenue,
        seller_payout=parts.seller_payout,
    )


def calculate_payment_amounts(
    base_amount: float,
    schedule: FeeSchedule = DEFAULT_FEE_SCHEDULE,
) -> PaymentAmounts:
    """
    Суммы в центах для платёжного процессора.

    amount_cents и application_fee_cents округляются независимо;
    seller_transfer_cents = amount_cents - application_fee_cents.

    Examples:
        >>> calculate_payment_amounts(100).model_dump()
        {'amount_cents': 11000, 'application_fee_cents': 2000, 'seller_transfer_cents': 9000}
    """
    split = calculate_order_split(base_amount, schedule)

    amount_cents = to_minor_units(split.total_captured)
    application_fee_cents = to_minor_units(split.app_revenue)

    return PaymentAmounts(
        amount_cents=amount_cents,
        application_fee_cents=application_fee_cents,
        seller_transfer_cents=amount_cents - application_fee_cents,
    )


def base_amount_from_total(
    total_price: float,
    schedule: FeeSchedule = DEFAULT_FEE_SCHEDULE,
) -> float:
    """
    Восстановление base из оплаченной суммы: total / (1 + buyer_fee_rate).

    Деление выполняется в Decimal (110 → 100 точно, без 99.99999999999999).

    Raises:
        InvalidAmount: Если total_price невалиден
    """
    total = _coerce_money(total_price, "total_price", InvalidAmount)

    divisor = Decimal(1) + to_decimal(schedule.buyer_fee_rate)
    base = float(to_decimal(total) / divisor)

    _ensure_finite("Base amount recovery", base_amount=base)
    return base
