"""Refund — расчёт возврата по инициативе продавца

Политика возврата:
- Покупателю возвращается доля продавца (seller_payout от base)
- Комиссии платформы (buyer fee + seller fee) не возвращаются
- base восстанавливается из оплаченной суммы: total_price / (1 + buyer_fee_rate)

Пример (Double 10): оплачено 110 → base 100 → возврат 90, платформа оставляет 20.

Ошибки расчёта пробрасываются вызывающему коду: запасной формулы нет,
платёжный возврат не должен строиться на непроверенной сумме.
"""

import logging

from platefees.core.domain.fee_schedule import DEFAULT_FEE_SCHEDULE, FeeSchedule
from platefees.core.domain.results import RefundQuote
from platefees.core.math.fees import (
    InvalidAmount,
    base_amount_from_total,
    calculate_order_split,
)
from platefees.core.math.numerical_safeguards import (
    is_finite_number,
    round_currency,
    to_minor_units,
)

logger = logging.getLogger(__name__)


class RefundCalculator:
    """Калькулятор частичного возврата (доля продавца)."""

    def __init__(self, schedule: FeeSchedule | None = None):
        """Инициализация калькулятора.

        Args:
            schedule: ставки комиссии (опционально, используется DEFAULT_FEE_SCHEDULE)
        """
        self.schedule = schedule or DEFAULT_FEE_SCHEDULE

    def quote(self, order_total_price: float) -> RefundQuote:
        """Расчёт возврата для оплаченного заказа.

        Args:
            order_total_price: оплаченная сумма заказа (включая buyer fee), > 0

        Returns:
            RefundQuote с суммой возврата и удержанной комиссией

        Raises:
            InvalidAmount: если order_total_price не конечное положительное число
            CalculationError: если расчёт дал нефинитный результат
        """
        if not is_finite_number(order_total_price) or order_total_price <= 0:
            logger.warning("Refund rejected: invalid order total price %r", order_total_price)
            raise InvalidAmount(
                f"Invalid order total price: {order_total_price}. "
                f"Must be a finite, positive number.",
                field="order_total_price",
                value=order_total_price,
            )

        base_amount = base_amount_from_total(order_total_price, self.schedule)
        split = calculate_order_split(base_amount, self.schedule)

        refund = round_currency(split.seller_payout)
        platform_fee_kept = round_currency(order_total_price) - refund

        logger.info(
            "Refund quote: total=%.2f base=%.2f refund=%s kept=%s",
            order_total_price,
            base_amount,
            refund,
            platform_fee_kept,
        )

        return RefundQuote(
            order_total_price=float(order_total_price),
            base_amount=base_amount,
            refund_amount=float(refund),
            refund_amount_cents=to_minor_units(refund),
            platform_fee_kept=float(platform_fee_kept),
        )
