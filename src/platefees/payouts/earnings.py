"""Earnings — сводка выручки продавца для дашборда

Для каждого завершённого заказа:
- revenue = total_price (оплачено покупателем, включая buyer fee)
- take_home = seller_payout от base, восстановленного из total_price

Окна агрегации (относительно now):
- всё время
- сегодня: с 00:00 текущего дня
- неделя: с понедельника 00:00 текущей недели (воскресенье → 6 дней назад)

Заказы с нефинитной или отрицательной суммой пропускаются с предупреждением
и считаются в skipped_order_count.
"""

import logging
import math
from collections.abc import Iterable
from datetime import datetime, timedelta
from decimal import Decimal

from platefees.core.domain.fee_schedule import DEFAULT_FEE_SCHEDULE, FeeSchedule
from platefees.core.domain.results import EarningsSummary, OrderRecord
from platefees.core.math.fees import base_amount_from_total, calculate_order_split
from platefees.core.math.numerical_safeguards import (
    money_context,
    round_currency,
    to_decimal,
)

logger = logging.getLogger(__name__)


def start_of_day(now: datetime) -> datetime:
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(now: datetime) -> datetime:
    """Понедельник 00:00 недели, содержащей now (weekday(): пн=0 ... вс=6)."""
    return start_of_day(now) - timedelta(days=now.weekday())


class EarningsAggregator:
    """Агрегатор выручки и take-home продавца по модели Double 10."""

    def __init__(self, schedule: FeeSchedule | None = None):
        self.schedule = schedule or DEFAULT_FEE_SCHEDULE

    def take_home(self, total_price: float) -> float:
        """Выплата продавцу для одного заказа по оплаченной сумме."""
        base_amount = base_amount_from_total(total_price, self.schedule)
        return calculate_order_split(base_amount, self.schedule).seller_payout

    def summarize(self, orders: Iterable[OrderRecord], now: datetime) -> EarningsSummary:
        """Сводка выручки за всё время, сегодня и текущую неделю.

        Args:
            orders: завершённые заказы продавца
            now: момент отсчёта окон (та же timezone-семантика, что у created_at)

        Returns:
            EarningsSummary с суммами, округлёнными до центов
        """
        today_start = start_of_day(now)
        week_start = start_of_week(now)

        # Аккумуляторы в Decimal: сумма не дрейфует при большом числе заказов
        totals = {
            "total_revenue": Decimal(0),
            "take_home": Decimal(0),
            "today_revenue": Decimal(0),
            "today_take_home": Decimal(0),
            "week_revenue": Decimal(0),
            "week_take_home": Decimal(0),
        }
        order_count = 0
        today_count = 0
        week_count = 0
        skipped = 0

        with money_context():
            for order in orders:
                if not math.isfinite(order.total_price) or order.total_price < 0:
                    logger.warning(
                        "Skipping order %s with invalid total price %r",
                        order.order_id,
                        order.total_price,
                    )
                    skipped += 1
                    continue

                revenue = to_decimal(order.total_price)
                take_home = to_decimal(self.take_home(order.total_price))

                totals["total_revenue"] += revenue
                totals["take_home"] += take_home
                order_count += 1

                if order.created_at >= today_start:
                    totals["today_revenue"] += revenue
                    totals["today_take_home"] += take_home
                    today_count += 1

                if order.created_at >= week_start:
                    totals["week_revenue"] += revenue
                    totals["week_take_home"] += take_home
                    week_count += 1

        logger.debug(
            "Earnings summary: %d orders, %d skipped, take_home=%s",
            order_count,
            skipped,
            totals["take_home"],
        )

        return EarningsSummary(
            **{name: float(round_currency(value)) for name, value in totals.items()},
            order_count=order_count,
            today_order_count=today_count,
            week_order_count=week_count,
            skipped_order_count=skipped,
        )
