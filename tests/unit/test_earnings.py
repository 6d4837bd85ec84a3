"""Тесты для EarningsAggregator

Покрытие:
- Окна: всё время / сегодня / неделя (с понедельника)
- take_home по модели Double 10
- Пропуск заказов с невалидной суммой
- Пустой вход
"""

import logging
from datetime import datetime, timezone

import pytest

from platefees.core.domain.fee_schedule import FeeSchedule
from platefees.core.domain.results import EarningsSummary, OrderRecord
from platefees.payouts import EarningsAggregator, start_of_day, start_of_week


# Среда, 14 октября 2026, 15:00 UTC
NOW = datetime(2026, 10, 14, 15, 0, tzinfo=timezone.utc)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def aggregator():
    return EarningsAggregator()


@pytest.fixture
def orders():
    """Заказ сегодня, заказ в понедельник этой недели, заказ в прошлом месяце."""
    return [
        OrderRecord(
            order_id="order-today",
            total_price=110.0,
            created_at=datetime(2026, 10, 14, 9, 0, tzinfo=timezone.utc),
        ),
        OrderRecord(
            order_id="order-monday",
            total_price=33.0,
            created_at=datetime(2026, 10, 12, 8, 0, tzinfo=timezone.utc),
        ),
        OrderRecord(
            order_id="order-old",
            total_price=22.0,
            created_at=datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc),
        ),
    ]


# =============================================================================
# ТЕСТЫ: Границы окон
# =============================================================================


class TestWindows:
    """start_of_day / start_of_week."""

    def test_start_of_day(self):
        assert start_of_day(NOW) == datetime(2026, 10, 14, tzinfo=timezone.utc)

    def test_start_of_week_midweek(self):
        assert start_of_week(NOW) == datetime(2026, 10, 12, tzinfo=timezone.utc)

    def test_start_of_week_on_monday(self):
        monday = datetime(2026, 10, 12, 10, 30)
        assert start_of_week(monday) == datetime(2026, 10, 12)

    def test_start_of_week_on_sunday(self):
        """Воскресенье → понедельник 6 дней назад."""
        sunday = datetime(2026, 10, 18, 23, 59)
        assert start_of_week(sunday) == datetime(2026, 10, 12)


# =============================================================================
# ТЕСТЫ: Агрегация
# =============================================================================


class TestSummarize:
    """Сводка выручки продавца."""

    def test_take_home_single_order(self, aggregator):
        assert aggregator.take_home(110.0) == 90.0

    def test_totals(self, aggregator, orders):
        summary = aggregator.summarize(orders, now=NOW)

        assert isinstance(summary, EarningsSummary)
        assert summary.total_revenue == 165.0
        assert summary.take_home == 135.0
        assert summary.order_count == 3
        assert summary.skipped_order_count == 0

    def test_today_window(self, aggregator, orders):
        summary = aggregator.summarize(orders, now=NOW)

        assert summary.today_revenue == 110.0
        assert summary.today_take_home == 90.0
        assert summary.today_order_count == 1

    def test_week_window(self, aggregator, orders):
        summary = aggregator.summarize(orders, now=NOW)

        assert summary.week_revenue == 143.0
        assert summary.week_take_home == 117.0
        assert summary.week_order_count == 2

    def test_empty(self, aggregator):
        summary = aggregator.summarize([], now=NOW)
        assert summary == EarningsSummary()

    def test_accepts_generator(self, aggregator, orders):
        summary = aggregator.summarize((order for order in orders), now=NOW)
        assert summary.order_count == 3

    def test_custom_schedule(self, orders):
        """Продавец с промо-ставкой 5%: 110 → base 100 → take-home 95."""
        aggregator = EarningsAggregator(FeeSchedule(seller_fee_rate=0.05))
        summary = aggregator.summarize(orders[:1], now=NOW)

        assert summary.take_home == 95.0


class TestInvalidOrders:
    """Заказы с невалидной суммой пропускаются."""

    def test_skipped(self, aggregator, orders, caplog):
        bad = [
            OrderRecord(order_id="order-nan", total_price=float("nan"), created_at=NOW),
            OrderRecord(order_id="order-negative", total_price=-5.0, created_at=NOW),
        ]

        with caplog.at_level(logging.WARNING, logger="platefees.payouts.earnings"):
            summary = aggregator.summarize(orders + bad, now=NOW)

        assert summary.skipped_order_count == 2
        assert summary.order_count == 3
        assert summary.total_revenue == 165.0
        assert summary.today_order_count == 1
        assert "order-nan" in caplog.text
        assert "order-negative" in caplog.text


class TestLargeAmounts:
    """Крупные конечные суммы не считаются невалидными."""

    def test_large_order_total(self, aggregator):
        """Крупная конечная сумма агрегируется без потери центов."""
        order = OrderRecord(order_id="order-large", total_price=1.1e30, created_at=NOW)

        summary = aggregator.summarize([order], now=NOW)

        assert summary.total_revenue == 1.1e30
        assert summary.take_home == pytest.approx(9e29)
        assert summary.today_order_count == 1
        assert summary.skipped_order_count == 0
