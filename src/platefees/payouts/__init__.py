"""Payouts — потребители калькулятора комиссий на стороне продавца.

- Refund: возврат доли продавца (комиссии платформы не возвращаются)
- Earnings: сводка выручки и take-home для дашборда
"""

from .earnings import EarningsAggregator, start_of_day, start_of_week
from .refund import RefundCalculator

__all__ = [
    "RefundCalculator",
    "EarningsAggregator",
    "start_of_day",
    "start_of_week",
]
