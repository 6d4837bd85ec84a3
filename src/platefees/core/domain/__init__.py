"""
Domain models and value objects.

Contains the fee schedule (single source of rates) and immutable result models.
"""

from platefees.core.domain.fee_schedule import (
    BUYER_FEE_RATE,
    DEFAULT_FEE_SCHEDULE,
    MAX_ORDER_QUANTITY,
    MIN_ORDER_QUANTITY,
    SELLER_FEE_RATE,
    FeeSchedule,
)
from platefees.core.domain.results import (
    EarningsSummary,
    FeeBreakdown,
    OrderBreakdown,
    OrderRecord,
    OrderSplit,
    PaymentAmounts,
    RefundQuote,
)

__all__ = [
    # Fee schedule
    "BUYER_FEE_RATE",
    "SELLER_FEE_RATE",
    "MIN_ORDER_QUANTITY",
    "MAX_ORDER_QUANTITY",
    "DEFAULT_FEE_SCHEDULE",
    "FeeSchedule",
    # Results
    "OrderSplit",
    "OrderBreakdown",
    "FeeBreakdown",
    "PaymentAmounts",
    "RefundQuote",
    "OrderRecord",
    "EarningsSummary",
]
