"""
platefees — "Double 10" fee model for the HomeCookedPlate marketplace.

Buyer pays base + 10%, seller receives base - 10%, platform keeps 20%.
"""

from platefees.core.domain.fee_schedule import (
    BUYER_FEE_RATE,
    DEFAULT_FEE_SCHEDULE,
    MAX_ORDER_QUANTITY,
    SELLER_FEE_RATE,
    FeeSchedule,
)
from platefees.core.math.fees import (
    CalculationError,
    FeeError,
    InvalidAmount,
    InvalidQuantity,
    InvalidUnitPrice,
    calculate_order_breakdown,
    calculate_order_split,
)

__version__ = "1.0.0"

__all__ = [
    "BUYER_FEE_RATE",
    "SELLER_FEE_RATE",
    "MAX_ORDER_QUANTITY",
    "DEFAULT_FEE_SCHEDULE",
    "FeeSchedule",
    "FeeError",
    "InvalidAmount",
    "InvalidUnitPrice",
    "InvalidQuantity",
    "CalculationError",
    "calculate_order_split",
    "calculate_order_breakdown",
]
