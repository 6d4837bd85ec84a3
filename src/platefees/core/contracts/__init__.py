"""
Contract Validation Module

JSON Schema контракты результатов и кросс-рантайм таблица векторов.
"""

from .validators import (
    ContractValidator,
    FeeVectorsValidator,
    OrderBreakdownValidator,
    OrderSplitValidator,
    SchemaLoader,
    validate_order_breakdown,
    validate_order_split,
)
from .vectors import FEE_VECTORS_PATH, check_fee_vectors, load_fee_vectors

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "OrderSplitValidator",
    "OrderBreakdownValidator",
    "FeeVectorsValidator",
    # Functions
    "validate_order_split",
    "validate_order_breakdown",
    "load_fee_vectors",
    "check_fee_vectors",
    "FEE_VECTORS_PATH",
]
