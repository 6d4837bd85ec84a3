"""
Core math modules для platefees

Денежные примитивы с гарантией стабильности.
Калькулятор комиссий: platefees.core.math.fees (зависит от core.domain).
"""

# Numerical Safeguards
from platefees.core.math.numerical_safeguards import (
    # Epsilon constants
    CENT,
    DECIMAL_PRECISION,
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    MINOR_UNITS_PER_MAJOR,
    # NaN/Inf checks
    is_finite_number,
    is_integral,
    is_number,
    is_valid_float,
    # Epsilon comparisons
    is_close,
    # Decimal rounding
    money_context,
    round_currency,
    to_decimal,
    to_minor_units,
    # Validation
    validate_in_range,
    validate_non_negative,
)

__all__ = [
    # Numerical Safeguards — Constants
    "CENT",
    "DECIMAL_PRECISION",
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    "MINOR_UNITS_PER_MAJOR",
    # Numerical Safeguards — NaN/Inf checks
    "is_finite_number",
    "is_integral",
    "is_number",
    "is_valid_float",
    # Numerical Safeguards — Epsilon comparisons
    "is_close",
    # Numerical Safeguards — Decimal rounding
    "money_context",
    "round_currency",
    "to_decimal",
    "to_minor_units",
    # Numerical Safeguards — Validation
    "validate_in_range",
    "validate_non_negative",
]
