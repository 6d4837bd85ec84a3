"""
Тесты для модуля Numerical Safeguards

Проверяет:
1. NaN/Inf проверки и допустимые числовые типы
2. Epsilon-сравнения float
3. Decimal конверсию и округление до центов
4. Конверсию в минорные единицы
5. Валидацию параметров с доменными исключениями
"""

import math
import sys
from decimal import Decimal, getcontext

import pytest

from platefees.core.math.numerical_safeguards import (
    CENT,
    DECIMAL_PRECISION,
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    MINOR_UNITS_PER_MAJOR,
    is_close,
    is_finite_number,
    is_integral,
    is_number,
    is_valid_float,
    money_context,
    round_currency,
    to_decimal,
    to_minor_units,
    validate_in_range,
    validate_non_negative,
)


# =============================================================================
# ТЕСТЫ NaN/Inf ПРОВЕРОК
# =============================================================================


class TestNumberChecks:
    """Тесты для is_number / is_valid_float / is_finite_number"""

    def test_numeric_types_accepted(self) -> None:
        """int, float, Decimal — числа"""
        assert is_number(1)
        assert is_number(1.5)
        assert is_number(Decimal("1.5"))

    def test_bool_rejected(self) -> None:
        """bool не является денежной суммой"""
        assert not is_number(True)
        assert not is_number(False)

    def test_non_numeric_rejected(self) -> None:
        """Строки, None и коллекции — не числа"""
        assert not is_number("10")
        assert not is_number(None)
        assert not is_number([10])

    def test_valid_float(self) -> None:
        assert is_valid_float(0.0)
        assert is_valid_float(-1e300)
        assert is_valid_float(10**400)
        assert is_valid_float(Decimal("19.99"))

    def test_invalid_float(self) -> None:
        assert not is_valid_float(float("nan"))
        assert not is_valid_float(float("inf"))
        assert not is_valid_float(float("-inf"))
        assert not is_valid_float(Decimal("NaN"))
        assert not is_valid_float(Decimal("Infinity"))

    def test_is_finite_number(self) -> None:
        assert is_finite_number(3)
        assert not is_finite_number(math.nan)
        assert not is_finite_number("3")

    def test_is_integral(self) -> None:
        assert is_integral(3)
        assert is_integral(3.0)
        assert is_integral(Decimal("4.00"))
        assert not is_integral(2.5)
        assert not is_integral(Decimal("2.5"))


# =============================================================================
# ТЕСТЫ EPSILON-СРАВНЕНИЙ
# =============================================================================


class TestIsClose:
    """Тесты для is_close"""

    def test_default_tolerances(self) -> None:
        assert EPS_FLOAT_COMPARE_REL == 1e-9
        assert EPS_FLOAT_COMPARE_ABS == 1e-12

    def test_float_noise_is_close(self) -> None:
        """Погрешность float арифметики в пределах толерантности"""
        assert is_close(0.1 + 0.2, 0.3)
        assert is_close(110.0, 90.0 + 20.0)

    def test_different_values_not_close(self) -> None:
        assert not is_close(1.0, 1.1)
        assert not is_close(110.0, 110.01)


# =============================================================================
# ТЕСТЫ DECIMAL КОНВЕРСИИ И ОКРУГЛЕНИЯ
# =============================================================================


class TestToDecimal:
    """Тесты для to_decimal"""

    def test_float_uses_shortest_repr(self) -> None:
        """19.99 → Decimal('19.99'), а не двоичное разложение"""
        assert to_decimal(19.99) == Decimal("19.99")
        assert to_decimal(0.1) == Decimal("0.1")

    def test_int_and_decimal(self) -> None:
        assert to_decimal(3) == Decimal(3)
        value = Decimal("12.345")
        assert to_decimal(value) is value

    def test_non_finite_rejected(self) -> None:
        with pytest.raises(ValueError):
            to_decimal(float("nan"))
        with pytest.raises(ValueError):
            to_decimal(float("inf"))

    def test_non_number_rejected(self) -> None:
        with pytest.raises(ValueError):
            to_decimal("19.99")  # type: ignore[arg-type]


class TestRoundCurrency:
    """Тесты для round_currency (ROUND_HALF_UP до центов)"""

    def test_cent_step(self) -> None:
        assert CENT == Decimal("0.01")

    def test_rounds_half_up(self) -> None:
        assert round_currency(5.997) == Decimal("6.00")
        assert round_currency(0.005) == Decimal("0.01")
        assert round_currency(Decimal("2.345")) == Decimal("2.35")

    def test_no_binary_drift(self) -> None:
        """2.675 округляется до 2.68 (встроенный round даёт 2.67)"""
        assert round_currency(2.675) == Decimal("2.68")

    def test_already_rounded_unchanged(self) -> None:
        assert round_currency(59.97) == Decimal("59.97")
        assert round_currency(0) == Decimal("0.00")

    def test_non_finite_rejected(self) -> None:
        with pytest.raises(ValueError):
            round_currency(float("nan"))

    def test_full_float_range(self) -> None:
        """Любое конечное float квантуется до центов"""
        assert round_currency(1e26) == Decimal("1e26")
        assert round_currency(1e300) == Decimal("1e300")
        assert round_currency(sys.float_info.max) == Decimal(repr(sys.float_info.max))

    def test_unrepresentable_precision_rejected(self) -> None:
        """Квантование за пределами DECIMAL_PRECISION → ValueError"""
        with pytest.raises(ValueError):
            round_currency(Decimal("1e500"))

    def test_context_restored(self) -> None:
        """money_context не меняет глобальный Decimal-контекст"""
        precision = getcontext().prec

        with money_context():
            assert getcontext().prec == DECIMAL_PRECISION

        assert getcontext().prec == precision


class TestToMinorUnits:
    """Тесты для to_minor_units"""

    def test_minor_units_per_major(self) -> None:
        assert MINOR_UNITS_PER_MAJOR == 100

    def test_whole_amounts(self) -> None:
        assert to_minor_units(110.0) == 11000
        assert to_minor_units(0) == 0

    def test_fractional_cents_round_half_up(self) -> None:
        assert to_minor_units(13.574) == 1357
        assert to_minor_units(2.468) == 247
        assert to_minor_units(0.285) == 29

    def test_float_noise_absorbed(self) -> None:
        """110.00000000000001 → 11000"""
        assert to_minor_units(100 + 100 * 0.1 + 1e-14) == 11000

    def test_large_amount(self) -> None:
        assert to_minor_units(1e30) == 10**32
        assert to_minor_units(Decimal("1.1e30")) == 11 * 10**31

    def test_unrepresentable_rejected(self) -> None:
        with pytest.raises(ValueError):
            to_minor_units(Decimal("1e500"))


# =============================================================================
# ТЕСТЫ ВАЛИДАЦИИ
# =============================================================================


class _CustomError(ValueError):
    pass


class TestValidation:
    """Тесты для validate_non_negative / validate_in_range"""

    def test_non_negative_passes(self) -> None:
        validate_non_negative(0.0, "amount")
        validate_non_negative(10, "amount")
        validate_non_negative(Decimal("1.5"), "amount")

    def test_non_negative_rejects_negative(self) -> None:
        with pytest.raises(ValueError, match="amount must be non-negative"):
            validate_non_negative(-0.01, "amount")

    def test_non_negative_rejects_nan(self) -> None:
        with pytest.raises(ValueError, match="not NaN/Inf"):
            validate_non_negative(float("nan"), "amount")

    def test_non_negative_rejects_non_number(self) -> None:
        with pytest.raises(ValueError, match="must be a number"):
            validate_non_negative("5", "amount")

    def test_custom_error_class(self) -> None:
        with pytest.raises(_CustomError):
            validate_non_negative(-1, "amount", error_cls=_CustomError)

    def test_in_range_passes(self) -> None:
        validate_in_range(0.5, "rate", 0.0, 1.0)
        validate_in_range(0.0, "rate", 0.0, 1.0)
        validate_in_range(1.0, "rate", 0.0, 1.0)

    def test_in_range_rejects_bounds(self) -> None:
        with pytest.raises(ValueError, match="rate must be >= 0.0"):
            validate_in_range(-0.1, "rate", 0.0, 1.0)
        with pytest.raises(ValueError, match="rate must be <= 1.0"):
            validate_in_range(1.1, "rate", 0.0, 1.0)

    def test_in_range_rejects_inf(self) -> None:
        with pytest.raises(ValueError):
            validate_in_range(float("inf"), "rate", min_value=0.0)
