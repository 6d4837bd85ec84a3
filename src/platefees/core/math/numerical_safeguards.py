"""
Numerical Safeguards — Safe Money Primitives

Модуль обеспечивает численную устойчивость денежных вычислений:
- NaN/Inf проверки для предотвращения распространения невалидных значений
- Epsilon-сравнения float с учётом машинной точности
- Десятичное округление до центов (ROUND_HALF_UP) без дрейфа float
- Валидация входных параметров с доменными исключениями

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. NaN/Inf никогда не пропагируют и не заменяются молча (только исключение)
2. Округление до центов выполняется только в Decimal
3. Float сравнения всегда учитывают машинную точность
4. Все операции детерминированы и воспроизводимы
"""

import math
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation, localcontext
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Epsilon для сравнения float (относительная толерантность)
# Используется в is_close для проверки split completeness
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Epsilon для сравнения float (абсолютная толерантность)
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-12

# Шаг денежного квантования (центы)
CENT: Final[Decimal] = Decimal("0.01")

# Количество минорных единиц в основной (центов в долларе)
MINOR_UNITS_PER_MAJOR: Final[int] = 100

# Точность Decimal-контекста денежных операций: весь диапазон float
# (до ~1.8e308) плюс центы без InvalidOperation при quantize
DECIMAL_PRECISION: Final[int] = 400


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_number(value: object) -> bool:
    """
    Проверка, является ли значение допустимым числовым типом.

    bool исключается явно: True/False не являются денежными суммами.

    Args:
        value: Проверяемое значение (любого типа)

    Returns:
        True для int, float, Decimal (кроме bool)
    """
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, float, Decimal))


def is_valid_float(value: float | int | Decimal) -> bool:
    """
    Проверка, является ли число валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение конечное, False если NaN или Inf
    """
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, int):
        return True
    return math.isfinite(value)


def is_finite_number(value: object) -> bool:
    """Числовой тип и конечное значение."""
    return is_number(value) and is_valid_float(value)  # type: ignore[arg-type]


# =============================================================================
# EPSILON-СРАВНЕНИЯ FLOAT
# =============================================================================


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Сравнение float с учётом машинной точности.

    Алгоритм:
        abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)

    Examples:
        >>> is_close(110.0, 90.0 + 20.0)
        True
        >>> is_close(1.0, 1.1)
        False
    """
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


# =============================================================================
# DECIMAL КОНВЕРСИЯ И ОКРУГЛЕНИЕ
# =============================================================================


def to_decimal(value: float | int | Decimal) -> Decimal:
    """
    Конверсия числа в Decimal через кратчайшее десятичное представление.

    Для float используется repr (19.99 → Decimal("19.99")), а не двоичное
    разложение (Decimal(19.99) → 19.989999999999998436805981327779591083526611328125).

    Args:
        value: Конечное число

    Returns:
        Decimal с тем же десятичным значением

    Raises:
        ValueError: Если значение NaN/Inf или не является числом
    """
    if not is_finite_number(value):
        raise ValueError(f"Cannot convert {value!r} to a finite Decimal")

    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    return Decimal(repr(value))


def money_context():
    """Локальный Decimal-контекст с точностью DECIMAL_PRECISION."""
    return localcontext(Context(prec=DECIMAL_PRECISION))


def round_currency(value: float | int | Decimal) -> Decimal:
    """
    Округление до центов (ROUND_HALF_UP).

    Examples:
        >>> round_currency(5.997)
        Decimal('6.00')
        >>> round_currency(0.005)
        Decimal('0.01')
        >>> round_currency(Decimal("2.345"))
        Decimal('2.35')
    """
    try:
        with money_context():
            return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise ValueError(f"Cannot round {value!r} to cents: {e}")


def to_minor_units(value: float | int | Decimal) -> int:
    """
    Конверсия суммы в минорные единицы (центы) для платёжного процессора.

    Examples:
        >>> to_minor_units(110.0)
        11000
        >>> to_minor_units(13.574)
        1357
        >>> to_minor_units(2.468)
        247
    """
    try:
        with money_context():
            cents = to_decimal(value) * MINOR_UNITS_PER_MAJOR
            return int(cents.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except InvalidOperation as e:
        raise ValueError(f"Cannot convert {value!r} to minor units: {e}")


# =============================================================================
# ВАЛИДАЦИЯ И ПРОВЕРКИ
# =============================================================================


def validate_non_negative(
    value: object,
    name: str,
    error_cls: type[Exception] = ValueError,
) -> None:
    """
    Валидация, что значение — конечное неотрицательное число.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)
        error_cls: Класс исключения (должен принимать сообщение первым аргументом)

    Raises:
        error_cls: Если value не число, NaN/Inf или < 0
    """
    if not is_number(value):
        raise error_cls(f"{name} must be a number, got {value!r}")

    if not is_valid_float(value):  # type: ignore[arg-type]
        raise error_cls(f"{name} must be a valid number (not NaN/Inf), got {value}")

    if value < 0:  # type: ignore[operator]
        raise error_cls(f"{name} must be non-negative, got {value}")


def validate_in_range(
    value: object,
    name: str,
    min_value: float | None = None,
    max_value: float | None = None,
    error_cls: type[Exception] = ValueError,
) -> None:
    """
    Валидация, что значение — конечное число в заданном диапазоне.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)
        min_value: Минимальное допустимое значение (optional)
        max_value: Максимальное допустимое значение (optional)
        error_cls: Класс исключения

    Raises:
        error_cls: Если value вне диапазона, не число или NaN/Inf
    """
    if not is_number(value):
        raise error_cls(f"{name} must be a number, got {value!r}")

    if not is_valid_float(value):  # type: ignore[arg-type]
        raise error_cls(f"{name} must be a valid number (not NaN/Inf), got {value}")

    if min_value is not None and value < min_value:  # type: ignore[operator]
        raise error_cls(f"{name} must be >= {min_value}, got {value}")

    if max_value is not None and value > max_value:  # type: ignore[operator]
        raise error_cls(f"{name} must be <= {max_value}, got {value}")


def is_integral(value: float | int | Decimal) -> bool:
    """Проверка, что конечное число целое (3.0 → True, 2.5 → False)."""
    if isinstance(value, int):
        return True
    if isinstance(value, Decimal):
        return value == value.to_integral_value()
    return float(value).is_integer()
