"""
Fee Vectors — кросс-рантайм таблица входов/выходов

fee_vectors.json — фиксированный набор векторов, который обязана проходить
любая реализация модели Double 10 (в том числе серверные функции в других
рантаймах, которые не могут импортировать этот пакет).

check_fee_vectors() прогоняет эту реализацию по таблице и возвращает список
расхождений; пустой список означает согласованность.
"""

import json
import math
from pathlib import Path
from typing import Any, Dict

from platefees.core.contracts.validators import FeeVectorsValidator
from platefees.core.domain.fee_schedule import DEFAULT_FEE_SCHEDULE, FeeSchedule
from platefees.core.math.fees import (
    FeeError,
    InvalidAmount,
    InvalidQuantity,
    InvalidUnitPrice,
    calculate_order_breakdown,
    calculate_order_split,
)

FEE_VECTORS_PATH = Path(__file__).parent / "data" / "fee_vectors.json"

_ERROR_TYPES: Dict[str, type[FeeError]] = {
    "InvalidAmount": InvalidAmount,
    "InvalidUnitPrice": InvalidUnitPrice,
    "InvalidQuantity": InvalidQuantity,
}

_OPERATIONS = {
    "order_split": calculate_order_split,
    "order_breakdown": calculate_order_breakdown,
}


def load_fee_vectors(path: Path | None = None) -> Dict[str, Any]:
    """
    Загрузка и валидация таблицы векторов.

    Args:
        path: Путь к JSON (default: встроенный fee_vectors.json)

    Returns:
        Таблица векторов как dict

    Raises:
        jsonschema.ValidationError: Если таблица не соответствует fee_vectors схеме
    """
    with open(path or FEE_VECTORS_PATH, "r", encoding="utf-8") as f:
        vectors = json.load(f)

    FeeVectorsValidator().validate(vectors)
    return vectors


def check_fee_vectors(
    vectors: Dict[str, Any] | None = None,
    schedule: FeeSchedule = DEFAULT_FEE_SCHEDULE,
) -> list[str]:
    """
    Прогон реализации по таблице векторов.

    Args:
        vectors: Таблица (default: load_fee_vectors())
        schedule: Ставки, которые должны совпадать со ставками таблицы

    Returns:
        Список описаний расхождений (пустой — всё согласовано). Исключение
        при прогоне вектора записывается как расхождение этого вектора.
    """
    if vectors is None:
        vectors = load_fee_vectors()

    mismatches: list[str] = []
    tolerance = vectors["tolerance"]

    rates = vectors["rates"]
    if (
        rates["buyer_fee_rate"] != schedule.buyer_fee_rate
        or rates["seller_fee_rate"] != schedule.seller_fee_rate
        or rates["max_order_quantity"] != schedule.max_order_quantity
    ):
        mismatches.append(f"rates: table {rates} != schedule {schedule}")

    for case in vectors["order_split"]:
        label = f"order_split({case['base_amount']})"
        try:
            actual = calculate_order_split(case["base_amount"], schedule).model_dump()
        except Exception as e:
            mismatches.append(f"{label}: expected a result, got {type(e).__name__}: {e}")
            continue
        for name, expected in case["expected"].items():
            if not math.isclose(actual[name], expected, rel_tol=tolerance, abs_tol=tolerance):
                mismatches.append(f"{label}.{name}: expected {expected}, got {actual[name]}")

    for case in vectors["order_breakdown"]:
        label = f"order_breakdown({case['unit_price']}, {case['quantity']})"
        try:
            actual = calculate_order_breakdown(
                case["unit_price"], case["quantity"], schedule
            ).model_dump()
        except Exception as e:
            mismatches.append(f"{label}: expected a result, got {type(e).__name__}: {e}")
            continue
        for name, expected in case["expected"].items():
            # Значения округлены до центов: сравнение точное
            if actual[name] != expected:
                mismatches.append(f"{label}.{name}: expected {expected}, got {actual[name]}")

    for case in vectors["errors"]:
        operation = _OPERATIONS[case["operation"]]
        expected_error = _ERROR_TYPES[case["error"]]
        label = f"{case['operation']}{tuple(case['args'])}"
        try:
            operation(*case["args"], schedule=schedule)
        except expected_error:
            continue
        except Exception as e:
            mismatches.append(f"{label}: expected {case['error']}, got {type(e).__name__}")
            continue
        mismatches.append(f"{label}: expected {case['error']}, got a result")

    return mismatches
