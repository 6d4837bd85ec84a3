"""
JSON Schema Contract Validators

Модуль для валидации результатов расчёта комиссий согласно формальным
JSON Schema контрактам. Использует библиотеку jsonschema.

Схемы (contracts/schema/):
- order_split.json
- order_breakdown.json
- fee_vectors.json (таблица кросс-рантайм векторов)
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются внутри пакета (package data) рядом с этим модулем.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'order_split')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        return self.validator.iter_errors(data)


class OrderSplitValidator(ContractValidator):
    """Валидатор для order_split контракта."""

    def __init__(self):
        super().__init__("order_split")


class OrderBreakdownValidator(ContractValidator):
    """Валидатор для order_breakdown контракта."""

    def __init__(self):
        super().__init__("order_breakdown")


class FeeVectorsValidator(ContractValidator):
    """Валидатор для таблицы кросс-рантайм векторов."""

    def __init__(self):
        super().__init__("fee_vectors")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_order_split(data: Dict[str, Any]) -> None:
    """
    Валидация order_split данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    OrderSplitValidator().validate(data)


def validate_order_breakdown(data: Dict[str, Any]) -> None:
    """
    Валидация order_breakdown данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    OrderBreakdownValidator().validate(data)

