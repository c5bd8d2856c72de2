"""
JSON Schema Contract Validators

Модуль для валидации wire данных (JSON-совместимых dict) согласно формальным
JSON Schema контрактам. Использует библиотеку jsonschema (Draft 2020-12) и
referencing для разрешения $ref между файлами схем.

Схемы (schema/*.json):
- asset, market_snapshot, market_quote, market_bar
- order_action (общая пара side/effect, подключается через $ref)
- order, partial_order, order_state, fill
- long_position, short_position, position

Отличия от стандартного Draft 2020-12:
- "number" не принимает NaN, ±Infinity и целые вне диапазона float
- format "epoch-millis" проверяется только перед decode (RUNTIME_FORMATS):
  wire контракт диапазон timestamp не ограничивает
"""

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, Iterator, List, Sequence

import jsonschema
from jsonschema import Draft202012Validator, FormatChecker, ValidationError
from jsonschema.validators import extend
from referencing import Registry, Resource

from tradewire.core.domain.timestamps import MAX_EPOCH_MS, MIN_EPOCH_MS, is_representable_ms

from .errors import FieldViolation, PathElement, StructuralValidationError, format_path

logger = logging.getLogger(__name__)


# =============================================================================
# TYPE CHECKER
# =============================================================================


def _is_finite_number(checker, instance: Any) -> bool:
    """JSON number без NaN/Infinity (JSON не имеет литералов для них)."""
    if not Draft202012Validator.TYPE_CHECKER.is_type(instance, "number"):
        return False
    try:
        return math.isfinite(float(instance))
    except OverflowError:
        # int вроде 10**400 не представим как float
        return False


WireValidator = extend(
    Draft202012Validator,
    type_checker=Draft202012Validator.TYPE_CHECKER.redefine("number", _is_finite_number),
)


TIMESTAMP_FORMAT = "epoch-millis"

RUNTIME_FORMATS = FormatChecker(formats=())


@RUNTIME_FORMATS.checks(TIMESTAMP_FORMAT)
def _is_decodable_timestamp(instance: Any) -> bool:
    if not WireValidator.TYPE_CHECKER.is_type(instance, "integer"):
        return True
    return is_representable_ms(instance)


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы лежат в schema/ рядом с этим модулем (ставятся как package data).
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}
        self._registry: Registry | None = None

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def schema_names(self) -> List[str]:
        """Имена всех доступных схем (без расширения)."""
        return sorted(p.stem for p in self._schema_dir.glob("*.json"))

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'order')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
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
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema

    def registry(self) -> Registry:
        """
        Registry всех схем по их $id (для разрешения $ref между файлами).
        """
        if self._registry is None:
            resources = []
            for name in self.schema_names():
                schema = self.load_schema(name)
                resources.append((schema["$id"], Resource.from_contents(schema)))
            self._registry = Registry().with_resources(resources)
        return self._registry


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# VIOLATION MAPPING
# =============================================================================


def _resolve(data: Any, path: Sequence[PathElement]) -> Any:
    """Значение в документе по пути (путь взят из ошибки, поэтому существует)."""
    for element in path:
        data = data[element]
    return data


def _missing_property(error: ValidationError) -> str | None:
    """Имя отсутствующего поля для ошибки 'required'."""
    for name in error.validator_value:
        if error.message == f"{name!r} is a required property":
            return name
    return None


def _to_violation(error: ValidationError, data: Any) -> FieldViolation:
    path: tuple = tuple(error.absolute_path)
    constraint = str(error.validator)
    value = error.instance
    message = error.message

    if error.validator == "required":
        missing = _missing_property(error)
        if missing is not None:
            path = path + (missing,)
        value = None
        message = "required field is missing"
    elif "then" in error.absolute_schema_path:
        # Ветка then в order_action: effect вне подмножества для данной side
        constraint = "effect_for_side"
        side = _resolve(data, path[:-1]).get("side")
        message = (
            f"{error.instance!r} is not a legal effect for side {side!r} "
            f"(expected one of {error.validator_value})"
        )
    elif error.validator == "format" and error.validator_value == TIMESTAMP_FORMAT:
        constraint = "timestamp_range"
        message = (
            f"{error.instance!r} ms is outside the representable datetime range "
            f"[{MIN_EPOCH_MS}, {MAX_EPOCH_MS}]"
        )

    return FieldViolation(
        path=path,
        field=format_path(path),
        constraint=constraint,
        value=value,
        message=message,
    )


def _sort_key(violation: FieldViolation) -> tuple:
    # Индексы массивов сравниваются как числа: lots[2] < lots[10]
    path = tuple((isinstance(p, int), p) for p in violation.path)
    return path, violation.constraint


def _drop_shadowed_pairing(found: List[FieldViolation]) -> List[FieldViolation]:
    """effect_for_side не дублирует базовую ошибку (enum/type) того же поля."""
    failed = {v.path for v in found if v.constraint != "effect_for_side"}
    return [v for v in found if v.constraint != "effect_for_side" or v.path not in failed]


# =============================================================================
# SCHEMA PROJECTION
# =============================================================================


def _subschemas(schema: Dict[str, Any], registry: Registry) -> Iterator[Dict[str, Any]]:
    """Схема и все части, подключённые через $ref и allOf."""
    if "$ref" in schema:
        yield from _subschemas(registry.contents(schema["$ref"]), registry)
    yield schema
    for part in schema.get("allOf", ()):
        yield from _subschemas(part, registry)


def _project(data: Any, schema: Dict[str, Any], registry: Registry) -> Any:
    parts = list(_subschemas(schema, registry))

    if isinstance(data, dict):
        properties: Dict[str, Any] = {}
        additional = None
        for part in parts:
            properties.update(part.get("properties", {}))
            if isinstance(part.get("additionalProperties"), dict):
                additional = part["additionalProperties"]
        projected = {}
        for key, value in data.items():
            subschema = properties.get(key, additional)
            if subschema is not None:
                projected[key] = _project(value, subschema, registry)
        return projected

    if isinstance(data, list):
        items = next((part["items"] for part in parts if "items" in part), None)
        if items is None:
            return list(data)
        return [_project(value, items, registry) for value in data]

    return data


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema. Все нарушения
    собираются за один проход (без fail-fast).
    """

    def __init__(self, schema_name: str):
        """
        Инициализация валидатора.

        Args:
            schema_name: Имя схемы для валидации
        """
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.registry = _SCHEMA_LOADER.registry()
        self.validator = WireValidator(self.schema, registry=self.registry)
        # Та же схема + проверка, что timestamps помещаются в datetime
        self.decode_validator = WireValidator(
            self.schema, registry=self.registry, format_checker=RUNTIME_FORMATS
        )

    def validate(self, data: Any, decodable: bool = False) -> None:
        """
        Валидация данных против схемы.

        Args:
            data: Данные для валидации (результат json.loads)
            decodable: Дополнительно требовать, чтобы данные декодировались
                в runtime модель (timestamps в диапазоне datetime)

        Raises:
            StructuralValidationError: Со списком всех нарушений
        """
        violations = self.violations(data, decodable=decodable)
        if violations:
            logger.debug(
                "wire_validation_failed",
                extra={
                    "entity": self.schema_name,
                    "violation_count": len(violations),
                    "fields": [v.field for v in violations],
                },
            )
            raise StructuralValidationError(self.schema_name, violations)

    def is_valid(self, data: Any) -> bool:
        """
        Проверка валидности данных без exception.

        Returns:
            True если данные валидны, False иначе
        """
        return self.validator.is_valid(data)

    def iter_errors(self, data: Any, decodable: bool = False) -> Iterator[ValidationError]:
        """
        Итератор по всем ошибкам валидации (сырые ошибки jsonschema).
        """
        validator = self.decode_validator if decodable else self.validator
        return validator.iter_errors(data)

    def violations(self, data: Any, decodable: bool = False) -> List[FieldViolation]:
        """
        Все нарушения контракта в порядке путей полей.

        Returns:
            Список FieldViolation (пустой, если данные валидны)
        """
        found = [_to_violation(error, data) for error in self.iter_errors(data, decodable)]
        return sorted(_drop_shadowed_pairing(found), key=_sort_key)

    def project(self, data: Any) -> Any:
        """
        Копия data только с полями, описанными схемой (на любой глубине).

        Неизвестные поля допускаются контрактом, но не обязаны переживать
        decode/encode; сравнивать round-trip нужно с проекцией.
        """
        return _project(data, self.schema, self.registry)


class AssetValidator(ContractValidator):
    """Валидатор для asset контракта."""

    def __init__(self):
        super().__init__("asset")


class MarketSnapshotValidator(ContractValidator):
    """Валидатор для market_snapshot контракта."""

    def __init__(self):
        super().__init__("market_snapshot")


class MarketQuoteValidator(ContractValidator):
    """Валидатор для market_quote контракта."""

    def __init__(self):
        super().__init__("market_quote")


class MarketBarValidator(ContractValidator):
    """Валидатор для market_bar контракта."""

    def __init__(self):
        super().__init__("market_bar")


class OrderValidator(ContractValidator):
    """
    Валидатор для order контракта.

    Пара side/effect проверяется через общую схему order_action.
    """

    def __init__(self):
        super().__init__("order")


class PartialOrderValidator(ContractValidator):
    """Валидатор для partial_order контракта (обязателен только id)."""

    def __init__(self):
        super().__init__("partial_order")


class OrderStateValidator(ContractValidator):
    """Валидатор для order_state контракта."""

    def __init__(self):
        super().__init__("order_state")


class FillValidator(ContractValidator):
    """Валидатор для fill контракта."""

    def __init__(self):
        super().__init__("fill")


class LongPositionValidator(ContractValidator):
    """Валидатор для long_position контракта."""

    def __init__(self):
        super().__init__("long_position")


class ShortPositionValidator(ContractValidator):
    """Валидатор для short_position контракта."""

    def __init__(self):
        super().__init__("short_position")


class PositionValidator(ContractValidator):
    """
    Валидатор для position контракта.

    Вложенные long/short позиции валидируются по своим схемам через $ref.
    """

    def __init__(self):
        super().__init__("position")


VALIDATOR_CLASSES: Dict[str, type] = {
    "asset": AssetValidator,
    "market_snapshot": MarketSnapshotValidator,
    "market_quote": MarketQuoteValidator,
    "market_bar": MarketBarValidator,
    "order": OrderValidator,
    "partial_order": PartialOrderValidator,
    "order_state": OrderStateValidator,
    "fill": FillValidator,
    "long_position": LongPositionValidator,
    "short_position": ShortPositionValidator,
    "position": PositionValidator,
}

# Валидаторы без состояния, переиспользуются
_VALIDATORS: Dict[str, ContractValidator] = {}


def get_validator(entity: str) -> ContractValidator:
    """
    Валидатор по имени сущности.

    Raises:
        KeyError: Если сущность неизвестна
    """
    if entity not in VALIDATOR_CLASSES:
        raise KeyError(f"Unknown entity {entity!r}; known: {sorted(VALIDATOR_CLASSES)}")
    if entity not in _VALIDATORS:
        _VALIDATORS[entity] = VALIDATOR_CLASSES[entity]()
    return _VALIDATORS[entity]


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_asset(data: Any) -> None:
    """
    Валидация asset данных.

    Raises:
        StructuralValidationError: Если данные не соответствуют схеме
    """
    get_validator("asset").validate(data)


def validate_market_snapshot(data: Any) -> None:
    """Валидация market_snapshot данных."""
    get_validator("market_snapshot").validate(data)


def validate_market_quote(data: Any) -> None:
    """Валидация market_quote данных."""
    get_validator("market_quote").validate(data)


def validate_market_bar(data: Any) -> None:
    """Валидация market_bar данных."""
    get_validator("market_bar").validate(data)


def validate_order(data: Any) -> None:
    """Валидация order данных."""
    get_validator("order").validate(data)


def validate_partial_order(data: Any) -> None:
    """Валидация partial_order данных."""
    get_validator("partial_order").validate(data)


def validate_order_state(data: Any) -> None:
    """Валидация order_state данных."""
    get_validator("order_state").validate(data)


def validate_fill(data: Any) -> None:
    """Валидация fill данных."""
    get_validator("fill").validate(data)


def validate_long_position(data: Any) -> None:
    """Валидация long_position данных."""
    get_validator("long_position").validate(data)


def validate_short_position(data: Any) -> None:
    """Валидация short_position данных."""
    get_validator("short_position").validate(data)


def validate_position(data: Any) -> None:
    """
    Валидация position данных.

    Raises:
        StructuralValidationError: Если данные не соответствуют схеме
    """
    get_validator("position").validate(data)
