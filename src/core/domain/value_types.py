"""
ResolvedValueType — Типы значений токенов

Модуль содержит:
- StandardValueType — перечень примитивных типов (COLOR, DIMENSION, DURATION, ...)
- ResolvedValueType — именованный тип значения с правилами валидации
- Payload модели стандартных типов (ColorValue, DimensionValue, DurationValue, ...)
- check_literal_value() — проверка literal значения токена против его типа

Проверка значений выполняется на границе (integrity checker), не в merge engine.
"""

import re
from enum import Enum
from typing import Any, Final, Literal, Optional, Union

from pydantic import Field, TypeAdapter, ValidationError, field_validator

from .base import ID_PATTERN, DomainModel


# =============================================================================
# ENUMS
# =============================================================================


class StandardValueType(str, Enum):
    """Стандартный примитивный тип значения"""

    COLOR = "COLOR"
    DIMENSION = "DIMENSION"
    SPACING = "SPACING"
    FONT_FAMILY = "FONT_FAMILY"
    FONT_WEIGHT = "FONT_WEIGHT"
    FONT_SIZE = "FONT_SIZE"
    LINE_HEIGHT = "LINE_HEIGHT"
    LETTER_SPACING = "LETTER_SPACING"
    DURATION = "DURATION"
    CUBIC_BEZIER = "CUBIC_BEZIER"
    BLUR = "BLUR"
    SPREAD = "SPREAD"
    RADIUS = "RADIUS"


# =============================================================================
# RESOLVED VALUE TYPE
# =============================================================================


class ValueTypeValidation(DomainModel):
    """Правила валидации значений типа (pattern, min/max, allowed values)."""

    pattern: Optional[str] = Field(None, description="Regex для строковых значений")
    minimum: Optional[float] = Field(None, description="Минимум для числовых значений")
    maximum: Optional[float] = Field(None, description="Максимум для числовых значений")
    allowed_values: Optional[list[str]] = Field(
        None, description="Допустимые значения (enum)"
    )

    @field_validator("pattern")
    @classmethod
    def validate_pattern_compiles(cls, v: Optional[str]) -> Optional[str]:
        """pattern должен быть корректным regex"""
        if v is not None:
            try:
                re.compile(v)
            except re.error as e:
                raise ValueError(f"pattern '{v}' is not a valid regular expression: {e}")
        return v


class ResolvedValueType(DomainModel):
    """
    Именованный тип значения токена.

    Идентифицируется уникальным id; type — опциональная привязка
    к StandardValueType для проверки формы payload.
    """

    id: str = Field(..., pattern=ID_PATTERN, description="Идентификатор типа")
    display_name: str = Field(..., description="Отображаемое имя")
    type: Optional[StandardValueType] = Field(None, description="Стандартный тип")
    description: Optional[str] = None
    validation: Optional[ValueTypeValidation] = Field(
        None, description="Правила валидации значений"
    )


# =============================================================================
# STANDARD PAYLOADS
# =============================================================================

DIMENSION_STRING_PATTERN: Final[str] = r"^[0-9]+(\.[0-9]+)?(px|rem|%|em|vh|vw|pt)$"
DURATION_STRING_PATTERN: Final[str] = r"^[0-9]+(\.[0-9]+)?(ms|s)$"
HEX_COLOR_PATTERN: Final[str] = r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{8})$"
CUBIC_BEZIER_STRING_PATTERN: Final[str] = (
    r"^cubic-bezier\([0-9]*(\.[0-9]+)?, ?[0-9]*(\.[0-9]+)?, ?"
    r"[0-9]*(\.[0-9]+)?, ?[0-9]*(\.[0-9]+)?\)$"
)


class RGBColor(DomainModel):
    r: int = Field(..., ge=0, le=255)
    g: int = Field(..., ge=0, le=255)
    b: int = Field(..., ge=0, le=255)
    a: Optional[float] = Field(None, ge=0, le=1)


class ColorValue(DomainModel):
    """Цвет: hex + опциональный rgb."""

    hex: str = Field(..., pattern=HEX_COLOR_PATTERN)
    rgb: Optional[RGBColor] = None


class DimensionValue(DomainModel):
    value: float
    unit: Literal["px", "rem", "%", "em", "vh", "vw", "pt"]


class DurationValue(DomainModel):
    value: float = Field(..., ge=0)
    unit: Literal["ms", "s"]


class CubicBezierValue(DomainModel):
    x1: float = Field(..., ge=0, le=1)
    y1: float
    x2: float = Field(..., ge=0, le=1)
    y2: float


_DIMENSION_ADAPTER = TypeAdapter(DimensionValue)

# Структурные (не строковые) формы каждого standard type
_PAYLOAD_ADAPTERS: Final[dict[StandardValueType, TypeAdapter]] = {
    StandardValueType.COLOR: TypeAdapter(ColorValue),
    StandardValueType.DIMENSION: _DIMENSION_ADAPTER,
    StandardValueType.SPACING: _DIMENSION_ADAPTER,
    StandardValueType.FONT_SIZE: _DIMENSION_ADAPTER,
    StandardValueType.LETTER_SPACING: _DIMENSION_ADAPTER,
    StandardValueType.BLUR: _DIMENSION_ADAPTER,
    StandardValueType.SPREAD: _DIMENSION_ADAPTER,
    StandardValueType.RADIUS: _DIMENSION_ADAPTER,
    StandardValueType.LINE_HEIGHT: TypeAdapter(Union[float, DimensionValue]),
    StandardValueType.DURATION: TypeAdapter(DurationValue),
    StandardValueType.CUBIC_BEZIER: TypeAdapter(CubicBezierValue),
    StandardValueType.FONT_WEIGHT: TypeAdapter(int),
    StandardValueType.FONT_FAMILY: TypeAdapter(str),
}

# Строковая форма каждого standard type
_STRING_PATTERNS: Final[dict[StandardValueType, str]] = {
    StandardValueType.COLOR: HEX_COLOR_PATTERN,
    StandardValueType.DIMENSION: DIMENSION_STRING_PATTERN,
    StandardValueType.SPACING: DIMENSION_STRING_PATTERN,
    StandardValueType.FONT_SIZE: DIMENSION_STRING_PATTERN,
    StandardValueType.LETTER_SPACING: DIMENSION_STRING_PATTERN,
    StandardValueType.LINE_HEIGHT: DIMENSION_STRING_PATTERN,
    StandardValueType.BLUR: DIMENSION_STRING_PATTERN,
    StandardValueType.SPREAD: DIMENSION_STRING_PATTERN,
    StandardValueType.RADIUS: DIMENSION_STRING_PATTERN,
    StandardValueType.DURATION: DURATION_STRING_PATTERN,
    StandardValueType.CUBIC_BEZIER: CUBIC_BEZIER_STRING_PATTERN,
    StandardValueType.FONT_WEIGHT: r"^(normal|bold|lighter|bolder)$",
    StandardValueType.FONT_FAMILY: r"^.+$",
}


# =============================================================================
# LITERAL VALUE CHECK
# =============================================================================


def _check_standard_payload(value: Any, standard_type: StandardValueType) -> list[str]:
    """Проверка формы payload для стандартного типа."""
    if isinstance(value, str):
        pattern = _STRING_PATTERNS[standard_type]
        if not re.match(pattern, value):
            return [f"'{value}' is not a valid {standard_type.value} string"]
        return []

    # Строки проверены выше, здесь только структурные формы
    if isinstance(value, bool):
        return [f"boolean is not a valid {standard_type.value} value"]

    try:
        payload = _PAYLOAD_ADAPTERS[standard_type].validate_python(value, strict=False)
    except ValidationError as e:
        return [f"invalid {standard_type.value} payload: {err['msg']}" for err in e.errors()]

    if standard_type == StandardValueType.FONT_WEIGHT:
        if not (100 <= payload <= 900 and payload % 100 == 0):
            return [f"font weight {value} must be a multiple of 100 in [100, 900]"]

    return []


def check_literal_value(value: Any, value_type: ResolvedValueType) -> list[str]:
    """
    Проверка literal значения против ResolvedValueType.

    Порядок:
    1. Форма payload для стандартного type (если задан)
    2. validation.pattern для строк
    3. validation.minimum/maximum для чисел
    4. validation.allowed_values

    Args:
        value: Literal значение токена ({value: ...} → ...)
        value_type: Тип значения токена

    Returns:
        Список нарушений (пустой = валидно)
    """
    violations: list[str] = []

    if value_type.type is not None:
        violations.extend(_check_standard_payload(value, value_type.type))

    rules = value_type.validation
    if rules is None:
        return violations

    if rules.pattern is not None and isinstance(value, str):
        if not re.search(rules.pattern, value):
            violations.append(
                f"'{value}' does not match pattern '{rules.pattern}' of type '{value_type.id}'"
            )

    is_number = isinstance(value, (int, float)) and not isinstance(value, bool)
    if is_number and rules.minimum is not None and value < rules.minimum:
        violations.append(f"{value} is below minimum {rules.minimum} of type '{value_type.id}'")
    if is_number and rules.maximum is not None and value > rules.maximum:
        violations.append(f"{value} is above maximum {rules.maximum} of type '{value_type.id}'")

    if rules.allowed_values is not None and str(value) not in rules.allowed_values:
        violations.append(
            f"'{value}' is not one of the allowed values of type '{value_type.id}'"
        )

    return violations
