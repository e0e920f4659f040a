"""
Base — общая база для immutable доменных моделей

Все сущности token system — неизменяемые Pydantic модели (frozen=True).
Python атрибуты в snake_case, JSON поля в camelCase (alias_generator=to_camel).
Оба варианта имён принимаются при валидации (populate_by_name=True).
"""

from typing import Any, Final

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# =============================================================================
# CONSTANTS
# =============================================================================

# Паттерн идентификаторов (token, collection, dimension, mode, value type, ...)
ID_PATTERN: Final[str] = r"^[a-zA-Z0-9_-]+$"


# =============================================================================
# BASE MODEL
# =============================================================================


class DomainModel(BaseModel):
    """
    Базовая immutable модель.

    JSON сериализация через to_dict() — camelCase поля, без None значений.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """JSON-совместимый dict с camelCase полями."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
