"""
TokenCollection — Типизированные коллекции токенов

Коллекция объявляет принимаемые resolvedValueTypeIds (непустой список)
и опционально стратегию разрешения modes. Стратегия используется
потребителями (codegen, UI), merge engine её не читает.
"""

from enum import Enum
from typing import Optional

from pydantic import Field

from .base import ID_PATTERN, DomainModel


class FallbackStrategy(str, Enum):
    """Политика fallback при отсутствии точного совпадения modes"""

    MOST_SPECIFIC_MATCH = "MOST_SPECIFIC_MATCH"
    DIMENSION_PRIORITY = "DIMENSION_PRIORITY"
    NEAREST_PARENT = "NEAREST_PARENT"
    DEFAULT_VALUE = "DEFAULT_VALUE"


class ModeResolutionStrategy(DomainModel):
    """Приоритет dimensions + fallback политика."""

    priority_by_type: list[str] = Field(..., description="Приоритет dimensions")
    fallback_strategy: FallbackStrategy = Field(..., description="Политика fallback")


class TokenCollection(DomainModel):
    """Именованный типизированный bucket токенов."""

    id: str = Field(..., pattern=ID_PATTERN, description="Идентификатор коллекции")
    name: str = Field(..., description="Имя коллекции")
    description: Optional[str] = None
    resolved_value_type_ids: list[str] = Field(
        ..., min_length=1, description="Принимаемые типы значений"
    )
    private: bool = Field(default=False, description="Приватная коллекция")
    default_mode_ids: Optional[list[str]] = Field(
        None, description="Modes по умолчанию для коллекции"
    )
    mode_resolution_strategy: Optional[ModeResolutionStrategy] = Field(
        None, description="Стратегия разрешения modes (для потребителей)"
    )

    def accepts(self, resolved_value_type_id: str) -> bool:
        """Принимает ли коллекция данный тип значения."""
        return resolved_value_type_id in self.resolved_value_type_ids
