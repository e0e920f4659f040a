"""
Dimension — Оси вариативности и их режимы (modes)

Dimension владеет упорядоченным непустым набором Mode.
defaultMode обязан ссылаться на один из собственных modes.
"""

from typing import Optional

from pydantic import Field, model_validator

from .base import ID_PATTERN, DomainModel


class Mode(DomainModel):
    """Конкретное значение оси (например, 'dark')."""

    id: str = Field(..., pattern=ID_PATTERN, description="Идентификатор mode")
    name: str = Field(..., description="Имя mode")
    description: Optional[str] = None
    dimension_id: str = Field(
        ..., pattern=ID_PATTERN, description="Dimension, которому принадлежит mode"
    )


class Dimension(DomainModel):
    """
    Ось вариативности (color scheme, density, ...).

    required=True означает, что каждый токен обязан задать значение
    для каждого mode этой оси.
    """

    id: str = Field(..., pattern=ID_PATTERN, description="Идентификатор dimension")
    display_name: str = Field(..., description="Отображаемое имя")
    description: Optional[str] = None
    modes: list[Mode] = Field(..., min_length=1, description="Упорядоченный список modes")
    required: bool = Field(default=False, description="Обязательность значения по modes")
    default_mode: str = Field(..., description="Mode по умолчанию (id)")
    resolved_value_type_ids: Optional[list[str]] = Field(
        None, description="Типы значений, к которым применима ось"
    )

    @model_validator(mode="after")
    def validate_default_mode(self) -> "Dimension":
        """Проверка, что default_mode — один из собственных modes"""
        mode_ids = [mode.id for mode in self.modes]
        if self.default_mode not in mode_ids:
            raise ValueError(
                f"defaultMode '{self.default_mode}' is not one of the modes of "
                f"dimension '{self.id}': {mode_ids}"
            )
        return self

    def mode_ids(self) -> list[str]:
        """Идентификаторы modes в порядке объявления."""
        return [mode.id for mode in self.modes]
