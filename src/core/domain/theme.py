"""
Theme / ThemeOverride — Темы и их overrides

ThemeOverrides — mapping theme id → список {tokenId, value, platformOverrides?}.
Применяется после всех platform extensions.

ThemeOverrideFile — standalone документ overrides одной темы со своим
figmaFileKey (участвует в проверке уникальности ключей).
"""

from typing import Optional, Union

from pydantic import Field

from .base import ID_PATTERN, DomainModel
from .token import AliasValue, LiteralValue, ValueByMode


class Theme(DomainModel):
    id: str = Field(..., pattern=ID_PATTERN, description="Идентификатор темы")
    display_name: str = Field(..., description="Отображаемое имя")
    description: Optional[str] = None
    is_default: bool = Field(..., description="Тема по умолчанию")


class ThemeOverrideValue(DomainModel):
    """Значение override: literal + опциональная ссылка на токен."""

    value: Union[str, bool, int, float]
    token_id: Optional[str] = Field(None, pattern=ID_PATTERN)

    def to_token_value(self) -> Union[LiteralValue, AliasValue]:
        """Конвертация в TokenValue (ссылка приоритетнее literal)."""
        if self.token_id is not None:
            return AliasValue(token_id=self.token_id)
        return LiteralValue(value=self.value)


class ThemePlatformOverride(DomainModel):
    platform_id: str
    value: ThemeOverrideValue


class ThemeOverride(DomainModel):
    """Override значения токена в теме."""

    token_id: str = Field(..., pattern=ID_PATTERN, description="Целевой токен")
    value: ThemeOverrideValue = Field(..., description="Значение темы")
    platform_overrides: Optional[list[ThemePlatformOverride]] = None

    def effective_value(self) -> ThemeOverrideValue:
        """
        Значение, применяемое merge engine.

        При наличии platformOverrides используется ПЕРВАЯ запись,
        иначе — прямое value.
        """
        if self.platform_overrides:
            return self.platform_overrides[0].value
        return self.value


# Mapping theme id → список overrides
ThemeOverrides = dict[str, list[ThemeOverride]]


class ThemeTokenOverride(DomainModel):
    token_id: str = Field(..., min_length=1)
    values_by_mode: list[ValueByMode] = Field(default_factory=list)


class ThemeOverrideFile(DomainModel):
    """Standalone файл overrides одной темы."""

    system_id: str = Field(..., min_length=1)
    theme_id: str = Field(..., min_length=1)
    figma_file_key: Optional[str] = Field(None, pattern=ID_PATTERN)
    token_overrides: list[ThemeTokenOverride] = Field(default_factory=list)
