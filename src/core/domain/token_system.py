"""
TokenSystem — Корневой агрегат token system

Immutable Pydantic модель. Владеет всеми сущностями по значению:
dimensions, коллекции, токены, платформы, темы, taxonomies, типы значений.

Инварианты:
- каждый id в dimensionOrder существует в dimensions
- каждый id в taxonomyOrder существует в taxonomies
"""

from typing import Literal, Optional

from pydantic import Field, model_validator

from .base import ID_PATTERN, DomainModel
from .collection import TokenCollection
from .dimension import Dimension
from .platform import ExtensionSyntaxPatterns, Platform, PlatformExtensionRegistryEntry
from .taxonomy import Taxonomy
from .theme import Theme, ThemeOverride
from .token import PropertyType, Token
from .value_types import ResolvedValueType


# =============================================================================
# NESTED MODELS
# =============================================================================


class MigrationStrategy(DomainModel):
    empty_mode_ids: Literal["mapToDefaults", "preserveEmpty", "requireExplicit"]
    preserve_original_values: bool


class VersionHistoryEntry(DomainModel):
    """Запись истории версий: набор dimensions на момент версии."""

    version: str
    dimensions: list[str] = Field(default_factory=list)
    date: str
    migration_strategy: Optional[MigrationStrategy] = None


class DimensionEvolutionRule(DomainModel):
    when_adding: str = Field(..., pattern=ID_PATTERN)
    map_empty_mode_ids_to: list[str] = Field(default_factory=list)
    preserve_default_values: Optional[bool] = None


class DimensionEvolution(DomainModel):
    rules: list[DimensionEvolutionRule] = Field(default_factory=list)


class FigmaConfiguration(DomainModel):
    """Конфигурация публикации core токенов во внешний дизайн-инструмент."""

    syntax_patterns: Optional[ExtensionSyntaxPatterns] = None
    file_key: str = Field(..., description="Ключ файла core токенов")


# =============================================================================
# TOKEN SYSTEM MODEL
# =============================================================================


class TokenSystem(DomainModel):
    """
    Модель token system (core каталог).

    Immutable модель (frozen=True). Merge никогда не мутирует TokenSystem —
    результат собирается в новый MergedData.
    """

    # Метаданные
    system_name: str = Field(..., description="Имя системы")
    system_id: str = Field(..., pattern=ID_PATTERN, description="Идентификатор системы")
    description: Optional[str] = None
    figma_configuration: Optional[FigmaConfiguration] = None
    version: str = Field(..., description="Текущая версия")
    version_history: list[VersionHistoryEntry] = Field(
        default_factory=list, description="Упорядоченная история версий"
    )
    dimension_evolution: Optional[DimensionEvolution] = None

    # Оси вариативности
    dimensions: list[Dimension] = Field(default_factory=list)
    dimension_order: Optional[list[str]] = None

    # Каталог
    token_collections: list[TokenCollection] = Field(default_factory=list)
    tokens: list[Token] = Field(default_factory=list)
    platforms: list[Platform] = Field(default_factory=list)
    platform_extensions: Optional[list[PlatformExtensionRegistryEntry]] = None
    themes: Optional[list[Theme]] = None
    theme_overrides: Optional[dict[str, list[ThemeOverride]]] = None
    taxonomies: list[Taxonomy] = Field(default_factory=list)
    taxonomy_order: Optional[list[str]] = None
    standard_property_types: list[PropertyType] = Field(default_factory=list)
    property_types: list[PropertyType] = Field(default_factory=list)
    resolved_value_types: list[ResolvedValueType] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_order_references(self) -> "TokenSystem":
        """Каждый id в dimensionOrder/taxonomyOrder должен существовать"""
        problems: list[str] = []

        if self.dimension_order is not None:
            dimension_ids = {d.id for d in self.dimensions}
            missing = [i for i in self.dimension_order if i not in dimension_ids]
            if missing:
                problems.append(
                    f"All dimensionOrder IDs must match existing dimension IDs, missing: {missing}"
                )

        if self.taxonomy_order is not None:
            taxonomy_ids = {t.id for t in self.taxonomies}
            missing = [i for i in self.taxonomy_order if i not in taxonomy_ids]
            if missing:
                problems.append(
                    f"All taxonomyOrder IDs must match existing taxonomy IDs, missing: {missing}"
                )

        if problems:
            raise ValueError("; ".join(problems))
        return self

    # Lookup helpers (read-only)

    def find_token(self, token_id: str) -> Optional[Token]:
        for token in self.tokens:
            if token.id == token_id:
                return token
        return None

    def find_platform(self, platform_id: str) -> Optional[Platform]:
        for platform in self.platforms:
            if platform.id == platform_id:
                return platform
        return None

    def declared_mode_ids(self) -> set[str]:
        """Все mode id всех dimensions."""
        return {mode.id for dimension in self.dimensions for mode in dimension.modes}

    def default_mode_ids(self) -> list[str]:
        """defaultMode каждого dimension в порядке объявления."""
        return [dimension.default_mode for dimension in self.dimensions]
