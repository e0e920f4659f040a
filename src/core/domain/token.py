"""
Token — Центральная сущность token system

Immutable Pydantic модель именованного типизированного значения,
возможно различающегося по комбинациям modes.

КРИТИЧЕСКИЙ ИНВАРИАНТ valuesByMode:
- либо ровно одна запись с modeIds = [] (глобальное значение),
- либо у всех записей modeIds непустой.
Две формы взаимоисключающие в пределах одного токена. Инвариант проверяется
при валидации и сохраняется каждым шагом merge.

TokenValue — tagged union:
- LiteralValue {value: <any JSON>}
- AliasValue   {tokenId: <id>} (ссылка на другой токен)
Дискриминант — наличие ключа tokenId.
"""

from enum import Enum
from typing import Annotated, Any, Final, Optional, Union

from pydantic import Discriminator, Field, Tag, field_validator

from .base import ID_PATTERN, DomainModel


# Глобальная комбинация modes (значение для всех modes)
GLOBAL_MODE_IDS: Final[tuple[str, ...]] = ()


# =============================================================================
# ENUMS
# =============================================================================


class TokenTier(str, Enum):
    """Роль токена в иерархии"""

    PRIMITIVE = "PRIMITIVE"
    SEMANTIC = "SEMANTIC"
    COMPONENT = "COMPONENT"


class TokenStatus(str, Enum):
    """Статус жизненного цикла токена"""

    EXPERIMENTAL = "experimental"
    STABLE = "stable"
    DEPRECATED = "deprecated"


# =============================================================================
# TOKEN VALUE (TAGGED UNION)
# =============================================================================


class LiteralValue(DomainModel):
    """Literal значение. Форма payload проверяется по ResolvedValueType."""

    value: Any


class AliasValue(DomainModel):
    """Ссылка на другой токен."""

    token_id: str = Field(..., pattern=ID_PATTERN, description="Целевой токен")


def _token_value_kind(raw: Any) -> str:
    if isinstance(raw, dict):
        return "alias" if ("tokenId" in raw or "token_id" in raw) else "literal"
    return "alias" if isinstance(raw, AliasValue) else "literal"


TokenValue = Annotated[
    Union[
        Annotated[LiteralValue, Tag("literal")],
        Annotated[AliasValue, Tag("alias")],
    ],
    Discriminator(_token_value_kind),
]


# =============================================================================
# NESTED MODELS
# =============================================================================


class PlatformOverride(DomainModel):
    """Платформенное значение внутри записи valuesByMode."""

    platform_id: str = Field(..., description="Платформа")
    value: str = Field(..., description="Значение для платформы")
    metadata: Optional[dict[str, Any]] = None


class ValueByMode(DomainModel):
    """
    Запись valuesByMode: значение для комбинации modes.

    mode_ids = [] — глобальное значение.
    """

    mode_ids: list[str] = Field(..., description="Комбинация modes (set семантика)")
    value: TokenValue = Field(..., description="Значение (literal или alias)")
    metadata: Optional[dict[str, Any]] = None
    platform_overrides: Optional[list[PlatformOverride]] = None

    def is_global(self) -> bool:
        return tuple(self.mode_ids) == GLOBAL_MODE_IDS

    def mode_set(self) -> frozenset[str]:
        return frozenset(self.mode_ids)


class TokenTaxonomyRef(DomainModel):
    taxonomy_id: str
    term_id: str


class CodeSyntax(DomainModel):
    platform_id: str
    formatted_name: str


class PropertyCategory(str, Enum):
    COLOR = "color"
    TYPOGRAPHY = "typography"
    SPACING = "spacing"
    DIMENSION = "dimension"
    EFFECT = "effect"
    BORDER = "border"
    LAYOUT = "layout"
    ANIMATION = "animation"


class PlatformMappings(DomainModel):
    css: Optional[list[str]] = None
    figma: Optional[list[str]] = None
    ios: Optional[list[str]] = None
    android: Optional[list[str]] = None


class PropertyType(DomainModel):
    """Тип свойства, к которому применим токен (fill, padding, ...)."""

    id: str = Field(..., pattern=ID_PATTERN)
    display_name: str
    category: PropertyCategory
    compatible_value_types: list[str] = Field(default_factory=list)
    platform_mappings: Optional[PlatformMappings] = None
    default_unit: Optional[str] = None
    inheritance: bool = False


# =============================================================================
# VALUES BY MODE INVARIANT
# =============================================================================


def check_values_by_mode_shape(values_by_mode: list[ValueByMode]) -> Optional[str]:
    """
    Проверка инварианта формы valuesByMode.

    Returns:
        None если форма валидна, иначе сообщение об ошибке
    """
    if len(values_by_mode) == 0:
        return "valuesByMode must be a non-empty array."

    has_global = any(entry.is_global() for entry in values_by_mode)
    if has_global and len(values_by_mode) > 1:
        return (
            "If a global value (modeIds: []) is defined, it must be the only "
            "entry in valuesByMode."
        )
    return None


# =============================================================================
# TOKEN MODEL
# =============================================================================


class Token(DomainModel):
    """
    Именованное типизированное значение дизайна.

    Immutable модель (frozen=True). Содержит:
    - Идентификацию (id, displayName, tier, resolvedValueTypeId)
    - Классификацию (collection, taxonomies, propertyTypes)
    - Значения по комбинациям modes (valuesByMode)
    """

    id: str = Field(..., pattern=ID_PATTERN, description="Идентификатор токена")
    display_name: str = Field(..., description="Отображаемое имя")
    description: Optional[str] = None
    token_collection_id: Optional[str] = Field(
        None, pattern=ID_PATTERN, description="Коллекция токена"
    )
    resolved_value_type_id: str = Field(
        ..., pattern=ID_PATTERN, description="Тип значения"
    )
    private: bool = False
    themeable: bool = False
    status: Optional[TokenStatus] = None
    token_tier: TokenTier = Field(..., description="PRIMITIVE/SEMANTIC/COMPONENT")
    generated_by_algorithm: bool = False
    algorithm_id: Optional[str] = Field(None, pattern=ID_PATTERN)
    taxonomies: list[TokenTaxonomyRef] = Field(default_factory=list)
    property_types: list[PropertyType] = Field(default_factory=list)
    code_syntax: list[CodeSyntax] = Field(default_factory=list)
    values_by_mode: list[ValueByMode] = Field(
        ..., min_length=1, description="Значения по комбинациям modes"
    )

    @field_validator("values_by_mode")
    @classmethod
    def validate_values_by_mode_shape(cls, v: list[ValueByMode]) -> list[ValueByMode]:
        """Глобальное значение и mode-specific значения взаимоисключающие"""
        error = check_values_by_mode_shape(v)
        if error is not None:
            raise ValueError(error)
        return v
