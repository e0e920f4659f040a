"""
Platform / PlatformExtension — Платформы и платформенные overlays

Platform: id + правила именования/форматирования (syntaxPatterns,
valueFormatters) ЛИБО указатель на внешний extension файл (extensionSource).
Эти варианты взаимоисключающие.

PlatformExtension: standalone overlay, привязанный к platformId:
- tokenOverrides (с флагом omit и собственными valuesByMode)
- omittedModes / omittedDimensions
- figmaFileKey — обязательный уникальный ключ внешнего файла

Словари capitalization различаются: extension допускает 'camel',
платформа — нет (при merge 'camel' деградирует в 'none').
"""

from typing import Any, Literal, Optional, Union

from pydantic import Field, model_validator

from .base import ID_PATTERN, DomainModel
from .token import CodeSyntax, PropertyType, TokenStatus, TokenTaxonomyRef, TokenTier, ValueByMode


Delimiter = Literal["", "_", "-", ".", "/"]
PlatformCapitalization = Literal["none", "uppercase", "lowercase", "capitalize"]
ExtensionCapitalization = Literal["camel", "uppercase", "lowercase", "capitalize"]


# =============================================================================
# NAMING / FORMATTING RULES
# =============================================================================


class PlatformSyntaxPatterns(DomainModel):
    """Правила именования токенов на платформе."""

    prefix: Optional[str] = None
    suffix: Optional[str] = None
    delimiter: Optional[Delimiter] = None
    capitalization: Optional[PlatformCapitalization] = None
    format_string: Optional[str] = None


class ExtensionSyntaxPatterns(DomainModel):
    """Правила именования в extension файле (словарь capitalization с 'camel')."""

    prefix: Optional[str] = None
    suffix: Optional[str] = None
    delimiter: Optional[Delimiter] = None
    capitalization: Optional[ExtensionCapitalization] = None
    format_string: Optional[str] = None

    def to_platform_patterns(self) -> PlatformSyntaxPatterns:
        """
        Конвертация в словарь платформы.

        'camel' отсутствует в словаре платформы → деградирует в 'none'.
        """
        capitalization = "none" if self.capitalization == "camel" else self.capitalization
        return PlatformSyntaxPatterns(
            prefix=self.prefix,
            suffix=self.suffix,
            delimiter=self.delimiter,
            capitalization=capitalization,
            format_string=self.format_string,
        )


class ValueFormatters(DomainModel):
    """Правила форматирования значений на платформе."""

    color: Optional[Literal["hex", "rgb", "rgba", "hsl", "hsla"]] = None
    dimension: Optional[Literal["px", "rem", "em", "pt", "dp", "sp"]] = None
    number_precision: Optional[int] = Field(None, ge=0, le=10)


class ExtensionSource(DomainModel):
    repository_uri: str = Field(..., description="Репозиторий extension файла")
    file_path: str = Field(..., description="Путь к extension файлу")


# =============================================================================
# PLATFORM
# =============================================================================


class Platform(DomainModel):
    """
    Целевая платформа (iOS, Android, Web, ...).

    syntaxPatterns/valueFormatters XOR extensionSource.
    """

    id: str = Field(..., min_length=1, description="Идентификатор платформы")
    display_name: str = Field(..., description="Отображаемое имя")
    description: Optional[str] = None
    syntax_patterns: Optional[PlatformSyntaxPatterns] = None
    value_formatters: Optional[ValueFormatters] = None
    extension_source: Optional[ExtensionSource] = None

    @model_validator(mode="after")
    def validate_patterns_xor_extension_source(self) -> "Platform":
        """Платформа описывает правила локально ЛИБО через extension файл"""
        if self.extension_source is not None and (
            self.syntax_patterns is not None or self.value_formatters is not None
        ):
            raise ValueError(
                "Platforms can have either core patterns or extension source, but not both."
            )
        return self


# =============================================================================
# PLATFORM EXTENSION
# =============================================================================


class ExtensionMetadata(DomainModel):
    name: Optional[str] = None
    description: Optional[str] = None
    maintainer: Optional[str] = None
    last_updated: Optional[str] = None
    repository_visibility: Optional[Literal["public", "private"]] = None


class AlgorithmValueByMode(DomainModel):
    mode_ids: list[str]
    value: Union[str, bool, int, float]


class AlgorithmVariableOverride(DomainModel):
    """Override переменной алгоритма генерации токенов для платформы."""

    algorithm_id: str
    variable_id: str
    values_by_mode: list[AlgorithmValueByMode] = Field(default_factory=list)


class TokenOverride(DomainModel):
    """
    Override токена в platform extension.

    Все скалярные поля опциональны: при merge поле override побеждает,
    только если оно задано. omit=True удаляет токен из платформы.
    """

    id: str = Field(..., min_length=1, description="Токен (существующий или новый)")
    display_name: Optional[str] = None
    description: Optional[str] = None
    themeable: Optional[bool] = None
    private: Optional[bool] = None
    status: Optional[TokenStatus] = None
    token_tier: Optional[TokenTier] = None
    resolved_value_type_id: Optional[str] = None
    generated_by_algorithm: Optional[bool] = None
    algorithm_id: Optional[str] = None
    taxonomies: Optional[list[TokenTaxonomyRef]] = None
    property_types: Optional[list[PropertyType]] = None
    code_syntax: Optional[list[CodeSyntax]] = None
    values_by_mode: list[ValueByMode] = Field(default_factory=list)
    omit: Optional[bool] = None

    def is_omitted(self) -> bool:
        return bool(self.omit)


class PlatformExtension(DomainModel):
    """
    Standalone overlay платформы.

    figmaFileKey обязателен по контракту; в модели он Optional, чтобы merge
    engine мог диагностировать отсутствие ключа у extension, собранного в коде.
    """

    system_id: str = Field(..., description="Token system, к которой относится overlay")
    platform_id: str = Field(..., description="Платформа overlay")
    version: str = Field(..., description="Версия overlay")
    figma_file_key: Optional[str] = Field(
        None, pattern=ID_PATTERN, description="Уникальный ключ внешнего файла"
    )
    metadata: Optional[ExtensionMetadata] = None
    syntax_patterns: Optional[ExtensionSyntaxPatterns] = None
    value_formatters: Optional[ValueFormatters] = None
    algorithm_variable_overrides: Optional[list[AlgorithmVariableOverride]] = None
    token_overrides: Optional[list[TokenOverride]] = None
    omitted_modes: Optional[list[str]] = None
    omitted_dimensions: Optional[list[str]] = None


class PlatformExtensionRegistryEntry(DomainModel):
    """Запись реестра platform extensions в core данных."""

    platform_id: str
    repository_uri: str
    file_path: str


# Поля TokenOverride, которые переносятся на токен по правилу override-wins-if-present
TOKEN_OVERRIDE_SCALAR_FIELDS: tuple[str, ...] = (
    "display_name",
    "description",
    "themeable",
    "private",
    "status",
    "token_tier",
    "resolved_value_type_id",
    "generated_by_algorithm",
    "algorithm_id",
    "taxonomies",
    "property_types",
    "code_syntax",
)


def override_scalar_updates(override: TokenOverride) -> dict[str, Any]:
    """Заданные (не None) скалярные поля override."""
    return {
        name: getattr(override, name)
        for name in TOKEN_OVERRIDE_SCALAR_FIELDS
        if getattr(override, name) is not None
    }
