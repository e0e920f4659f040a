"""
Domain models and value objects.

Contains the design token system entities: TokenSystem, Token, Dimension,
TokenCollection, Platform, PlatformExtension, Theme overrides, Taxonomy.
"""

from src.core.domain.base import ID_PATTERN, DomainModel
from src.core.domain.collection import (
    FallbackStrategy,
    ModeResolutionStrategy,
    TokenCollection,
)
from src.core.domain.dimension import Dimension, Mode
from src.core.domain.platform import (
    TOKEN_OVERRIDE_SCALAR_FIELDS,
    AlgorithmValueByMode,
    AlgorithmVariableOverride,
    ExtensionMetadata,
    ExtensionSource,
    ExtensionSyntaxPatterns,
    Platform,
    PlatformExtension,
    PlatformExtensionRegistryEntry,
    PlatformSyntaxPatterns,
    TokenOverride,
    ValueFormatters,
    override_scalar_updates,
)
from src.core.domain.taxonomy import Taxonomy, TaxonomyTerm
from src.core.domain.theme import (
    Theme,
    ThemeOverride,
    ThemeOverrideFile,
    ThemeOverrides,
    ThemeOverrideValue,
    ThemePlatformOverride,
    ThemeTokenOverride,
)
from src.core.domain.token import (
    GLOBAL_MODE_IDS,
    AliasValue,
    CodeSyntax,
    LiteralValue,
    PlatformOverride,
    PropertyType,
    TokenStatus,
    Token,
    TokenTaxonomyRef,
    TokenTier,
    TokenValue,
    ValueByMode,
    check_values_by_mode_shape,
)
from src.core.domain.token_system import (
    DimensionEvolution,
    DimensionEvolutionRule,
    FigmaConfiguration,
    MigrationStrategy,
    TokenSystem,
    VersionHistoryEntry,
)
from src.core.domain.value_types import (
    ColorValue,
    CubicBezierValue,
    DimensionValue,
    DurationValue,
    ResolvedValueType,
    StandardValueType,
    ValueTypeValidation,
    check_literal_value,
)

__all__ = [
    # Base
    "ID_PATTERN",
    "DomainModel",
    # Value types
    "StandardValueType",
    "ResolvedValueType",
    "ValueTypeValidation",
    "ColorValue",
    "DimensionValue",
    "DurationValue",
    "CubicBezierValue",
    "check_literal_value",
    # Dimensions
    "Dimension",
    "Mode",
    # Collections
    "TokenCollection",
    "ModeResolutionStrategy",
    "FallbackStrategy",
    # Token model
    "GLOBAL_MODE_IDS",
    "Token",
    "TokenTier",
    "TokenStatus",
    "TokenValue",
    "LiteralValue",
    "AliasValue",
    "ValueByMode",
    "PlatformOverride",
    "TokenTaxonomyRef",
    "CodeSyntax",
    "PropertyType",
    "check_values_by_mode_shape",
    # Platforms
    "Platform",
    "PlatformSyntaxPatterns",
    "ExtensionSyntaxPatterns",
    "ValueFormatters",
    "ExtensionSource",
    "PlatformExtension",
    "PlatformExtensionRegistryEntry",
    "ExtensionMetadata",
    "TokenOverride",
    "AlgorithmVariableOverride",
    "AlgorithmValueByMode",
    "TOKEN_OVERRIDE_SCALAR_FIELDS",
    "override_scalar_updates",
    # Themes
    "Theme",
    "ThemeOverride",
    "ThemeOverrides",
    "ThemeOverrideValue",
    "ThemePlatformOverride",
    "ThemeOverrideFile",
    "ThemeTokenOverride",
    # Taxonomies
    "Taxonomy",
    "TaxonomyTerm",
    # Token system
    "TokenSystem",
    "VersionHistoryEntry",
    "MigrationStrategy",
    "DimensionEvolution",
    "DimensionEvolutionRule",
    "FigmaConfiguration",
]
