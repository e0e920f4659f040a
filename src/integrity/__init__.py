"""
Referential Integrity — проверки ссылок между сущностями token system.

Работает над schema-valid моделями (после admission gate):
- references  — token → taxonomy/collection/value type, extension → modes
- file_keys   — уникальность figmaFileKey (отчёт и hard precondition)
- system_check — агрегированный IntegrityReport
"""

from .file_keys import (
    ConfigurationIntegrityError,
    DuplicateFigmaFileKeyError,
    MissingFigmaFileKeyError,
    check_figma_file_keys,
    ensure_unique_figma_file_keys,
)
from .references import (
    check_mode_references,
    check_token_collection,
    check_token_taxonomies,
    check_token_values,
    find_compatible_collection,
)
from .system_check import (
    FIGMA_PLATFORM_ID,
    FORMAT_STRING_PLACEHOLDERS,
    PLATFORM_ID_PREFIX,
    IntegrityConfig,
    IntegrityReport,
    SystemIntegrityChecker,
    check_core_configuration,
    check_format_strings,
    check_platform_extension_standalone,
    check_platform_extension_with_core,
    check_platform_extensions_registry,
    check_syntax_pattern_ownership,
    check_system,
    check_theme_override_file,
)

__all__ = [
    # Exceptions
    "ConfigurationIntegrityError",
    "DuplicateFigmaFileKeyError",
    "MissingFigmaFileKeyError",
    # Reference checks
    "check_token_taxonomies",
    "check_token_collection",
    "find_compatible_collection",
    "check_token_values",
    "check_mode_references",
    "check_figma_file_keys",
    "ensure_unique_figma_file_keys",
    # System checker
    "PLATFORM_ID_PREFIX",
    "FIGMA_PLATFORM_ID",
    "FORMAT_STRING_PLACEHOLDERS",
    "IntegrityConfig",
    "IntegrityReport",
    "SystemIntegrityChecker",
    "check_system",
    "check_platform_extension_with_core",
    "check_platform_extension_standalone",
    "check_core_configuration",
    "check_syntax_pattern_ownership",
    "check_format_strings",
    "check_platform_extensions_registry",
    "check_theme_override_file",
]
