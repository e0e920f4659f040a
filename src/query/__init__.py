"""
Query / Introspection Layer — read-only доступ к token system.
"""

from .catalog import (
    QueryIssue,
    QueryValidationResult,
    SystemInfo,
    TokenCatalog,
)
from .platforms import (
    DEFAULT_FIGMA_FILE_KEY,
    MissingThemeFileKeyError,
    get_figma_file_key_for_platform,
    get_figma_file_key_for_theme_override,
    get_syntax_patterns_for_platform,
    get_value_formatters_for_platform,
)

__all__ = [
    "TokenCatalog",
    "QueryIssue",
    "QueryValidationResult",
    "SystemInfo",
    "DEFAULT_FIGMA_FILE_KEY",
    "MissingThemeFileKeyError",
    "get_syntax_patterns_for_platform",
    "get_value_formatters_for_platform",
    "get_figma_file_key_for_platform",
    "get_figma_file_key_for_theme_override",
]
