"""
Contract Validation Module

Admission gate документов token system: JSON Schema контракты
(Draft 2020-12) + pydantic модели.
"""

from .admission import (
    AdmissionGate,
    SchemaIssue,
    SchemaViolationError,
    collect_platform_extension_issues,
    collect_theme_override_file_issues,
    collect_theme_overrides_issues,
    collect_token_system_issues,
    validate_platform_extension,
    validate_theme_override_file,
    validate_theme_overrides,
    validate_token_system,
)
from .validators import (
    ContractValidator,
    PlatformExtensionValidator,
    SchemaLoader,
    ThemeOverrideFileValidator,
    ThemeOverridesValidator,
    TokenSystemValidator,
    validate_platform_extension_contract,
    validate_theme_override_file_contract,
    validate_theme_overrides_contract,
    validate_token_system_contract,
)

__all__ = [
    # Contract classes
    "SchemaLoader",
    "ContractValidator",
    "TokenSystemValidator",
    "PlatformExtensionValidator",
    "ThemeOverridesValidator",
    "ThemeOverrideFileValidator",
    # Contract functions
    "validate_token_system_contract",
    "validate_platform_extension_contract",
    "validate_theme_overrides_contract",
    "validate_theme_override_file_contract",
    # Admission gate
    "AdmissionGate",
    "SchemaIssue",
    "SchemaViolationError",
    "validate_token_system",
    "collect_token_system_issues",
    "validate_platform_extension",
    "collect_platform_extension_issues",
    "validate_theme_overrides",
    "collect_theme_overrides_issues",
    "validate_theme_override_file",
    "collect_theme_override_file_issues",
]
