"""
System Integrity Checker — агрегированная проверка core + overlays

Собирает все referential проверки в IntegrityReport:
- tokens → taxonomies / collections / value types
- реестр platform extensions в core данных
- конфигурация core: Figma вне platforms, figmaConfiguration задана
- владение syntaxPatterns (Figma в core, остальные в extensions)
- formatString syntaxPatterns содержит плейсхолдер
- platform extension: standalone и относительно core
- уникальность figmaFileKey
- theme override files и themeOverrides core каталога

errors — нарушения целостности; warnings — отклонения от соглашений,
не мешающие merge. Решение принимает вызывающий код.
"""

import logging
from dataclasses import dataclass, field
from typing import Final, Optional, Sequence

from src.core.domain import PlatformExtension, ThemeOverrideFile, TokenSystem
from src.integrity.file_keys import check_figma_file_keys
from src.integrity.references import (
    check_mode_references,
    check_token_collection,
    check_token_taxonomies,
    check_token_values,
)


logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

PLATFORM_ID_PREFIX: Final[str] = "platform-"
FIGMA_PLATFORM_ID: Final[str] = "platform-figma"

# Плейсхолдеры formatString; хотя бы один должен присутствовать
FORMAT_STRING_PLACEHOLDERS: Final[tuple[str, ...]] = ("{name}", "{type}", "{category}", "{mode}")


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass(frozen=True)
class IntegrityReport:
    """Результат проверки целостности."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def from_lists(cls, errors: list[str], warnings: list[str]) -> "IntegrityReport":
        return cls(is_valid=not errors, errors=list(errors), warnings=list(warnings))

    def combine(self, other: "IntegrityReport") -> "IntegrityReport":
        return IntegrityReport.from_lists(
            self.errors + other.errors, self.warnings + other.warnings
        )


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class IntegrityConfig:
    """Конфигурация проверок целостности."""

    # Соглашение об именовании платформ
    platform_id_prefix: str = PLATFORM_ID_PREFIX
    figma_platform_id: str = FIGMA_PLATFORM_ID

    # Проверять literal значения токенов против ResolvedValueType
    check_token_values: bool = True


# =============================================================================
# CHECKER
# =============================================================================


class SystemIntegrityChecker:
    """
    Проверка referential integrity token system и его overlays.

    Все методы чистые: входные модели не изменяются.
    """

    def __init__(self, config: IntegrityConfig | None = None):
        self.config = config or IntegrityConfig()

    # -------------------------------------------------------------------------
    # Core
    # -------------------------------------------------------------------------

    def check_tokens(self, core: TokenSystem) -> IntegrityReport:
        """Ссылки каждого токена на taxonomies, коллекции и типы значений."""
        errors: list[str] = []
        for token in core.tokens:
            errors.extend(check_token_taxonomies(token, core.taxonomies))
            errors.extend(check_token_collection(token, core.token_collections))
            if self.config.check_token_values:
                errors.extend(check_token_values(token, core.resolved_value_types))
        return IntegrityReport.from_lists(errors, [])

    def check_platform_extensions_registry(self, core: TokenSystem) -> IntegrityReport:
        """Реестр platformExtensions: формат id, формат URI, дубликаты, платформы."""
        if not core.platform_extensions:
            return IntegrityReport(is_valid=True)

        errors: list[str] = []
        warnings: list[str] = []
        platform_ids = {platform.id for platform in core.platforms}
        seen: set[str] = set()

        for entry in core.platform_extensions:
            if not entry.platform_id.startswith(self.config.platform_id_prefix):
                warnings.append(
                    f'Platform ID "{entry.platform_id}" should follow the pattern '
                    f'"{self.config.platform_id_prefix}{{name}}"'
                )
            if "/" not in entry.repository_uri:
                errors.append(
                    f'Repository URI "{entry.repository_uri}" should be in format "owner/repo"'
                )
            if entry.platform_id in seen:
                errors.append(
                    f'Duplicate platform ID "{entry.platform_id}" in platform extensions registry'
                )
            seen.add(entry.platform_id)
            if entry.platform_id not in platform_ids:
                errors.append(
                    f"Platform extension references non-existent platform: {entry.platform_id}"
                )

        return IntegrityReport.from_lists(errors, warnings)

    def check_syntax_pattern_ownership(
        self, core: TokenSystem, extensions: Sequence[PlatformExtension]
    ) -> IntegrityReport:
        """syntaxPatterns Figma принадлежат core данным, а не extension."""
        errors: list[str] = []
        warnings: list[str] = []

        figma = core.figma_configuration
        if figma is not None and figma.syntax_patterns is None:
            warnings.append("Figma configuration in core data should include syntaxPatterns")

        for extension in extensions:
            if extension.platform_id == self.config.figma_platform_id and extension.syntax_patterns:
                errors.append(
                    f'Figma platform extension "{extension.platform_id}" should not include '
                    "syntaxPatterns (these belong in core data)"
                )

        return IntegrityReport.from_lists(errors, warnings)

    def check_core_configuration(self, core: TokenSystem) -> IntegrityReport:
        """Figma настраивается через figmaConfiguration, а не как платформа."""
        errors: list[str] = []
        warnings: list[str] = []

        if core.figma_configuration is None:
            warnings.append(
                "No figmaConfiguration found. Core tokens will not be published to Figma."
            )

        if core.find_platform(self.config.figma_platform_id) is not None:
            errors.append(
                "Figma should not be included in the platforms array. "
                "It is configured separately in figmaConfiguration."
            )

        return IntegrityReport.from_lists(errors, warnings)

    def check_format_strings(
        self, core: TokenSystem, extensions: Sequence[PlatformExtension] = ()
    ) -> IntegrityReport:
        """
        formatString каждого набора syntaxPatterns содержит хотя бы один плейсхолдер.

        Проверяются figmaConfiguration, platforms core каталога и extensions.
        """
        sources: list[tuple[str, Optional[str]]] = []
        if core.figma_configuration and core.figma_configuration.syntax_patterns:
            sources.append(
                ("figmaConfiguration", core.figma_configuration.syntax_patterns.format_string)
            )
        for platform in core.platforms:
            if platform.syntax_patterns:
                sources.append((f'Platform "{platform.id}"', platform.syntax_patterns.format_string))
        for extension in extensions:
            if extension.syntax_patterns:
                sources.append(
                    (
                        f'Platform extension "{extension.platform_id}"',
                        extension.syntax_patterns.format_string,
                    )
                )

        warnings = [
            f"{owner}: format string should include at least one placeholder like "
            "{name}, {type}, {category}, or {mode}"
            for owner, format_string in sources
            if format_string
            and not any(placeholder in format_string for placeholder in FORMAT_STRING_PLACEHOLDERS)
        ]
        return IntegrityReport.from_lists([], warnings)

    def check_theme_overrides(self, core: TokenSystem) -> IntegrityReport:
        """
        themeOverrides core каталога ссылаются на объявленные темы и токены.

        Нарушения — warnings: merge исключает такие overrides сам.
        """
        if not core.theme_overrides:
            return IntegrityReport(is_valid=True)

        theme_ids = {theme.id for theme in core.themes or []}
        token_ids = {token.id for token in core.tokens}
        warnings: list[str] = []

        for theme_id, overrides in core.theme_overrides.items():
            if theme_id not in theme_ids:
                warnings.append(f'Theme overrides reference undeclared theme "{theme_id}"')
            for override in overrides:
                if override.token_id not in token_ids:
                    warnings.append(
                        f'Theme "{theme_id}" overrides unknown token "{override.token_id}"'
                    )
                elif override.value.token_id and override.value.token_id not in token_ids:
                    warnings.append(
                        f'Theme "{theme_id}" aliases unknown token "{override.value.token_id}"'
                    )

        return IntegrityReport.from_lists([], warnings)

    # -------------------------------------------------------------------------
    # Platform extensions
    # -------------------------------------------------------------------------

    def check_platform_extension_standalone(self, extension: PlatformExtension) -> IntegrityReport:
        """Соглашения, проверяемые без core данных."""
        errors: list[str] = []
        warnings: list[str] = []

        if not extension.platform_id.startswith(self.config.platform_id_prefix):
            warnings.append(
                f'Platform ID should follow the pattern "{self.config.platform_id_prefix}{{name}}"'
            )

        if extension.platform_id == self.config.figma_platform_id and extension.syntax_patterns:
            errors.append(
                "Figma platform extensions should not include syntaxPatterns "
                "(these belong in core data)"
            )

        return IntegrityReport.from_lists(errors, warnings)

    def check_platform_extension_with_core(
        self, core: TokenSystem, extension: PlatformExtension
    ) -> IntegrityReport:
        """Referential integrity extension относительно core каталога."""
        errors: list[str] = []
        warnings: list[str] = []

        if extension.system_id != core.system_id:
            errors.append(
                f'System ID mismatch: extension has "{extension.system_id}", '
                f'core has "{core.system_id}"'
            )

        if core.find_platform(extension.platform_id) is None:
            errors.append(f'Platform "{extension.platform_id}" not found in core data platforms')

        value_type_ids = {value_type.id for value_type in core.resolved_value_types}
        for override in extension.token_overrides or []:
            core_token = core.find_token(override.id)
            if core_token is None:
                if not override.resolved_value_type_id:
                    errors.append(f'New token "{override.id}" must specify resolvedValueTypeId')
                elif override.resolved_value_type_id not in value_type_ids:
                    errors.append(
                        f'Resolved value type "{override.resolved_value_type_id}" not found '
                        f'in core data for token "{override.id}"'
                    )
            elif (
                override.resolved_value_type_id
                and override.resolved_value_type_id != core_token.resolved_value_type_id
            ):
                warnings.append(
                    f'Token "{override.id}" overrides resolvedValueTypeId from '
                    f'"{core_token.resolved_value_type_id}" to "{override.resolved_value_type_id}"'
                )

        errors.extend(check_mode_references(core, [extension]))

        return IntegrityReport.from_lists(errors, warnings)

    def check_platform_extension(
        self, core: TokenSystem, extension: PlatformExtension
    ) -> IntegrityReport:
        """Standalone + относительно core."""
        return self.check_platform_extension_standalone(extension).combine(
            self.check_platform_extension_with_core(core, extension)
        )

    # -------------------------------------------------------------------------
    # Theme override files
    # -------------------------------------------------------------------------

    def check_theme_override_file(
        self, core: TokenSystem, theme_file: ThemeOverrideFile
    ) -> IntegrityReport:
        """Theme override file: system, тема, токены и modes существуют."""
        errors: list[str] = []
        warnings: list[str] = []

        if theme_file.system_id != core.system_id:
            errors.append(
                f'System ID mismatch: theme override file has "{theme_file.system_id}", '
                f'core has "{core.system_id}"'
            )

        theme_ids = {theme.id for theme in core.themes or []}
        if theme_file.theme_id not in theme_ids:
            errors.append(f'Theme "{theme_file.theme_id}" not found in core data themes')

        if not theme_file.figma_file_key:
            warnings.append(f"Theme override file {theme_file.theme_id} has no figmaFileKey")

        mode_ids = core.declared_mode_ids()
        for override in theme_file.token_overrides:
            token = core.find_token(override.token_id)
            if token is None:
                errors.append(f'Token "{override.token_id}" not found in core data')
                continue
            if not token.themeable:
                warnings.append(f'Token "{override.token_id}" is not themeable')
            for entry in override.values_by_mode:
                for mode_id in entry.mode_ids:
                    if mode_id not in mode_ids:
                        errors.append(
                            f'Mode "{mode_id}" not found in core data for token "{override.token_id}"'
                        )

        return IntegrityReport.from_lists(errors, warnings)

    # -------------------------------------------------------------------------
    # Aggregate
    # -------------------------------------------------------------------------

    def check_system(
        self,
        core: TokenSystem,
        extensions: Sequence[PlatformExtension] = (),
        theme_override_files: Sequence[ThemeOverrideFile] = (),
    ) -> IntegrityReport:
        """
        Полная проверка core каталога и его overlays.

        Args:
            core: Schema-valid core каталог
            extensions: Platform extensions
            theme_override_files: Standalone theme override files

        Returns:
            Агрегированный IntegrityReport
        """
        report = self.check_tokens(core)
        report = report.combine(self.check_core_configuration(core))
        report = report.combine(self.check_platform_extensions_registry(core))
        report = report.combine(self.check_syntax_pattern_ownership(core, extensions))
        report = report.combine(self.check_format_strings(core, extensions))
        report = report.combine(self.check_theme_overrides(core))

        for extension in extensions:
            report = report.combine(self.check_platform_extension(core, extension))

        key_errors = check_figma_file_keys(extensions, theme_override_files)
        report = report.combine(IntegrityReport.from_lists(key_errors, []))

        for theme_file in theme_override_files:
            report = report.combine(self.check_theme_override_file(core, theme_file))

        logger.debug(
            "Integrity check of %s: %d errors, %d warnings",
            core.system_id,
            len(report.errors),
            len(report.warnings),
        )
        return report


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def check_system(
    core: TokenSystem,
    extensions: Sequence[PlatformExtension] = (),
    theme_override_files: Sequence[ThemeOverrideFile] = (),
    config: IntegrityConfig | None = None,
) -> IntegrityReport:
    return SystemIntegrityChecker(config).check_system(core, extensions, theme_override_files)


def check_platform_extension_with_core(
    core: TokenSystem, extension: PlatformExtension
) -> IntegrityReport:
    return SystemIntegrityChecker().check_platform_extension_with_core(core, extension)


def check_platform_extension_standalone(extension: PlatformExtension) -> IntegrityReport:
    return SystemIntegrityChecker().check_platform_extension_standalone(extension)


def check_syntax_pattern_ownership(
    core: TokenSystem, extensions: Sequence[PlatformExtension]
) -> IntegrityReport:
    return SystemIntegrityChecker().check_syntax_pattern_ownership(core, extensions)


def check_core_configuration(core: TokenSystem) -> IntegrityReport:
    return SystemIntegrityChecker().check_core_configuration(core)


def check_format_strings(
    core: TokenSystem, extensions: Sequence[PlatformExtension] = ()
) -> IntegrityReport:
    return SystemIntegrityChecker().check_format_strings(core, extensions)


def check_platform_extensions_registry(core: TokenSystem) -> IntegrityReport:
    return SystemIntegrityChecker().check_platform_extensions_registry(core)


def check_theme_override_file(core: TokenSystem, theme_file: ThemeOverrideFile) -> IntegrityReport:
    return SystemIntegrityChecker().check_theme_override_file(core, theme_file)
