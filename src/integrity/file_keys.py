"""
Figma File Keys — уникальность ключей внешних файлов

Каждый platform extension (и каждый theme override file) публикуется
в собственный внешний файл, поэтому figmaFileKey:
- обязателен у каждого platform extension
- уникален среди всех extensions и theme override files

Две формы проверки:
- check_figma_file_keys — список нарушений (для отчётов)
- ensure_unique_figma_file_keys — hard precondition merge (raise)
"""

from typing import Sequence

from src.core.domain import PlatformExtension, ThemeOverrideFile


# =============================================================================
# EXCEPTIONS
# =============================================================================


class ConfigurationIntegrityError(Exception):
    """Нарушение конфигурации, при котором merge невозможен."""


class DuplicateFigmaFileKeyError(ConfigurationIntegrityError):
    def __init__(self, file_key: str):
        self.file_key = file_key
        super().__init__(
            f"Duplicate figmaFileKey found: {file_key}. "
            "Each platform extension must have a unique Figma file key."
        )


class MissingFigmaFileKeyError(ConfigurationIntegrityError):
    def __init__(self, platform_id: str):
        self.platform_id = platform_id
        super().__init__(f"Platform extension {platform_id} must have a figmaFileKey")


# =============================================================================
# CHECKS
# =============================================================================


def check_figma_file_keys(
    extensions: Sequence[PlatformExtension],
    theme_override_files: Sequence[ThemeOverrideFile] = (),
) -> list[str]:
    """
    Нарушения уникальности figmaFileKey.

    Args:
        extensions: Platform extensions (ключ обязателен)
        theme_override_files: Theme override files (ключ опционален)

    Returns:
        Список нарушений; каждый дубликат сообщается один раз
    """
    errors: list[str] = []
    seen: set[str] = set()
    reported: set[str] = set()

    def register(file_key: str) -> None:
        if file_key in seen:
            if file_key not in reported:
                errors.append(str(DuplicateFigmaFileKeyError(file_key)))
                reported.add(file_key)
            return
        seen.add(file_key)

    for extension in extensions:
        if not extension.figma_file_key:
            errors.append(str(MissingFigmaFileKeyError(extension.platform_id)))
            continue
        register(extension.figma_file_key)

    for theme_file in theme_override_files:
        if theme_file.figma_file_key:
            register(theme_file.figma_file_key)

    return errors


def ensure_unique_figma_file_keys(extensions: Sequence[PlatformExtension]) -> None:
    """
    Hard precondition merge: у каждого extension свой непустой figmaFileKey.

    Raises:
        MissingFigmaFileKeyError: Extension без ключа
        DuplicateFigmaFileKeyError: Ключ встречается повторно
    """
    seen: set[str] = set()
    for extension in extensions:
        if not extension.figma_file_key:
            raise MissingFigmaFileKeyError(extension.platform_id)
        if extension.figma_file_key in seen:
            raise DuplicateFigmaFileKeyError(extension.figma_file_key)
        seen.add(extension.figma_file_key)
