"""
Platform accessors — правила платформ и ключи внешних файлов

syntaxPatterns / valueFormatters платформ с extensionSource живут в
platform extension; здесь они читаются из extension данной платформы.
"""

from typing import Final, Optional, Sequence

from src.core.domain import (
    ExtensionSyntaxPatterns,
    PlatformExtension,
    ThemeOverrideFile,
    TokenSystem,
    ValueFormatters,
)
from src.integrity.file_keys import MissingFigmaFileKeyError


# Ключ core файла, если figmaConfiguration не задана
DEFAULT_FIGMA_FILE_KEY: Final[str] = "default-figma-file"


class MissingThemeFileKeyError(Exception):
    def __init__(self, theme_id: str):
        self.theme_id = theme_id
        super().__init__(f"Theme override file {theme_id} must have a figmaFileKey")


def _find_extension(
    extensions: Sequence[PlatformExtension], platform_id: str
) -> Optional[PlatformExtension]:
    return next((ext for ext in extensions if ext.platform_id == platform_id), None)


def get_syntax_patterns_for_platform(
    extensions: Sequence[PlatformExtension], platform_id: str
) -> Optional[ExtensionSyntaxPatterns]:
    extension = _find_extension(extensions, platform_id)
    return extension.syntax_patterns if extension else None


def get_value_formatters_for_platform(
    extensions: Sequence[PlatformExtension], platform_id: str
) -> Optional[ValueFormatters]:
    extension = _find_extension(extensions, platform_id)
    return extension.value_formatters if extension else None


def get_figma_file_key_for_platform(
    core: TokenSystem, extensions: Sequence[PlatformExtension], platform_id: Optional[str]
) -> str:
    """
    Ключ внешнего файла платформы.

    Без platform_id возвращается ключ core токенов (figmaConfiguration.fileKey
    или DEFAULT_FIGMA_FILE_KEY).

    Raises:
        MissingFigmaFileKeyError: У extension платформы нет ключа (или нет extension)
    """
    if not platform_id:
        if core.figma_configuration and core.figma_configuration.file_key:
            return core.figma_configuration.file_key
        return DEFAULT_FIGMA_FILE_KEY

    extension = _find_extension(extensions, platform_id)
    if extension is None or not extension.figma_file_key:
        raise MissingFigmaFileKeyError(platform_id)
    return extension.figma_file_key


def get_figma_file_key_for_theme_override(theme_file: ThemeOverrideFile) -> str:
    """
    Raises:
        MissingThemeFileKeyError: У файла нет figmaFileKey
    """
    if not theme_file.figma_file_key:
        raise MissingThemeFileKeyError(theme_file.theme_id)
    return theme_file.figma_file_key
