"""
Merge Options / Results — конфигурация и результат merge

Frozen dataclasses:
- MergeOptions   — выбор платформы/темы, include_omitted
- MergeAnalytics — счётчики merge
- MergedData     — core + применённые overlays + итоговый каталог

to_dict() возвращает JSON-совместимую camelCase форму.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from src.core.domain import Platform, PlatformExtension, ThemeOverrides, Token, TokenSystem


# =============================================================================
# OPTIONS
# =============================================================================


@dataclass(frozen=True)
class MergeOptions:
    """
    Параметры merge.

    target_platform_id: применять только extensions этой платформы
    target_theme_id: применять только overrides этой темы
    include_omitted: игнорировать omit в token overrides
    """

    target_platform_id: Optional[str] = None
    target_theme_id: Optional[str] = None
    include_omitted: bool = False


# =============================================================================
# RESULTS
# =============================================================================


@dataclass(frozen=True)
class MergeAnalytics:
    """Счётчики merge."""

    total_tokens: int  # Токенов в core
    overridden_tokens: int  # Core токены с изменёнными valuesByMode
    new_tokens: int  # Токены, добавленные platform extensions
    omitted_tokens: int  # total - merged + new
    platform_count: int  # Все переданные extensions (до фильтра)
    theme_count: int  # Все темы во входных overrides (до фильтра)

    # Theme layer
    total_theme_overrides: int = 0
    excluded_theme_overrides: int = 0
    valid_theme_overrides: int = 0
    invalid_theme_buckets: int = 0

    # Platform additions, не образующие валидный Token
    rejected_new_tokens: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "totalTokens": self.total_tokens,
            "overriddenTokens": self.overridden_tokens,
            "newTokens": self.new_tokens,
            "omittedTokens": self.omitted_tokens,
            "platformCount": self.platform_count,
            "themeCount": self.theme_count,
            "totalThemeOverrides": self.total_theme_overrides,
            "excludedThemeOverrides": self.excluded_theme_overrides,
            "validThemeOverrides": self.valid_theme_overrides,
            "invalidThemeBuckets": self.invalid_theme_buckets,
            "rejectedNewTokens": self.rejected_new_tokens,
        }


@dataclass(frozen=True)
class MergedData:
    """
    Результат merge.

    core и входные overlays сохраняются без изменений; merged_tokens и
    merged_platforms — новые списки.
    """

    core: TokenSystem
    platform_extensions: list[PlatformExtension]
    theme_overrides: Optional[ThemeOverrides]
    merged_tokens: list[Token]
    merged_platforms: list[Platform]
    omitted_modes: list[str] = field(default_factory=list)
    omitted_dimensions: list[str] = field(default_factory=list)
    analytics: Optional[MergeAnalytics] = None

    def find_token(self, token_id: str) -> Optional[Token]:
        for token in self.merged_tokens:
            if token.id == token_id:
                return token
        return None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "core": self.core.to_dict(),
            "platformExtensions": [ext.to_dict() for ext in self.platform_extensions],
            "mergedTokens": [token.to_dict() for token in self.merged_tokens],
            "mergedPlatforms": [platform.to_dict() for platform in self.merged_platforms],
            "omittedModes": list(self.omitted_modes),
            "omittedDimensions": list(self.omitted_dimensions),
        }
        if self.theme_overrides is not None:
            data["themeOverrides"] = {
                theme_id: [override.to_dict() for override in overrides]
                for theme_id, overrides in self.theme_overrides.items()
                if isinstance(overrides, list)
            }
        if self.analytics is not None:
            data["analytics"] = self.analytics.to_dict()
        return data
