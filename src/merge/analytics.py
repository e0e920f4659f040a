"""
Merge Analytics — счётчики результата merge

overridden_tokens — core токены, у которых изменились valuesByMode
new_tokens        — токены, отсутствующие в core
omitted_tokens    — total - merged + new
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from src.core.domain import PlatformExtension, ThemeOverrides, Token
from src.merge.results import MergeAnalytics


@dataclass(frozen=True)
class ThemeLayerCounters:
    """Счётчики theme layer (считаются по применённым buckets)."""

    total: int = 0
    excluded: int = 0
    invalid_buckets: int = 0


def _values_signature(token: Token) -> list:
    return [entry.to_dict() for entry in token.values_by_mode]


def compute_analytics(
    core_tokens: Sequence[Token],
    merged_tokens: Sequence[Token],
    extensions: Sequence[PlatformExtension],
    theme_overrides: Optional[ThemeOverrides],
    theme_counters: ThemeLayerCounters,
    rejected_new_tokens: int = 0,
) -> MergeAnalytics:
    """
    Подсчёт аналитики merge.

    Args:
        core_tokens: Токены core каталога
        merged_tokens: Итоговые токены
        extensions: ВСЕ переданные extensions (platform_count до фильтра)
        theme_overrides: Входные theme overrides (theme_count до фильтра)
        theme_counters: Счётчики theme layer
        rejected_new_tokens: Отклонённые добавления токенов

    Returns:
        MergeAnalytics
    """
    core_by_id = {token.id: token for token in core_tokens}

    overridden = 0
    new = 0
    for token in merged_tokens:
        original = core_by_id.get(token.id)
        if original is None:
            new += 1
        elif _values_signature(original) != _values_signature(token):
            overridden += 1

    return MergeAnalytics(
        total_tokens=len(core_tokens),
        overridden_tokens=overridden,
        new_tokens=new,
        omitted_tokens=len(core_tokens) - len(merged_tokens) + new,
        platform_count=len(extensions),
        theme_count=len(theme_overrides) if theme_overrides else 0,
        total_theme_overrides=theme_counters.total,
        excluded_theme_overrides=theme_counters.excluded,
        valid_theme_overrides=theme_counters.total - theme_counters.excluded,
        invalid_theme_buckets=theme_counters.invalid_buckets,
        rejected_new_tokens=rejected_new_tokens,
    )
