"""
Resolution / Merge Engine — core → platform extensions → theme overrides.

Фиксированный трёхуровневый приоритет (theme > platform > core) с фиксированными
правилами разрешения конфликтов. Не является общим JSON deep-merge.
"""

from .analytics import ThemeLayerCounters, compute_analytics
from .engine import TokenMergeEngine, merge_data
from .modes import (
    default_mode_ids,
    filter_tokens_by_omissions,
    merge_values_by_mode,
    normalize_values_by_mode,
    resolve_mode_combination,
)
from .results import MergeAnalytics, MergedData, MergeOptions

__all__ = [
    # Engine
    "TokenMergeEngine",
    "merge_data",
    # Options / results
    "MergeOptions",
    "MergeAnalytics",
    "MergedData",
    "ThemeLayerCounters",
    "compute_analytics",
    # Mode combinations
    "default_mode_ids",
    "resolve_mode_combination",
    "merge_values_by_mode",
    "normalize_values_by_mode",
    "filter_tokens_by_omissions",
]
