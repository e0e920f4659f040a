"""
Mode Combination Merge — слияние valuesByMode

Комбинация modes сравнивается как множество (порядок modeIds не важен).
Глобальная запись (modeIds = []) эквивалентна комбинации default modes:
D = {defaultMode каждого dimension}.

merge_values_by_mode(existing, incoming, dimensions):
1. Для каждой incoming записи целевая комбинация = D если modeIds пуст,
   иначе set(modeIds)
2. Совпадение с существующей записью (по тому же правилу) → value заменяется,
   metadata/platformOverrides: incoming если задано, иначе существующее;
   modeIds существующей записи сохраняются
3. Нет совпадения → запись добавляется в конец
4. Нормализация: глобальная запись рядом с mode-specific записями
   материализуется на D (modeIds в порядке объявления dimensions)

Инвариант valuesByMode сохраняется после каждого шага. Dimensions передаются
явно; модуль не хранит состояния.
"""

import logging
from typing import Sequence

from src.core.domain import Dimension, Token, ValueByMode


logger = logging.getLogger(__name__)


# =============================================================================
# MODE COMBINATIONS
# =============================================================================


def default_mode_ids(dimensions: Sequence[Dimension]) -> list[str]:
    """defaultMode каждого dimension в порядке объявления."""
    return [dimension.default_mode for dimension in dimensions]


def resolve_mode_combination(
    mode_ids: Sequence[str], dimensions: Sequence[Dimension]
) -> frozenset[str]:
    """
    Комбинация modes записи как множество.

    Пустой modeIds разрешается в комбинацию default modes.
    """
    if not mode_ids:
        return frozenset(default_mode_ids(dimensions))
    return frozenset(mode_ids)


def _find_match(
    entries: Sequence[ValueByMode], target: frozenset[str], dimensions: Sequence[Dimension]
) -> int:
    for index, entry in enumerate(entries):
        if resolve_mode_combination(entry.mode_ids, dimensions) == target:
            return index
    return -1


# =============================================================================
# MERGE
# =============================================================================


def merge_values_by_mode(
    existing: Sequence[ValueByMode],
    incoming: Sequence[ValueByMode],
    dimensions: Sequence[Dimension],
) -> list[ValueByMode]:
    """
    Слияние incoming записей в существующие valuesByMode.

    Args:
        existing: Текущие записи токена
        incoming: Записи overlay (platform или theme)
        dimensions: Dimensions core каталога (источник default modes)

    Returns:
        Новый список записей; входные списки не изменяются
    """
    result = list(existing)

    for entry in incoming:
        target = resolve_mode_combination(entry.mode_ids, dimensions)
        index = _find_match(result, target, dimensions)

        if index == -1:
            result.append(entry)
            continue

        current = result[index]
        result[index] = current.model_copy(
            update={
                "value": entry.value,
                "metadata": entry.metadata if entry.metadata is not None else current.metadata,
                "platform_overrides": (
                    entry.platform_overrides
                    if entry.platform_overrides is not None
                    else current.platform_overrides
                ),
            }
        )

    return normalize_values_by_mode(result, dimensions)


def normalize_values_by_mode(
    entries: Sequence[ValueByMode], dimensions: Sequence[Dimension]
) -> list[ValueByMode]:
    """
    Восстановление инварианта valuesByMode.

    Глобальная запись, оказавшаяся рядом с mode-specific записями,
    переносится на комбинацию default modes. Если default modes нет или
    такая комбинация уже задана явно, глобальная запись отбрасывается.
    Повторный вызов ничего не меняет.
    """
    has_specific = any(not entry.is_global() for entry in entries)
    if not has_specific or not any(entry.is_global() for entry in entries):
        return list(entries)

    defaults = default_mode_ids(dimensions)
    specific_sets = {entry.mode_set() for entry in entries if not entry.is_global()}

    normalized: list[ValueByMode] = []
    for entry in entries:
        if not entry.is_global():
            normalized.append(entry)
        elif not defaults:
            logger.warning("Dropping global value: no default modes to materialize it onto")
        elif frozenset(defaults) in specific_sets:
            logger.warning(
                "Dropping global value: default combination %s is already defined", defaults
            )
        else:
            normalized.append(entry.model_copy(update={"mode_ids": list(defaults)}))
    return normalized


# =============================================================================
# OMISSIONS
# =============================================================================


def filter_tokens_by_omissions(tokens: Sequence[Token], omitted_modes: Sequence[str]) -> list[Token]:
    """Токены без значений в omitted modes."""
    omitted = set(omitted_modes)
    return [
        token
        for token in tokens
        if not any(omitted.intersection(entry.mode_ids) for entry in token.values_by_mode)
    ]
