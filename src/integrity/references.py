"""
Referential Integrity — проверки ссылок между сущностями

Чистые функции над schema-valid моделями. Каждая возвращает список
человекочитаемых нарушений (пустой список = ссылки целостны).

Проверки:
- token → taxonomies/terms
- token → collection (существует и принимает resolvedValueTypeId)
- platform extension → modes/dimensions core каталога
- literal значения токена → ResolvedValueType
"""

from typing import Iterable, Optional, Sequence

from src.core.domain import (
    LiteralValue,
    PlatformExtension,
    ResolvedValueType,
    Taxonomy,
    Token,
    TokenCollection,
    TokenSystem,
    check_literal_value,
)


# =============================================================================
# TOKEN REFERENCES
# =============================================================================


def check_token_taxonomies(token: Token, taxonomies: Sequence[Taxonomy]) -> list[str]:
    """
    Каждая пара {taxonomyId, termId} токена должна разрешаться.

    Args:
        token: Проверяемый токен
        taxonomies: Taxonomies core каталога

    Returns:
        Список нарушений
    """
    by_id = {taxonomy.id: taxonomy for taxonomy in taxonomies}
    errors: list[str] = []

    for ref in token.taxonomies:
        taxonomy = by_id.get(ref.taxonomy_id)
        if taxonomy is None:
            errors.append(
                f"Token '{token.id}' references missing taxonomyId '{ref.taxonomy_id}'."
            )
            continue
        if taxonomy.find_term(ref.term_id) is None:
            errors.append(
                f"Token '{token.id}' references missing termId '{ref.term_id}' "
                f"in taxonomy '{taxonomy.id}'."
            )

    return errors


def check_token_collection(token: Token, collections: Sequence[TokenCollection]) -> list[str]:
    """
    Коллекция токена (если задана) существует и принимает его тип значения.

    Returns:
        Список нарушений (пустой, если tokenCollectionId не задан)
    """
    if token.token_collection_id is None:
        return []

    collection = next((c for c in collections if c.id == token.token_collection_id), None)
    if collection is None:
        return [
            f"Token '{token.id}' references non-existent collection "
            f"'{token.token_collection_id}'"
        ]

    if not collection.accepts(token.resolved_value_type_id):
        return [
            f"Token '{token.id}' has type '{token.resolved_value_type_id}' which is "
            f"not supported by collection '{collection.id}'"
        ]
    return []


def find_compatible_collection(
    token: Token, collections: Sequence[TokenCollection]
) -> Optional[TokenCollection]:
    """Первая коллекция, принимающая тип значения токена."""
    for collection in collections:
        if collection.accepts(token.resolved_value_type_id):
            return collection
    return None


def check_token_values(token: Token, value_types: Sequence[ResolvedValueType]) -> list[str]:
    """
    Literal значения токена против его ResolvedValueType.

    Alias значения ({tokenId}) не проверяются: их тип определяется
    целевым токеном.
    """
    value_type = next((vt for vt in value_types if vt.id == token.resolved_value_type_id), None)
    if value_type is None:
        return [
            f"Token '{token.id}' references non-existent resolvedValueTypeId "
            f"'{token.resolved_value_type_id}'"
        ]

    errors: list[str] = []
    for entry in token.values_by_mode:
        if not isinstance(entry.value, LiteralValue):
            continue
        mode_label = ",".join(entry.mode_ids) or "global"
        for violation in check_literal_value(entry.value.value, value_type):
            errors.append(f"Token '{token.id}' [{mode_label}]: {violation}")
    return errors


# =============================================================================
# MODE REFERENCES
# =============================================================================


def _unknown(ids: Iterable[str], known: set[str]) -> list[str]:
    return [i for i in ids if i not in known]


def check_mode_references(
    system: TokenSystem, extensions: Sequence[PlatformExtension]
) -> list[str]:
    """
    Все modeId в platform extensions должны принадлежать объявленным dimensions.

    Проверяются:
    - valuesByMode в tokenOverrides
    - valuesByMode в algorithmVariableOverrides
    - omittedModes
    - omittedDimensions (должны называть объявленные dimensions)
    """
    mode_ids = system.declared_mode_ids()
    dimension_ids = {dimension.id for dimension in system.dimensions}
    errors: list[str] = []

    for extension in extensions:
        for override in extension.token_overrides or []:
            for entry in override.values_by_mode:
                for mode_id in _unknown(entry.mode_ids, mode_ids):
                    errors.append(
                        f"Mode \"{mode_id}\" not found in core data for token \"{override.id}\""
                    )

        for algorithm_override in extension.algorithm_variable_overrides or []:
            label = f"{algorithm_override.algorithm_id}.{algorithm_override.variable_id}"
            for entry in algorithm_override.values_by_mode:
                for mode_id in _unknown(entry.mode_ids, mode_ids):
                    errors.append(
                        f"Mode \"{mode_id}\" not found in core data for algorithm override \"{label}\""
                    )

        for mode_id in _unknown(extension.omitted_modes or [], mode_ids):
            errors.append(f"Omitted mode \"{mode_id}\" not found in core data")

        for dimension_id in _unknown(extension.omitted_dimensions or [], dimension_ids):
            errors.append(f"Omitted dimension \"{dimension_id}\" not found in core data")

    return errors
