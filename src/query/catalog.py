"""
Token Catalog — read-only запросы к token system

Группы запросов:
- Отношения: токены по коллекции / типу значения / tier, совместимые коллекции,
  modes dimension
- Поиск: case-insensitive подстрока в имени или описании
- Структурная проверка кандидатов (token, collection, dimension) до admission
- Сводка по системе

TokenCatalog не изменяет TokenSystem и не кэширует производные данные.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel

from src.core.domain import (
    ID_PATTERN,
    Dimension,
    Mode,
    Token,
    TokenCollection,
    TokenSystem,
    TokenTier,
)


Candidate = Union[Mapping[str, Any], BaseModel]


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass(frozen=True)
class QueryIssue:
    """Замечание структурной проверки."""

    path: str
    message: str
    suggested_fix: Optional[str] = None


@dataclass(frozen=True)
class QueryValidationResult:
    is_valid: bool
    errors: list[QueryIssue] = field(default_factory=list)
    warnings: list[QueryIssue] = field(default_factory=list)


@dataclass(frozen=True)
class SystemInfo:
    system_name: str
    system_id: str
    version: str
    token_count: int
    collection_count: int
    dimension_count: int
    value_type_count: int


def _as_document(candidate: Candidate) -> Mapping[str, Any]:
    """Кандидат как camelCase документ (модели сериализуются)."""
    if isinstance(candidate, BaseModel):
        return candidate.model_dump(by_alias=True, exclude_none=True, mode="json")
    return candidate


def _is_valid_id(candidate_id: Any) -> bool:
    return isinstance(candidate_id, str) and re.match(ID_PATTERN, candidate_id) is not None


def _matches(query: str, *texts: Optional[str]) -> bool:
    needle = query.lower()
    return any(text is not None and needle in text.lower() for text in texts)


# =============================================================================
# CATALOG
# =============================================================================


class TokenCatalog:
    """Read-only доступ к token system."""

    def __init__(self, system: TokenSystem):
        self.system = system

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------

    def tokens_by_collection(self, collection_id: str) -> list[Token]:
        return [t for t in self.system.tokens if t.token_collection_id == collection_id]

    def tokens_by_value_type(self, value_type_id: str) -> list[Token]:
        return [t for t in self.system.tokens if t.resolved_value_type_id == value_type_id]

    def compatible_collections(self, value_type_id: str) -> list[TokenCollection]:
        return [c for c in self.system.token_collections if c.accepts(value_type_id)]

    def modes_by_dimension(self, dimension_id: str) -> list[Mode]:
        """Modes dimension (пустой список для неизвестного dimension)."""
        for dimension in self.system.dimensions:
            if dimension.id == dimension_id:
                return list(dimension.modes)
        return []

    def tokens_by_tier(self, tier: Union[TokenTier, str]) -> list[Token]:
        tier = TokenTier(tier)
        return [t for t in self.system.tokens if t.token_tier == tier]

    def private_tokens(self) -> list[Token]:
        return [t for t in self.system.tokens if t.private]

    def public_tokens(self) -> list[Token]:
        return [t for t in self.system.tokens if not t.private]

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def search_tokens(self, query: str) -> list[Token]:
        return [t for t in self.system.tokens if _matches(query, t.display_name, t.description)]

    def search_collections(self, query: str) -> list[TokenCollection]:
        return [
            c for c in self.system.token_collections if _matches(query, c.name, c.description)
        ]

    def search_dimensions(self, query: str) -> list[Dimension]:
        return [
            d for d in self.system.dimensions if _matches(query, d.display_name, d.description)
        ]

    # -------------------------------------------------------------------------
    # Structural validation
    # -------------------------------------------------------------------------

    def validate_token(self, candidate: Candidate) -> QueryValidationResult:
        """
        Структурная проверка кандидата в токены.

        Args:
            candidate: camelCase документ (возможно неполный) или Token

        Returns:
            QueryValidationResult (errors блокируют, warnings — рекомендации)
        """
        token = _as_document(candidate)
        errors: list[QueryIssue] = []
        warnings: list[QueryIssue] = []

        token_id = token.get("id")
        display_name = token.get("displayName")
        value_type_id = token.get("resolvedValueTypeId")
        collection_id = token.get("tokenCollectionId")

        if not token_id:
            errors.append(QueryIssue("id", "Token ID is required"))
        if not display_name:
            errors.append(QueryIssue("displayName", "Token display name is required"))
        if not value_type_id:
            errors.append(QueryIssue("resolvedValueTypeId", "Resolved value type ID is required"))
        if not token.get("tokenTier"):
            errors.append(QueryIssue("tokenTier", "Token tier is required"))

        if value_type_id and not any(
            vt.id == value_type_id for vt in self.system.resolved_value_types
        ):
            errors.append(
                QueryIssue(
                    "resolvedValueTypeId",
                    f"Resolved value type '{value_type_id}' does not exist",
                )
            )

        if collection_id:
            collection = next(
                (c for c in self.system.token_collections if c.id == collection_id), None
            )
            if collection is None:
                errors.append(
                    QueryIssue(
                        "tokenCollectionId", f"Token collection '{collection_id}' does not exist"
                    )
                )
            elif value_type_id and not collection.accepts(value_type_id):
                errors.append(
                    QueryIssue(
                        "tokenCollectionId",
                        f"Collection '{collection.name}' does not support value type "
                        f"'{value_type_id}'",
                    )
                )

        if token_id and not _is_valid_id(token_id):
            errors.append(
                QueryIssue(
                    "id",
                    "Token ID must contain only letters, numbers, hyphens, and underscores",
                )
            )

        if isinstance(display_name, str) and 0 < len(display_name) < 2:
            warnings.append(
                QueryIssue(
                    "displayName",
                    "Token display name should be at least 2 characters long",
                    suggested_fix="Use a more descriptive name",
                )
            )

        return QueryValidationResult(is_valid=not errors, errors=errors, warnings=warnings)

    def validate_collection(self, candidate: Candidate) -> QueryValidationResult:
        """Структурная проверка кандидата в коллекции."""
        collection = _as_document(candidate)
        errors: list[QueryIssue] = []

        collection_id = collection.get("id")
        value_type_ids = collection.get("resolvedValueTypeIds") or []

        if not collection_id:
            errors.append(QueryIssue("id", "Collection ID is required"))
        if not collection.get("name"):
            errors.append(QueryIssue("name", "Collection name is required"))
        if not value_type_ids:
            errors.append(
                QueryIssue(
                    "resolvedValueTypeIds",
                    "Collection must support at least one resolved value type",
                )
            )

        known = {vt.id for vt in self.system.resolved_value_types}
        for value_type_id in value_type_ids:
            if not isinstance(value_type_id, str) or value_type_id not in known:
                errors.append(
                    QueryIssue(
                        "resolvedValueTypeIds",
                        f"Resolved value type '{value_type_id}' does not exist",
                    )
                )

        if collection_id and not _is_valid_id(collection_id):
            errors.append(
                QueryIssue(
                    "id",
                    "Collection ID must contain only letters, numbers, hyphens, and underscores",
                )
            )

        return QueryValidationResult(is_valid=not errors, errors=errors)

    def validate_dimension(self, candidate: Candidate) -> QueryValidationResult:
        """Структурная проверка кандидата в dimensions."""
        dimension = _as_document(candidate)
        errors: list[QueryIssue] = []

        modes = dimension.get("modes") or []
        default_mode = dimension.get("defaultMode")

        if not dimension.get("id"):
            errors.append(QueryIssue("id", "Dimension ID is required"))
        if not dimension.get("displayName"):
            errors.append(QueryIssue("displayName", "Dimension display name is required"))
        if not modes:
            errors.append(QueryIssue("modes", "Dimension must have at least one mode"))
        if not default_mode:
            errors.append(QueryIssue("defaultMode", "Dimension must have a default mode"))

        if modes and default_mode:
            mode_ids = [mode.get("id") for mode in modes if isinstance(mode, Mapping)]
            if default_mode not in mode_ids:
                errors.append(
                    QueryIssue("defaultMode", "Default mode must be one of the dimension modes")
                )

        return QueryValidationResult(is_valid=not errors, errors=errors)

    # -------------------------------------------------------------------------
    # Summary
    # -------------------------------------------------------------------------

    def system_info(self) -> SystemInfo:
        return SystemInfo(
            system_name=self.system.system_name,
            system_id=self.system.system_id,
            version=self.system.version,
            token_count=len(self.system.tokens),
            collection_count=len(self.system.token_collections),
            dimension_count=len(self.system.dimensions),
            value_type_count=len(self.system.resolved_value_types),
        )
