"""
Taxonomy — Контролируемые словари для классификации токенов

Токен ссылается на термины парами {taxonomyId, termId}.
"""

from typing import Optional

from pydantic import Field

from .base import DomainModel


class TaxonomyTerm(DomainModel):
    id: str = Field(..., min_length=1, description="Идентификатор термина")
    name: str = Field(..., description="Имя термина")
    description: Optional[str] = None


class Taxonomy(DomainModel):
    """Словарь терминов."""

    id: str = Field(..., min_length=1, description="Идентификатор taxonomy")
    name: str = Field(..., description="Имя taxonomy")
    description: str = Field(..., description="Описание")
    terms: list[TaxonomyTerm] = Field(default_factory=list, description="Термины")
    resolved_value_type_ids: Optional[list[str]] = None

    def find_term(self, term_id: str) -> Optional[TaxonomyTerm]:
        """Поиск термина по id (None если не найден)."""
        for term in self.terms:
            if term.id == term_id:
                return term
        return None
