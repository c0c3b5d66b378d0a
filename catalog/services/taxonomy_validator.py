"""Referential checks against the taxonomy tables before a space is written."""

from __future__ import annotations

from typing import Iterable, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from catalog.db.models import Category, Feature, SpaceType
from catalog.domain.errors import ValidationError
from catalog.repositories.taxonomy_repository import TaxonomyRepository


def unique_ids(ids: Iterable[UUID]) -> list[UUID]:
    """Drop repeated ids, keeping the first occurrence."""
    return list(dict.fromkeys(ids))


class TaxonomyValidator:
    """Runs inside the caller's session so checks share the write transaction."""

    def __init__(self, session: Session) -> None:
        self.types = TaxonomyRepository(session, SpaceType)
        self.categories = TaxonomyRepository(session, Category)
        self.features = TaxonomyRepository(session, Feature)

    def validate(
        self,
        *,
        type_id: Optional[UUID] = None,
        category_ids: Optional[Iterable[UUID]] = None,
        feature_ids: Optional[Iterable[UUID]] = None,
    ) -> None:
        if type_id is not None and not self.types.exists_by_id(type_id):
            raise ValidationError(f"Space type {type_id} does not exist", {"typeId": str(type_id)})

        missing: dict[str, list[str]] = {}
        if category_ids is not None:
            requested = unique_ids(category_ids)
            found = self.categories.existing_ids(requested)
            absent = [str(item) for item in requested if item not in found]
            if absent:
                missing["categoryIds"] = absent
        if feature_ids is not None:
            requested = unique_ids(feature_ids)
            found = self.features.existing_ids(requested)
            absent = [str(item) for item in requested if item not in found]
            if absent:
                missing["featureIds"] = absent
        if missing:
            parts = [f"{key}: {', '.join(values)}" for key, values in missing.items()]
            raise ValidationError("Unknown taxonomy ids (" + "; ".join(parts) + ")", missing)
