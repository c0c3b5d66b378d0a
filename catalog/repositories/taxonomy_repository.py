"""Single-table CRUD for space types, categories and features."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Collection, Optional, Type, Union
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from catalog.db.models import Category, Feature, SpaceType

TaxonomyModel = Union[SpaceType, Category, Feature]


class TaxonomyRepository:
    """CRUD helpers for one taxonomy table, bound to the caller's session."""

    def __init__(self, session: Session, model: Type[TaxonomyModel]) -> None:
        self.session = session
        self.model = model

    def exists_by_id(self, entity_id: UUID) -> bool:
        stmt = select(self.model.id).where(self.model.id == entity_id).limit(1)
        return self.session.execute(stmt).first() is not None

    def existing_ids(self, ids: Collection[UUID]) -> set[UUID]:
        if not ids:
            return set()
        stmt = select(self.model.id).where(self.model.id.in_(list(ids)))
        return set(self.session.execute(stmt).scalars().all())

    def get(self, entity_id: UUID) -> Optional[TaxonomyModel]:
        return self.session.get(self.model, entity_id)

    def list(self) -> list[TaxonomyModel]:
        stmt = select(self.model).order_by(self.model.name)
        return list(self.session.execute(stmt).scalars().all())

    def create(self, name: str, descriptions: str | None = None) -> TaxonomyModel:
        now = datetime.now(timezone.utc)
        entity = self.model(name=name, descriptions=descriptions, created_at=now, updated_at=now)
        self.session.add(entity)
        self.session.flush()
        return entity

    def update_values(self, entity_id: UUID, values: dict) -> int:
        values = {**values, "updated_at": datetime.now(timezone.utc)}
        stmt = update(self.model).where(self.model.id == entity_id).values(**values)
        return self.session.execute(stmt).rowcount

    def delete(self, entity_id: UUID) -> int:
        return self.session.execute(delete(self.model).where(self.model.id == entity_id)).rowcount
