"""Data access for spaces and their association rows."""
from __future__ import annotations

from typing import Iterable, Optional
from uuid import UUID

from sqlalchemy import delete, insert, select, update
from sqlalchemy.orm import Session, selectinload

from catalog.db.models import Space, SpaceToCategory, SpaceToFeature


def _with_taxonomy(stmt):
    # Refresh rows already in the identity map; writes in the same
    # transaction go through Core statements.
    return stmt.options(
        selectinload(Space.type),
        selectinload(Space.categories),
        selectinload(Space.features),
    ).execution_options(populate_existing=True)


class SpaceRepository:
    """Statements over the ``space`` table, bound to the caller's session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    # -------------------------- reads --------------------------
    def get(self, space_id: UUID, *, for_update: bool = False) -> Optional[Space]:
        stmt = select(Space).where(Space.id == space_id)
        if for_update:
            stmt = stmt.with_for_update()
        return self.session.execute(stmt).scalar_one_or_none()

    def get_detailed(self, space_id: UUID) -> Optional[Space]:
        stmt = _with_taxonomy(select(Space).where(Space.id == space_id))
        return self.session.execute(stmt).scalar_one_or_none()

    def get_detailed_by_slug(self, slug: str) -> Optional[Space]:
        stmt = _with_taxonomy(select(Space).where(Space.slug == slug))
        return self.session.execute(stmt).scalar_one_or_none()

    def list_detailed(self, *, submitted_by: UUID | None = None) -> list[Space]:
        stmt = select(Space).order_by(Space.created_at, Space.id)
        if submitted_by is not None:
            stmt = stmt.where(Space.submitted_by == submitted_by)
        return list(self.session.execute(_with_taxonomy(stmt)).scalars().all())

    def slug_exists(self, slug: str, *, exclude_id: UUID | None = None) -> bool:
        stmt = select(Space.id).where(Space.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(Space.id != exclude_id)
        return self.session.execute(stmt.limit(1)).first() is not None

    # -------------------------- writes --------------------------
    def add(self, entity: Space) -> Space:
        self.session.add(entity)
        self.session.flush()
        return entity

    def update_values(self, space_id: UUID, values: dict) -> int:
        stmt = update(Space).where(Space.id == space_id).values(**values)
        return self.session.execute(stmt).rowcount

    def delete(self, space_id: UUID) -> int:
        return self.session.execute(delete(Space).where(Space.id == space_id)).rowcount

    # -------------------------- associations --------------------------
    def clear_categories(self, space_id: UUID) -> None:
        self.session.execute(delete(SpaceToCategory).where(SpaceToCategory.space_id == space_id))

    def add_categories(self, space_id: UUID, category_ids: Iterable[UUID]) -> None:
        rows = [{"space_id": space_id, "category_id": category_id} for category_id in category_ids]
        if rows:
            self.session.execute(insert(SpaceToCategory), rows)

    def clear_features(self, space_id: UUID) -> None:
        self.session.execute(delete(SpaceToFeature).where(SpaceToFeature.space_id == space_id))

    def add_features(self, space_id: UUID, feature_ids: Iterable[UUID]) -> None:
        rows = [{"space_id": space_id, "feature_id": feature_id} for feature_id in feature_ids]
        if rows:
            self.session.execute(insert(SpaceToFeature), rows)

    def category_ids(self, space_id: UUID) -> set[UUID]:
        stmt = select(SpaceToCategory.category_id).where(SpaceToCategory.space_id == space_id)
        return set(self.session.execute(stmt).scalars().all())

    def feature_ids(self, space_id: UUID) -> set[UUID]:
        stmt = select(SpaceToFeature.feature_id).where(SpaceToFeature.space_id == space_id)
        return set(self.session.execute(stmt).scalars().all())
