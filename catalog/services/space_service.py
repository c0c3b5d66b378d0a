"""
Space lifecycle use cases.

Each mutation runs as one transaction covering the space row and its
association rows: taxonomy checks, slug allocation, the row write and the
association sync either all commit or all roll back. Reads open a plain
session and return fully resolved views.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Union
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from catalog.core.logging import log_context
from catalog.db.models import Space
from catalog.domain.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InternalConsistencyError,
    NotFoundError,
    ValidationError,
)
from catalog.repositories.space_repository import SpaceRepository
from catalog.schemas.base import parse_payload
from catalog.schemas.spaces import SpaceCreate, SpaceIdentity, SpaceRead, SpaceUpdate
from catalog.services.associations import replace_associations
from catalog.services.slug_service import SlugService
from catalog.services.taxonomy_validator import TaxonomyValidator

logger = logging.getLogger(__name__)

# Columns an update copies straight from the payload when the key is present.
_PLAIN_FIELDS = (
    "alternate_names",
    "activities",
    "descriptions",
    "historical_context",
    "architectural_style",
    "operating_hours",
    "entrance_fee",
    "contact_info",
    "accessibility",
)


def _as_uuid(value: Union[UUID, str, None]) -> Optional[UUID]:
    if value is None or isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None


def _integrity_failure(exc: IntegrityError, slug: Optional[str]) -> Exception:
    text = str(getattr(exc, "orig", exc)).lower()
    if "foreign key" in text:
        return ValidationError("A referenced record no longer exists")
    if slug is None:
        return ConflictError("The space conflicts with an existing record")
    return ConflictError(f"Slug '{slug}' is already taken", {"slug": slug})


class SpaceService:
    """Transaction coordinator for spaces."""

    def __init__(self, session_factory: sessionmaker, *, slug_max_attempts: int = 100) -> None:
        self.session_factory = session_factory
        self.slug_max_attempts = slug_max_attempts

    # -------------------------------------- helpers --------------------------------------
    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    def _requester(self, requester_id: Union[UUID, str, None]) -> UUID:
        resolved = _as_uuid(requester_id)
        if resolved is None:
            raise AuthenticationError("Authentication required")
        return resolved

    def _load_owned(self, repo: SpaceRepository, requester: UUID, space_id: Union[UUID, str]) -> Space:
        target = _as_uuid(space_id)
        existing = repo.get(target, for_update=True) if target is not None else None
        if existing is None:
            raise NotFoundError(f"Space {space_id} not found")
        if existing.submitted_by != requester:
            logger.info("space.ownership.denied", extra=log_context(space_id=existing.id, user_id=requester))
            raise AuthorizationError("Only the owner can modify this space")
        return existing

    # -------------------------------------- mutations --------------------------------------
    def create_space(
        self,
        requester_id: Union[UUID, str, None],
        payload: Union[SpaceCreate, Mapping[str, Any]],
    ) -> SpaceIdentity:
        requester = self._requester(requester_id)
        data = parse_payload(SpaceCreate, payload)
        slug: Optional[str] = None
        try:
            with self.session_factory() as session, session.begin():
                repo = SpaceRepository(session)
                TaxonomyValidator(session).validate(
                    type_id=data.type_id,
                    category_ids=data.category_ids,
                    feature_ids=data.feature_ids,
                )
                slug = SlugService(repo, max_attempts=self.slug_max_attempts).generate_unique_slug(data.name)
                now = self._now()
                entity = repo.add(
                    Space(
                        name=data.name,
                        slug=slug,
                        alternate_names=list(data.alternate_names),
                        activities=list(data.activities),
                        descriptions=data.descriptions,
                        historical_context=data.historical_context,
                        architectural_style=data.architectural_style,
                        operating_hours=data.operating_hours,
                        entrance_fee=data.entrance_fee,
                        contact_info=data.contact_info,
                        accessibility=data.accessibility,
                        submitted_by=requester,
                        type_id=data.type_id,
                        created_at=now,
                        updated_at=now,
                    )
                )
                replace_associations(repo, entity.id, data.category_ids, data.feature_ids)
                result = SpaceIdentity(id=entity.id, name=entity.name, slug=entity.slug)
        except IntegrityError as exc:
            logger.warning("space.create.conflict", extra=log_context(user_id=requester, slug=slug))
            raise _integrity_failure(exc, slug) from exc
        logger.info("space.create.success", extra=log_context(space_id=result.id, user_id=requester, slug=result.slug))
        return result

    def update_space(
        self,
        requester_id: Union[UUID, str, None],
        space_id: Union[UUID, str],
        payload: Union[SpaceUpdate, Mapping[str, Any]],
    ) -> SpaceRead:
        requester = self._requester(requester_id)
        data = parse_payload(SpaceUpdate, payload)
        slug: Optional[str] = None
        try:
            with self.session_factory() as session, session.begin():
                repo = SpaceRepository(session)
                existing = self._load_owned(repo, requester, space_id)

                values: dict[str, Any] = {
                    field: getattr(data, field) for field in _PLAIN_FIELDS if data.present(field)
                }
                if data.present("name") and data.name != existing.name:
                    slug = SlugService(repo, max_attempts=self.slug_max_attempts).generate_unique_slug(
                        data.name, exclude_space_id=existing.id
                    )
                    values["name"] = data.name
                    values["slug"] = slug
                type_changed = data.present("type_id") and data.type_id != existing.type_id
                if type_changed:
                    values["type_id"] = data.type_id

                category_ids = data.category_ids if data.present("category_ids") else None
                feature_ids = data.feature_ids if data.present("feature_ids") else None
                TaxonomyValidator(session).validate(
                    type_id=data.type_id if type_changed else None,
                    category_ids=category_ids,
                    feature_ids=feature_ids,
                )

                values["updated_at"] = self._now()
                if repo.update_values(existing.id, values) != 1:
                    raise InternalConsistencyError(f"Space {existing.id} disappeared during update")
                replace_associations(repo, existing.id, category_ids, feature_ids)
                result = SpaceRead.from_entity(repo.get_detailed(existing.id))
        except IntegrityError as exc:
            logger.warning("space.update.conflict", extra=log_context(space_id=space_id, slug=slug))
            raise _integrity_failure(exc, slug) from exc
        logger.info(
            "space.update.success",
            extra=log_context(space_id=result.id, user_id=requester, fields=",".join(sorted(data.model_fields_set))),
        )
        return result

    def delete_space(self, requester_id: Union[UUID, str, None], space_id: Union[UUID, str]) -> SpaceIdentity:
        requester = self._requester(requester_id)
        with self.session_factory() as session, session.begin():
            repo = SpaceRepository(session)
            existing = self._load_owned(repo, requester, space_id)
            result = SpaceIdentity(id=existing.id, name=existing.name, slug=existing.slug)
            # Association rows go with it through ON DELETE CASCADE.
            if repo.delete(existing.id) != 1:
                raise InternalConsistencyError(f"Space {existing.id} disappeared during delete")
        logger.info("space.delete.success", extra=log_context(space_id=result.id, user_id=requester))
        return result

    # -------------------------------------- reads --------------------------------------
    def get_space(self, id_or_slug: Union[UUID, str]) -> SpaceRead:
        with self.session_factory() as session:
            repo = SpaceRepository(session)
            entity = None
            space_id = _as_uuid(id_or_slug)
            if space_id is not None:
                entity = repo.get_detailed(space_id)
            if entity is None:
                entity = repo.get_detailed_by_slug(str(id_or_slug))
            if entity is None:
                raise NotFoundError(f"Space {id_or_slug} not found")
            return SpaceRead.from_entity(entity)

    def list_spaces(self, *, submitted_by: Union[UUID, str, None] = None) -> list[SpaceRead]:
        owner = _as_uuid(submitted_by)
        if submitted_by is not None and owner is None:
            return []
        with self.session_factory() as session:
            entities = SpaceRepository(session).list_detailed(submitted_by=owner)
            return [SpaceRead.from_entity(entity) for entity in entities]
