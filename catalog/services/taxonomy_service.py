"""CRUD for the taxonomy tables a space links against."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Type, Union
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from catalog.core.logging import log_context
from catalog.db.models import Category, Feature, SpaceType
from catalog.domain.errors import ConflictError, NotFoundError
from catalog.repositories.taxonomy_repository import TaxonomyModel, TaxonomyRepository
from catalog.schemas.taxonomy import TaxonomyCreate, TaxonomyRead, TaxonomyUpdate
from catalog.schemas.base import parse_payload

logger = logging.getLogger(__name__)

TAXONOMY_MODELS: dict[str, Type[TaxonomyModel]] = {
    "type": SpaceType,
    "category": Category,
    "feature": Feature,
}


class TaxonomyService:
    """One instance per taxonomy kind ("type", "category", "feature")."""

    def __init__(self, session_factory: sessionmaker, kind: str) -> None:
        if kind not in TAXONOMY_MODELS:
            raise ValueError(f"Unknown taxonomy kind: {kind}")
        self.session_factory = session_factory
        self.kind = kind
        self.model = TAXONOMY_MODELS[kind]

    def _label(self) -> str:
        return "Space type" if self.kind == "type" else self.kind.capitalize()

    def list(self) -> list[TaxonomyRead]:
        with self.session_factory() as session:
            return [TaxonomyRead.model_validate(row) for row in TaxonomyRepository(session, self.model).list()]

    def get(self, entity_id: UUID) -> TaxonomyRead:
        with self.session_factory() as session:
            entity = TaxonomyRepository(session, self.model).get(entity_id)
            if entity is None:
                raise NotFoundError(f"{self._label()} {entity_id} not found")
            return TaxonomyRead.model_validate(entity)

    def create(self, payload: Union[TaxonomyCreate, Mapping[str, Any]]) -> TaxonomyRead:
        data = parse_payload(TaxonomyCreate, payload)
        try:
            with self.session_factory() as session, session.begin():
                entity = TaxonomyRepository(session, self.model).create(data.name, data.descriptions)
                result = TaxonomyRead.model_validate(entity)
        except IntegrityError as exc:
            raise ConflictError(f"{self._label()} '{data.name}' already exists", {"name": data.name}) from exc
        logger.info(f"{self.kind}.create.success", extra=log_context(taxonomy_id=str(result.id), taxonomy_name=result.name))
        return result

    def update(self, entity_id: UUID, payload: Union[TaxonomyUpdate, Mapping[str, Any]]) -> TaxonomyRead:
        data = parse_payload(TaxonomyUpdate, payload)
        values = data.model_dump(include=data.model_fields_set)
        try:
            with self.session_factory() as session, session.begin():
                repo = TaxonomyRepository(session, self.model)
                if repo.get(entity_id) is None:
                    raise NotFoundError(f"{self._label()} {entity_id} not found")
                repo.update_values(entity_id, values)
                session.expire_all()
                result = TaxonomyRead.model_validate(repo.get(entity_id))
        except IntegrityError as exc:
            raise ConflictError(f"{self._label()} '{data.name}' already exists", {"name": data.name}) from exc
        return result

    def delete(self, entity_id: UUID) -> TaxonomyRead:
        """Delete one row; the store cascades links (and spaces, for a type)."""
        with self.session_factory() as session, session.begin():
            repo = TaxonomyRepository(session, self.model)
            entity = repo.get(entity_id)
            if entity is None:
                raise NotFoundError(f"{self._label()} {entity_id} not found")
            result = TaxonomyRead.model_validate(entity)
            repo.delete(entity_id)
        logger.info(f"{self.kind}.delete.success", extra=log_context(taxonomy_id=str(entity_id)))
        return result
