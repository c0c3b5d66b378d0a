"""Space payloads and views."""
from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import Field, model_validator
from pydantic.alias_generators import to_camel

from catalog.db.models import Space
from .base import CamelModel

# Keys an update may omit but never set to null.
_NON_NULLABLE = ("name", "type_id", "alternate_names", "activities", "category_ids", "feature_ids")


class SpaceCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    type_id: UUID
    category_ids: list[UUID] | None = None
    feature_ids: list[UUID] | None = None
    alternate_names: list[str] = Field(default_factory=list)
    activities: list[str] = Field(default_factory=list)
    descriptions: str | None = None
    historical_context: str | None = None
    architectural_style: str | None = Field(default=None, max_length=100)
    operating_hours: Any = None
    entrance_fee: Any = None
    contact_info: Any = None
    accessibility: Any = None


class SpaceUpdate(CamelModel):
    """Partial update: only keys present in the request are applied."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    type_id: UUID | None = None
    category_ids: list[UUID] | None = None
    feature_ids: list[UUID] | None = None
    alternate_names: list[str] | None = None
    activities: list[str] | None = None
    descriptions: str | None = None
    historical_context: str | None = None
    architectural_style: str | None = Field(default=None, max_length=100)
    operating_hours: Any = None
    entrance_fee: Any = None
    contact_info: Any = None
    accessibility: Any = None

    @model_validator(mode="after")
    def _reject_explicit_nulls(self) -> "SpaceUpdate":
        for field in _NON_NULLABLE:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{to_camel(field)} cannot be null")
        return self

    def present(self, field: str) -> bool:
        return field in self.model_fields_set


class SpaceIdentity(CamelModel):
    id: UUID
    name: str
    slug: str


class SpaceRead(CamelModel):
    id: UUID
    name: str
    slug: str
    alternate_names: list[str]
    activities: list[str]
    descriptions: str | None = None
    historical_context: str | None = None
    architectural_style: str | None = None
    operating_hours: Any = None
    entrance_fee: Any = None
    contact_info: Any = None
    accessibility: Any = None
    submitted_by: UUID
    type_id: UUID
    type: str
    categories: list[str]
    features: list[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, entity: Space) -> "SpaceRead":
        return cls(
            id=entity.id,
            name=entity.name,
            slug=entity.slug,
            alternate_names=list(entity.alternate_names or []),
            activities=list(entity.activities or []),
            descriptions=entity.descriptions,
            historical_context=entity.historical_context,
            architectural_style=entity.architectural_style,
            operating_hours=entity.operating_hours,
            entrance_fee=entity.entrance_fee,
            contact_info=entity.contact_info,
            accessibility=entity.accessibility,
            submitted_by=entity.submitted_by,
            type_id=entity.type_id,
            type=entity.type.name,
            categories=[category.name for category in entity.categories],
            features=[feature.name for feature in entity.features],
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
