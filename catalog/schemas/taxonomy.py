"""Payloads shared by space types, categories and features."""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field, model_validator

from .base import CamelModel


class TaxonomyCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    descriptions: str | None = None


class TaxonomyUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    descriptions: str | None = None

    @model_validator(mode="after")
    def _name_not_null(self) -> "TaxonomyUpdate":
        if "name" in self.model_fields_set and self.name is None:
            raise ValueError("name cannot be null")
        return self


class TaxonomyRead(CamelModel):
    id: UUID
    name: str
    descriptions: str | None = None
    created_at: datetime
    updated_at: datetime
