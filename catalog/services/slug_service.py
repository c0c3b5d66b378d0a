"""Slug allocation for spaces."""

from __future__ import annotations

import logging
from uuid import UUID

from catalog.core.logging import log_context
from catalog.domain.errors import ConflictError, ValidationError
from catalog.domain.slugs import slugify, with_suffix
from catalog.repositories.space_repository import SpaceRepository

logger = logging.getLogger(__name__)


class SlugService:
    """Derives a unique slug from a display name.

    The check-then-use sequence is racy by nature; the unique constraint on
    ``space.slug`` has the final word and the coordinator reports a lost race
    as a conflict.
    """

    def __init__(self, repository: SpaceRepository, *, max_attempts: int = 100) -> None:
        self.repository = repository
        self.max_attempts = max(1, max_attempts)

    def normalize(self, value: str | None) -> str:
        base = slugify(value)
        if not base:
            raise ValidationError("Name must contain at least one letter or digit", {"name": value})
        return base

    def generate_unique_slug(self, name: str, *, exclude_space_id: UUID | None = None) -> str:
        base = self.normalize(name)
        candidate = base
        for attempt in range(1, self.max_attempts + 1):
            if not self.repository.slug_exists(candidate, exclude_id=exclude_space_id):
                return candidate
            candidate = with_suffix(base, attempt)
        logger.warning("slug.exhausted", extra=log_context(base=base, attempts=self.max_attempts))
        raise ConflictError(f"Could not allocate a unique slug for '{name}'", {"slug": base})
