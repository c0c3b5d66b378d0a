"""Keeps a space's category/feature links in step with a requested set."""

from __future__ import annotations

from typing import Iterable, Optional
from uuid import UUID

from catalog.repositories.space_repository import SpaceRepository
from catalog.services.taxonomy_validator import unique_ids


def replace_associations(
    repository: SpaceRepository,
    space_id: UUID,
    category_ids: Optional[Iterable[UUID]] = None,
    feature_ids: Optional[Iterable[UUID]] = None,
) -> None:
    """Set (not add) the links of each kind that was given.

    ``None`` leaves that kind untouched; an empty iterable clears it. Rows are
    deleted then re-inserted, which is fine while links carry no payload.
    Must run inside the caller's transaction.
    """
    if category_ids is not None:
        repository.clear_categories(space_id)
        repository.add_categories(space_id, unique_ids(category_ids))
    if feature_ids is not None:
        repository.clear_features(space_id)
        repository.add_features(space_id, unique_ids(feature_ids))
