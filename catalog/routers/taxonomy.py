"""Routers for space types, categories and features (same shape, different table)."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from catalog.routers.deps import current_identity, get_taxonomy_service
from catalog.schemas.taxonomy import TaxonomyCreate, TaxonomyRead, TaxonomyUpdate
from catalog.services.auth_service import Identity
from catalog.services.taxonomy_service import TaxonomyService


def build_taxonomy_router(kind: str, prefix: str, tag: str) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[tag])

    def _service(request: Request) -> TaxonomyService:
        return get_taxonomy_service(request, kind)

    @router.get("", response_model=list[TaxonomyRead])
    def list_items(svc: TaxonomyService = Depends(_service)):
        return svc.list()

    @router.get("/{item_id}", response_model=TaxonomyRead)
    def get_item(item_id: UUID, svc: TaxonomyService = Depends(_service)):
        return svc.get(item_id)

    @router.post("", response_model=TaxonomyRead, status_code=status.HTTP_201_CREATED)
    def create_item(
        payload: TaxonomyCreate,
        _identity: Identity = Depends(current_identity),
        svc: TaxonomyService = Depends(_service),
    ):
        return svc.create(payload)

    @router.patch("/{item_id}", response_model=TaxonomyRead)
    def update_item(
        item_id: UUID,
        payload: TaxonomyUpdate,
        _identity: Identity = Depends(current_identity),
        svc: TaxonomyService = Depends(_service),
    ):
        return svc.update(item_id, payload)

    @router.delete("/{item_id}", response_model=TaxonomyRead)
    def delete_item(
        item_id: UUID,
        _identity: Identity = Depends(current_identity),
        svc: TaxonomyService = Depends(_service),
    ):
        return svc.delete(item_id)

    return router


types_router = build_taxonomy_router("type", "/api/types", "types")
categories_router = build_taxonomy_router("category", "/api/categories", "categories")
features_router = build_taxonomy_router("feature", "/api/features", "features")
