from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status

from catalog.routers.deps import current_identity, get_space_service
from catalog.schemas.spaces import SpaceCreate, SpaceIdentity, SpaceRead, SpaceUpdate
from catalog.services.auth_service import Identity
from catalog.services.space_service import SpaceService

router = APIRouter(prefix="/api/spaces", tags=["spaces"])


@router.get("", response_model=list[SpaceRead])
def list_spaces(svc: SpaceService = Depends(get_space_service)):
    return svc.list_spaces()


@router.get("/{id_or_slug}", response_model=SpaceRead)
def get_space(id_or_slug: str, svc: SpaceService = Depends(get_space_service)):
    return svc.get_space(id_or_slug)


@router.post("", response_model=SpaceIdentity, status_code=status.HTTP_201_CREATED)
def create_space(
    payload: SpaceCreate,
    identity: Identity = Depends(current_identity),
    svc: SpaceService = Depends(get_space_service),
):
    return svc.create_space(identity.user_id, payload)


@router.patch("/{space_id}", response_model=SpaceRead)
def update_space(
    space_id: UUID,
    payload: SpaceUpdate,
    identity: Identity = Depends(current_identity),
    svc: SpaceService = Depends(get_space_service),
):
    return svc.update_space(identity.user_id, space_id, payload)


@router.delete("/{space_id}", response_model=SpaceIdentity)
def delete_space(
    space_id: UUID,
    identity: Identity = Depends(current_identity),
    svc: SpaceService = Depends(get_space_service),
):
    return svc.delete_space(identity.user_id, space_id)
