from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from catalog.routers.deps import current_identity, get_space_service, get_user_service
from catalog.schemas.spaces import SpaceRead
from catalog.schemas.users import UserRead, UserUpdate
from catalog.services.auth_service import Identity
from catalog.services.space_service import SpaceService
from catalog.services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=list[UserRead])
def list_users(users: UserService = Depends(get_user_service)):
    return users.list_users()


@router.patch("/me", response_model=UserRead)
def update_me(
    payload: UserUpdate,
    identity: Identity = Depends(current_identity),
    users: UserService = Depends(get_user_service),
):
    return users.update_profile(identity.user_id, payload)


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
def delete_me(
    identity: Identity = Depends(current_identity),
    users: UserService = Depends(get_user_service),
):
    users.delete_account(identity.user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: UUID, users: UserService = Depends(get_user_service)):
    return users.get_user(user_id)


@router.get("/{user_id}/spaces", response_model=list[SpaceRead])
def list_user_spaces(user_id: UUID, svc: SpaceService = Depends(get_space_service)):
    return svc.list_spaces(submitted_by=user_id)
