from __future__ import annotations

from fastapi import APIRouter, Depends, status

from catalog.routers.deps import current_identity, get_auth_service, get_user_service, limit_auth_attempts
from catalog.schemas.users import LoginRequest, RegisterRequest, TokenResponse, UserRead
from catalog.services.auth_service import AuthService, Identity
from catalog.services.user_service import UserService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(limit_auth_attempts("register"))],
)
def register(payload: RegisterRequest, auth: AuthService = Depends(get_auth_service)):
    return auth.register(payload)


@router.post("/login", response_model=TokenResponse, dependencies=[Depends(limit_auth_attempts("login"))])
def login(payload: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    return auth.login(payload)


@router.get("/me", response_model=UserRead)
def me(
    identity: Identity = Depends(current_identity),
    users: UserService = Depends(get_user_service),
):
    return users.get_user(identity.user_id)
