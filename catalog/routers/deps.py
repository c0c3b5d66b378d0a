"""Shared FastAPI dependencies: services from app.state and the caller identity."""

from __future__ import annotations

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from catalog.core.rate_limiter import client_address
from catalog.services.auth_service import AuthService, Identity
from catalog.services.space_service import SpaceService
from catalog.services.taxonomy_service import TaxonomyService
from catalog.services.user_service import UserService

_bearer_scheme = HTTPBearer(auto_error=False)


def _state(request: Request, name: str):
    svc = getattr(getattr(request.app, "state", None), name, None)
    if svc is None:
        raise RuntimeError(f"{name} is not configured")
    return svc


def get_space_service(request: Request) -> SpaceService:
    return _state(request, "space_service")


def get_auth_service(request: Request) -> AuthService:
    return _state(request, "auth_service")


def get_user_service(request: Request) -> UserService:
    return _state(request, "user_service")


def get_taxonomy_service(request: Request, kind: str) -> TaxonomyService:
    return _state(request, "taxonomy_services")[kind]


def current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
    auth: AuthService = Depends(get_auth_service),
) -> Identity:
    """Resolve the bearer token; AuthenticationError becomes a 401."""
    token = credentials.credentials if credentials is not None else None
    return auth.resolve(token)


def limit_auth_attempts(scope: str):
    """Dependency counting one attempt per client against the scope's limit."""

    def _dependency(request: Request) -> None:
        limit, window_seconds = _state(request, "settings").rate_limit(scope)
        key = f"auth:{scope}:{client_address(request)}"
        _state(request, "rate_limiter").hit(key, limit=limit, window_seconds=window_seconds)

    return _dependency
