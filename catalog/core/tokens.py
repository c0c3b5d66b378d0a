"""Signed bearer tokens (JWT) carrying the caller identity."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from .config import Settings


def create_access_token(settings: Settings, *, user_id: str, email: str) -> str:
    """Return a signed access token valid for ``access_token_ttl_seconds``."""
    now = datetime.now(timezone.utc)
    payload = {
        "userId": user_id,
        "email": email,
        "iat": now,
        "exp": now + timedelta(seconds=settings.access_token_ttl_seconds),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(settings: Settings, token: str) -> dict[str, Any]:
    """Decode and verify a token; raises ``jwt.PyJWTError`` on any failure."""
    return jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
        options={"require": ["exp", "userId"]},
    )
