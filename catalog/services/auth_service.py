"""
Authentication and identity related use cases.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Union
from uuid import UUID

import jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from catalog.core.config import Settings
from catalog.core.logging import log_context
from catalog.core.security import hash_password, needs_rehash, verify_password
from catalog.core.tokens import create_access_token, decode_access_token
from catalog.domain.errors import AuthenticationError, ConflictError
from catalog.repositories.user_repository import UserRepository
from catalog.schemas.users import LoginRequest, RegisterRequest, TokenResponse, UserRead
from catalog.schemas.base import parse_payload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Resolved caller; handed explicitly to every mutating use case."""

    user_id: UUID
    email: str
    username: str


class AuthService:
    """Handles registration, login and bearer token resolution."""

    def __init__(self, session_factory: sessionmaker, settings: Settings) -> None:
        self.session_factory = session_factory
        self.settings = settings

    def register(self, payload: Union[RegisterRequest, Mapping[str, Any]]) -> UserRead:
        data = parse_payload(RegisterRequest, payload)
        try:
            with self.session_factory() as session, session.begin():
                repo = UserRepository(session)
                if repo.get_by_username(data.username):
                    raise ConflictError("Username already taken", {"username": data.username})
                if repo.get_by_email(data.email):
                    raise ConflictError("Email already registered", {"email": data.email})
                user = repo.create(
                    username=data.username,
                    email=data.email,
                    password_hash=hash_password(data.password),
                )
                result = UserRead.model_validate(user)
        except IntegrityError as exc:
            raise ConflictError("Username or email already registered") from exc
        logger.info("auth.register.success", extra=log_context(user_id=result.id))
        return result

    def login(self, payload: Union[LoginRequest, Mapping[str, Any]]) -> TokenResponse:
        data = parse_payload(LoginRequest, payload)
        with self.session_factory() as session, session.begin():
            repo = UserRepository(session)
            user = repo.get_by_identifier(data.identifier)
            if not user or not verify_password(data.password, user.password_hash):
                logger.info("auth.login.failed", extra=log_context(identifier=data.identifier))
                raise AuthenticationError("Invalid credentials")
            if needs_rehash(user.password_hash):
                repo.update_values(user.id, {"password_hash": hash_password(data.password)})
            token = create_access_token(self.settings, user_id=str(user.id), email=user.email)
            user_id = user.id
        logger.info("auth.login.success", extra=log_context(user_id=user_id))
        return TokenResponse(access_token=token, expires_in=self.settings.access_token_ttl_seconds)

    def resolve(self, token: str | None) -> Identity:
        """Turn a bearer token into the caller identity, or fail."""
        if not token:
            raise AuthenticationError("Authentication required")
        try:
            claims = decode_access_token(self.settings, token)
            user_id = UUID(str(claims["userId"]))
        except (jwt.PyJWTError, ValueError) as exc:
            raise AuthenticationError("Invalid token") from exc
        with self.session_factory() as session:
            user = UserRepository(session).get(user_id)
            if user is None:
                raise AuthenticationError("User not found")
            return Identity(user_id=user.id, email=user.email, username=user.username)
