"""Profile reads and self-service account changes."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Union
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from catalog.core.logging import log_context
from catalog.domain.errors import ConflictError, InternalConsistencyError, NotFoundError
from catalog.repositories.user_repository import UserRepository
from catalog.schemas.users import UserRead, UserUpdate
from catalog.schemas.base import parse_payload

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, session_factory: sessionmaker) -> None:
        self.session_factory = session_factory

    def get_user(self, user_id: UUID) -> UserRead:
        with self.session_factory() as session:
            user = UserRepository(session).get(user_id)
            if user is None:
                raise NotFoundError(f"User {user_id} not found")
            return UserRead.model_validate(user)

    def list_users(self) -> list[UserRead]:
        with self.session_factory() as session:
            return [UserRead.model_validate(user) for user in UserRepository(session).list()]

    def update_profile(self, user_id: UUID, payload: Union[UserUpdate, Mapping[str, Any]]) -> UserRead:
        data = parse_payload(UserUpdate, payload)
        values = data.model_dump(include=data.model_fields_set)
        try:
            with self.session_factory() as session, session.begin():
                repo = UserRepository(session)
                if repo.get(user_id) is None:
                    raise NotFoundError(f"User {user_id} not found")
                if values and repo.update_values(user_id, values) != 1:
                    raise InternalConsistencyError(f"User {user_id} disappeared during update")
                session.expire_all()
                result = UserRead.model_validate(repo.get(user_id))
        except IntegrityError as exc:
            raise ConflictError("Username already taken", {"username": values.get("username")}) from exc
        logger.info("user.update.success", extra=log_context(user_id=user_id))
        return result

    def delete_account(self, user_id: UUID) -> None:
        """Remove the account; owned spaces go with it (ON DELETE CASCADE)."""
        with self.session_factory() as session, session.begin():
            if UserRepository(session).delete(user_id) != 1:
                raise NotFoundError(f"User {user_id} not found")
        logger.info("user.delete.success", extra=log_context(user_id=user_id))
