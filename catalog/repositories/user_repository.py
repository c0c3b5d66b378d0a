"""Data access for user accounts."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, or_, select, update
from sqlalchemy.orm import Session

from catalog.db.models import User


class UserRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: UUID) -> Optional[User]:
        return self.session.get(User, user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        stmt = select(User).where(User.username == username)
        return self.session.execute(stmt).scalar_one_or_none()

    def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email.lower())
        return self.session.execute(stmt).scalar_one_or_none()

    def get_by_identifier(self, identifier: str) -> Optional[User]:
        """Look up by username or e-mail, whichever matches."""
        value = (identifier or "").strip()
        stmt = select(User).where(or_(User.username == value, User.email == value.lower())).limit(1)
        return self.session.execute(stmt).scalars().first()

    def list(self) -> list[User]:
        return list(self.session.execute(select(User).order_by(User.username)).scalars().all())

    def create(self, *, username: str, email: str, password_hash: str) -> User:
        now = datetime.now(timezone.utc)
        user = User(
            username=username,
            email=email.lower(),
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )
        self.session.add(user)
        self.session.flush()
        return user

    def update_values(self, user_id: UUID, values: dict) -> int:
        values = {**values, "updated_at": datetime.now(timezone.utc)}
        return self.session.execute(update(User).where(User.id == user_id).values(**values)).rowcount

    def delete(self, user_id: UUID) -> int:
        return self.session.execute(delete(User).where(User.id == user_id)).rowcount
