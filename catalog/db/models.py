"""SQLAlchemy models for spaces, their taxonomies and users."""
from __future__ import annotations

import uuid

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    String,
    Text,
    JSON,
    Uuid,
    func,
)
from sqlalchemy.orm import relationship

from .session import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    username = Column(String(255), unique=True, nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(Text, nullable=False)
    profile_picture = Column(Text, nullable=True)
    bio = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    spaces = relationship("Space", back_populates="owner", passive_deletes=True)


class SpaceType(Base):
    __tablename__ = "space_type"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), unique=True, nullable=False)
    descriptions = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class Category(Base):
    __tablename__ = "category"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), unique=True, nullable=False)
    descriptions = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class Feature(Base):
    __tablename__ = "feature"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), unique=True, nullable=False)
    descriptions = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class Space(Base):
    __tablename__ = "space"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    slug = Column(Text, unique=True, nullable=False)
    alternate_names = Column(JSON, default=list, nullable=False)
    activities = Column(JSON, default=list, nullable=False)
    descriptions = Column(Text, nullable=True)
    historical_context = Column(Text, nullable=True)
    architectural_style = Column(String(100), nullable=True)
    # Opaque documents; a Python None is stored as SQL NULL, not JSON null.
    operating_hours = Column(JSON(none_as_null=True), nullable=True)
    entrance_fee = Column(JSON(none_as_null=True), nullable=True)
    contact_info = Column(JSON(none_as_null=True), nullable=True)
    accessibility = Column(JSON(none_as_null=True), nullable=True)
    submitted_by = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type_id = Column(Uuid, ForeignKey("space_type.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    owner = relationship("User", back_populates="spaces")
    type = relationship("SpaceType")
    # Read-only views; writes go through the association synchronizer.
    categories = relationship(
        "Category", secondary="space_to_categories", viewonly=True, order_by="Category.name"
    )
    features = relationship(
        "Feature", secondary="space_to_features", viewonly=True, order_by="Feature.name"
    )


class SpaceToCategory(Base):
    __tablename__ = "space_to_categories"

    space_id = Column(Uuid, ForeignKey("space.id", ondelete="CASCADE"), primary_key=True)
    category_id = Column(Uuid, ForeignKey("category.id", ondelete="CASCADE"), primary_key=True)


class SpaceToFeature(Base):
    __tablename__ = "space_to_features"

    space_id = Column(Uuid, ForeignKey("space.id", ondelete="CASCADE"), primary_key=True)
    feature_id = Column(Uuid, ForeignKey("feature.id", ondelete="CASCADE"), primary_key=True)
