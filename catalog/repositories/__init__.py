"""
Persistence adapters.

Each repository wraps SQLAlchemy statements for one aggregate and is bound to
a Session owned by the calling service, so that several repositories can
take part in the same transaction.
"""

from .space_repository import SpaceRepository
from .taxonomy_repository import TaxonomyRepository
from .user_repository import UserRepository

__all__ = ["SpaceRepository", "TaxonomyRepository", "UserRepository"]
