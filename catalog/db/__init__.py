"""Database helpers (engine/session export)."""

from .session import Base, build_session_factory, create_db_engine, get_engine, get_session_factory

__all__ = ["Base", "build_session_factory", "create_db_engine", "get_engine", "get_session_factory"]
