"""Database package: engine, session factory and declarative base."""

from grove.db.session import async_session_maker, build_engine, build_session_maker, get_db

__all__ = ["async_session_maker", "build_engine", "build_session_maker", "get_db"]
