"""Database engine, sessions and declarative base."""

from easyalert.db.database import Base, create_engine, create_session_factory, init_db, utcnow

__all__ = ["Base", "create_engine", "create_session_factory", "init_db", "utcnow"]
