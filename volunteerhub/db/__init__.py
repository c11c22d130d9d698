"""Database package."""
from volunteerhub.db.session import engine, SessionLocal, get_db, get_db_context
from volunteerhub.db.base import Base

__all__ = ["engine", "SessionLocal", "get_db", "get_db_context", "Base"]
