"""Database utilities exposed for the gateway access service."""

from .base import Base
from .session import DATABASE_URL, SessionLocal, engine, run_in_session

__all__ = ["Base", "DATABASE_URL", "SessionLocal", "engine", "run_in_session"]
