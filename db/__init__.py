"""Database package for the subscriber manager."""
from db.connection import AsyncSessionLocal, dispose_engine, engine, init_db, session_scope

__all__ = ["engine", "AsyncSessionLocal", "session_scope", "init_db", "dispose_engine"]
