"""Database package: engine, session, base."""

from fitcoach.db.session import async_session_maker, get_db

__all__ = ["async_session_maker", "get_db"]
