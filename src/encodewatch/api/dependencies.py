"""Dependency injection providers for FastAPI."""

from functools import lru_cache

from encodewatch.pipeline.manager import SessionManager


@lru_cache
def get_session_manager() -> SessionManager:
    return SessionManager()
