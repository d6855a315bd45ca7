"""Dependency helpers that expose DB session generators.

`get_db_read` is injected into read-only endpoints such as `/health`; the
plan writer receives the session factories directly at startup.
"""

from .database import get_read_session


def get_db_read():
    """Yield a read-only DB session for FastAPI dependency injection."""
    yield from get_read_session()
