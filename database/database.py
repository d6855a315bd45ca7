"""Database helpers: engines, session factories and DB initialization.

Provides read/write session factories and a simple `init_db` helper that
creates the plan, saved-recipe and user tables.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from .models import Base
from core.config import WRITE_DATABASE_URL, READ_DATABASE_URL


def _connect_args(url: str) -> dict:
    return {"check_same_thread": False} if url.startswith("sqlite") else {}


# Engines
write_engine = create_engine(WRITE_DATABASE_URL, connect_args=_connect_args(WRITE_DATABASE_URL))
read_engine = create_engine(READ_DATABASE_URL, connect_args=_connect_args(READ_DATABASE_URL))

# Session factories
WriteSessionLocal = sessionmaker(bind=write_engine)
ReadSessionLocal = sessionmaker(bind=read_engine)


def init_db(engine=None):
    """Create all tables that do not exist yet.

    Args:
        engine: Engine to initialize; defaults to the write engine.
    """
    Base.metadata.create_all(bind=engine or write_engine)


# Convenience generators for dependency injection
def get_read_session():
    """Yield a read-only SQLAlchemy session for the request scope.

    Use this generator as a FastAPI dependency to ensure the session is
    properly closed after the request completes.
    """
    db = ReadSessionLocal()
    try:
        yield db
    finally:
        db.close()
