"""Database helpers: engines, session factories and schema initialization.

Reads and writes go through separate engines so a read replica can be
configured via ``READ_DATABASE_URL``; for local SQLite both point at the
same file.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from core.config import WRITE_DATABASE_URL, READ_DATABASE_URL
from core.logger import get_logger
from .models import Base

logger = get_logger("database")


def _engine_for(url: str):
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


# Engines
write_engine = _engine_for(WRITE_DATABASE_URL)
read_engine = _engine_for(READ_DATABASE_URL)

# Session factories
WriteSessionLocal = sessionmaker(bind=write_engine)
ReadSessionLocal = sessionmaker(bind=read_engine)


def init_db():
    """Create all tables that do not exist yet."""
    Base.metadata.create_all(bind=write_engine)
    logger.info("Database schema ready")


# Convenience generators for dependency injection
def get_write_session():
    """Yield a write-enabled SQLAlchemy session for the request scope."""
    db = WriteSessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_read_session():
    """Yield a read-only SQLAlchemy session for the request scope."""
    db = ReadSessionLocal()
    try:
        yield db
    finally:
        db.close()
