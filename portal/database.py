"""Database utilities and setup."""
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session as DbSession, sessionmaker

from portal.config import DATABASE_URL
from portal.exceptions import UnavailableError

logger = logging.getLogger(__name__)

# Create engine
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {},
)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Base class for models
class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


def get_db():
    """Dependency to get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Initialize database (create all tables)."""
    # Register mappers before create_all
    import portal.models.db  # noqa: F401

    Base.metadata.create_all(bind=engine)


@contextmanager
def storage_errors(db: DbSession, action: str) -> Iterator[None]:
    """Translate storage failures into a retryable UnavailableError.

    The session is rolled back so it stays usable for the caller.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception(f"Storage failure while trying to {action}")
        db.rollback()
        raise UnavailableError(f"Failed to {action}") from exc
