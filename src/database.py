"""
Database Configuration and Session Management

Provides the SQLAlchemy engine, session factory, declarative base, the
FastAPI session dependency and the explicit transaction scope every
write operation runs in.
"""

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from src.config import settings


def _engine_options(url: str) -> dict:
    options = {"echo": settings.DB_ECHO}
    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
    if settings.DB_ISOLATION_LEVEL:
        options["isolation_level"] = settings.DB_ISOLATION_LEVEL
    return options


engine = create_engine(settings.database_url, **_engine_options(settings.database_url))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """
    Dependency for FastAPI - provides database session

    Usage in FastAPI endpoint:
        @router.get("/items")
        def get_items(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Run a block as one atomic unit of work.

    Commits when the block exits normally and rolls back on any exception,
    which is then re-raised unchanged. Nothing written inside the block
    survives a failure.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def init_db():
    """Create all tables registered on Base"""
    from src import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
