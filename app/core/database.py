"""Engine construction and per-request sessions."""

import logging
from collections.abc import Generator

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings

logger = logging.getLogger(__name__)

_IN_MEMORY_SQLITE = ("sqlite://", "sqlite:///:memory:")


def build_engine(url: str, echo: bool = False) -> Engine:
    """
    Create an engine for PostgreSQL (production) or SQLite (local runs and tests).

    SQLite connections are shared across FastAPI's threadpool; an in-memory
    SQLite database lives on a single pooled connection so every session sees it.
    """
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True, echo=echo)
    kwargs: dict = {"connect_args": {"check_same_thread": False}, "echo": echo}
    if url in _IN_MEMORY_SQLITE:
        kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency: one session per request, closed when the response is done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        logger.warning("Database connectivity check failed", exc_info=True)
        return False
