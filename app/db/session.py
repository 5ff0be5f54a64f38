import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DataStore:
    """Owns the engine and connection pool; hands out sessions.

    Every service receives a ``Session`` produced here instead of reaching
    for a module level connection, so tests can swap in their own store.
    """

    def __init__(self, url: str, *, echo: bool = False, **pool_options: Any):
        engine_kwargs: Dict[str, Any] = {"echo": echo, "future": True}
        if url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in url or url in ("sqlite://", "sqlite:///"):
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs.update(
                pool_pre_ping=True,
                pool_size=pool_options.get("pool_size", settings.DB_POOL_SIZE),
                max_overflow=pool_options.get("max_overflow", settings.DB_MAX_OVERFLOW),
                pool_timeout=pool_options.get("pool_timeout", settings.DB_POOL_TIMEOUT),
                pool_recycle=pool_options.get("pool_recycle", settings.DB_POOL_RECYCLE),
            )

        self.engine: Engine = create_engine(url, **engine_kwargs)
        if url.startswith("sqlite"):
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        self.session_factory = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self.session_factory()
        try:
            yield db
        finally:
            db.close()

    def create_all(self) -> None:
        # Register every table on the metadata before creating them
        import app.models  # noqa: F401

        Base.metadata.create_all(self.engine)

    def ping(self) -> bool:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    def pool_status(self) -> Dict[str, Any]:
        pool = self.engine.pool
        stats: Dict[str, Any] = {"pool": type(pool).__name__}
        for name in ("size", "checkedin", "checkedout", "overflow"):
            method = getattr(pool, name, None)
            if callable(method):
                stats[name] = method()
        return stats

    def dispose(self) -> None:
        self.engine.dispose()


def build_store(url: Optional[str] = None) -> DataStore:
    return DataStore(url or settings.DATABASE_URL, echo=settings.DB_DEBUG)


def get_store(request: Request) -> DataStore:
    return request.app.state.store


def get_db(request: Request) -> Iterator[Session]:
    """FastAPI dependency yielding a pooled session for one request."""
    with get_store(request).session() as db:
        yield db


def safe_rollback(db: Session, operation: str) -> None:
    try:
        db.rollback()
    except SQLAlchemyError:
        logger.exception("Rollback failed during %s", operation)


@contextmanager
def transaction_scope(db: Session, operation: str) -> Iterator[Session]:
    """Commit everything done in the block, or roll all of it back.

    The original error is always re-raised; a failing rollback is only logged.
    """
    try:
        yield db
        db.commit()
    except Exception:
        logger.warning("Rolling back transaction for %s", operation)
        safe_rollback(db, operation)
        raise
