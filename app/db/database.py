import logging
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

from app.db.session import DataStore, build_store

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def connect_to_database(app: FastAPI) -> bool:
    """Create the process wide store, its tables, and check connectivity."""
    store = getattr(app.state, "store", None)
    if store is None:
        store = build_store()
        app.state.store = store

    try:
        store.create_all()
        store.ping()
    except SQLAlchemyError as e:
        logger.exception("Failed to connect to database: %s", e)
        return False

    logger.info("Successfully connected to database (%s)", store.engine.url.render_as_string(hide_password=True))
    return True


def close_database_connection(app: FastAPI) -> None:
    store = getattr(app.state, "store", None)
    if store is not None:
        store.dispose()
        logger.info("Database connections closed")


def check_database_health(store: DataStore) -> Dict[str, Any]:
    try:
        store.ping()
        return {"status": "healthy", "timestamp": _now()}
    except SQLAlchemyError as e:
        return {"status": "unhealthy", "error": str(e), "timestamp": _now()}


def get_database_stats(store: DataStore) -> Dict[str, Any]:
    stats = store.pool_status()
    stats["timestamp"] = _now()
    return stats
