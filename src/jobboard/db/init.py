from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from jobboard.config import get_settings
from jobboard.db.base import Base
from jobboard.db.migrations import add_missing_columns, ensure_application_uniqueness
from jobboard.db.session import engine as default_engine
from jobboard.db import models  # noqa: F401

logger = logging.getLogger(__name__)


def ensure_data_directories() -> None:
    settings = get_settings()
    paths: list[Path] = [settings.data_dir, settings.upload_dir]
    for path in paths:
        path.mkdir(parents=True, exist_ok=True)


def init_database(engine: Engine | None = None) -> dict[str, object]:
    """Create missing tables, then patch older tables with any missing columns.

    Column additions commit before the unique index is attempted, so a legacy
    table holding duplicate applications keeps its new columns. Failures are
    logged and the process carries on; queries that need an absent column
    fail on their own.
    """
    engine = engine or default_engine
    ensure_data_directories()
    result: dict[str, object] = {"added_columns": [], "created_unique_index": False}

    try:
        Base.metadata.create_all(bind=engine)
        with engine.begin() as conn:
            result["added_columns"] = add_missing_columns(conn)
    except SQLAlchemyError as exc:
        logger.warning("Schema migration warning: %s", exc)
        result["error"] = str(exc)
        return result

    try:
        with engine.begin() as conn:
            result["created_unique_index"] = ensure_application_uniqueness(conn)
    except SQLAlchemyError as exc:
        logger.warning("Could not enforce one application per user and job: %s", exc)
        result["error"] = str(exc)
    return result
