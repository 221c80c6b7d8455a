from __future__ import annotations

from pathlib import Path

import pytest
import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError

from jobboard.db.init import init_database
from jobboard.db.migrations import ensure_schema, optional_columns


def _legacy_engine(tmp_path: Path) -> sa.Engine:
    engine = sa.create_engine(f"sqlite:///{tmp_path / 'legacy.db'}")
    with engine.begin() as conn:
        conn.execute(sa.text(
            "CREATE TABLE jobs (id INTEGER PRIMARY KEY, title VARCHAR(255), company VARCHAR(255), "
            "location VARCHAR(255), salary VARCHAR(255), description TEXT)"
        ))
        conn.execute(sa.text(
            "CREATE TABLE applications (id INTEGER PRIMARY KEY, user_id INTEGER, job_id INTEGER, "
            "resume_link VARCHAR(255), status VARCHAR(40) DEFAULT 'pending')"
        ))
        conn.execute(sa.text("INSERT INTO jobs (id, title, company, location, description) VALUES (1, 'Dev', 'Acme', 'Remote', 'Build')"))
    return engine


def test_missing_columns_are_added(tmp_path: Path) -> None:
    engine = _legacy_engine(tmp_path)
    with engine.begin() as conn:
        result = ensure_schema(conn)

    assert "jobs.category" in result["added_columns"]
    assert "applications.qualification_text" in result["added_columns"]
    assert result["created_unique_index"] is True

    insp = sa.inspect(engine)
    for table, columns in optional_columns().items():
        existing = {c["name"] for c in insp.get_columns(table)}
        assert {column.name for column in columns} <= existing

    with engine.connect() as conn:
        row = conn.execute(sa.text("SELECT category, remote_job FROM jobs WHERE id = 1")).one()
    assert row.category == "Others"
    assert not row.remote_job


def test_migration_is_idempotent(tmp_path: Path) -> None:
    engine = _legacy_engine(tmp_path)
    with engine.begin() as conn:
        ensure_schema(conn)
    with engine.begin() as conn:
        second = ensure_schema(conn)
    assert second == {"added_columns": [], "created_unique_index": False}


def test_unique_index_blocks_duplicate_applications(tmp_path: Path) -> None:
    engine = _legacy_engine(tmp_path)
    with engine.begin() as conn:
        ensure_schema(conn)

    insert = sa.text("INSERT INTO applications (user_id, job_id, status) VALUES (1, 1, 'pending')")
    with engine.begin() as conn:
        conn.execute(insert)
    with pytest.raises(IntegrityError):
        with engine.begin() as conn:
            conn.execute(insert)


def test_missing_tables_are_skipped(tmp_path: Path) -> None:
    engine = sa.create_engine(f"sqlite:///{tmp_path / 'empty.db'}")
    with engine.begin() as conn:
        assert ensure_schema(conn) == {"added_columns": [], "created_unique_index": False}


def test_duplicate_rows_keep_added_columns(tmp_path: Path) -> None:
    engine = _legacy_engine(tmp_path)
    insert = sa.text("INSERT INTO applications (user_id, job_id, status) VALUES (7, 1, 'pending')")
    with engine.begin() as conn:
        conn.execute(insert)
        conn.execute(insert)

    result = init_database(engine)

    assert "applications.qualification_text" in result["added_columns"]
    assert result["created_unique_index"] is False
    assert "error" in result

    existing = {c["name"] for c in sa.inspect(engine).get_columns("applications")}
    assert {"qualification_text", "document_path", "applicant_email"} <= existing
    with engine.connect() as conn:
        count = conn.execute(sa.text("SELECT COUNT(*) FROM applications WHERE qualification_text IS NULL")).scalar_one()
    assert count == 2


def test_init_database_indexes_clean_legacy_table(tmp_path: Path) -> None:
    engine = _legacy_engine(tmp_path)
    result = init_database(engine)
    assert result["created_unique_index"] is True
    assert "error" not in result
