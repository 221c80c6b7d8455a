from __future__ import annotations

import logging

import sqlalchemy as sa
from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy.engine import Connection

logger = logging.getLogger(__name__)

APPLICATION_UNIQUE_INDEX = "uq_applications_user_job"


def optional_columns() -> dict[str, list[sa.Column]]:
    """Columns older deployments may lack, keyed by table.

    Built fresh on every call since a Column can only be attached to one table.
    """
    return {
        "jobs": [
            sa.Column("requirements", sa.Text(), nullable=True),
            sa.Column("employment_type", sa.String(length=100), nullable=True),
            sa.Column("application_deadline", sa.Date(), nullable=True),
            sa.Column("posted_by", sa.Integer(), nullable=True),
            sa.Column("contact_email", sa.String(length=255), nullable=True),
            sa.Column("category", sa.String(length=120), nullable=False, server_default="Others"),
            sa.Column("entry_level", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("no_degree_required", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("remote_job", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("part_time", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("high_paying", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("fast_hiring", sa.Boolean(), nullable=False, server_default=sa.false()),
            # SQLite refuses non-constant defaults on ADD COLUMN; the ORM fills it.
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        ],
        "applications": [
            sa.Column("qualification_text", sa.Text(), nullable=True),
            sa.Column("document_name", sa.String(length=255), nullable=True),
            sa.Column("document_path", sa.String(length=255), nullable=True),
            sa.Column("full_name", sa.String(length=255), nullable=True),
            sa.Column("applicant_email", sa.String(length=255), nullable=True),
            sa.Column("phone", sa.String(length=100), nullable=True),
            sa.Column("cover_letter", sa.Text(), nullable=True),
            sa.Column("other_document_name", sa.String(length=255), nullable=True),
            sa.Column("other_document_path", sa.String(length=255), nullable=True),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        ],
    }


def _has_table(insp: sa.Inspector, table: str) -> bool:
    return table in insp.get_table_names()


def _has_column(insp: sa.Inspector, table: str, column: str) -> bool:
    if not _has_table(insp, table):
        return False
    cols = {c["name"] for c in insp.get_columns(table)}
    return column in cols


def _has_unique_over(insp: sa.Inspector, table: str, columns: set[str]) -> bool:
    for constraint in insp.get_unique_constraints(table):
        if set(constraint["column_names"]) == columns:
            return True
    for index in insp.get_indexes(table):
        if index.get("unique") and set(index["column_names"]) == columns:
            return True
    return False


def add_missing_columns(bind: Connection) -> list[str]:
    """Add every optional column that is absent; returns the `table.column` names added."""
    op = Operations(MigrationContext.configure(bind))
    added: list[str] = []

    for table, columns in optional_columns().items():
        insp = sa.inspect(bind)
        if not _has_table(insp, table):
            continue
        for column in columns:
            if _has_column(insp, table, column.name):
                continue
            op.add_column(table, column)
            added.append(f"{table}.{column.name}")
            insp = sa.inspect(bind)

    if added:
        logger.info("Added missing columns: %s", ", ".join(added))
    return added


def ensure_application_uniqueness(bind: Connection) -> bool:
    insp = sa.inspect(bind)
    if not _has_table(insp, "applications"):
        return False
    if _has_unique_over(insp, "applications", {"user_id", "job_id"}):
        return False

    op = Operations(MigrationContext.configure(bind))
    op.create_index(APPLICATION_UNIQUE_INDEX, "applications", ["user_id", "job_id"], unique=True)
    logger.info("Created unique index %s", APPLICATION_UNIQUE_INDEX)
    return True


def ensure_schema(bind: Connection) -> dict[str, object]:
    added = add_missing_columns(bind)
    created_index = ensure_application_uniqueness(bind)
    return {"added_columns": added, "created_unique_index": created_index}
