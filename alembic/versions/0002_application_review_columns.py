"""Application review columns

Revision ID: 0002_application_review_columns
Revises: 0001_initial_schema
Create Date: 2026-10-18

"""

from __future__ import annotations

from alembic import op

from jobboard.db.migrations import ensure_schema

# revision identifiers, used by Alembic.
revision = "0002_application_review_columns"
down_revision = "0001_initial_schema"
branch_labels = None
depends_on = None


def upgrade() -> None:
    ensure_schema(op.get_bind())


def downgrade() -> None:
    # additive only; 0001 owns the columns on fresh databases
    pass
