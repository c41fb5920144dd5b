"""Initial schema

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 10:00:00
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "20261019_0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _object_id_col() -> sa.Column:
    return sa.Column("_id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False)


def _public_id_col() -> sa.Column:
    return sa.Column("id", sa.String(length=36), nullable=False)


def _created_col() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), nullable=False)


def _updated_col() -> sa.Column:
    return sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False)


def upgrade() -> None:
    op.create_table(
        "students",
        _object_id_col(),
        _public_id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("first_name", sa.String(length=225), nullable=False),
        sa.Column("last_name", sa.String(length=225), nullable=False),
        sa.PrimaryKeyConstraint("_id", name="pk_students"),
    )
    op.create_index("ix_students_id", "students", ["id"], unique=True)

    op.create_table(
        "lessons",
        _object_id_col(),
        _public_id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("start_date", sa.String(length=64), nullable=False),
        sa.Column("end_date", sa.String(length=64), nullable=False),
        sa.Column(
            "students",
            postgresql.JSONB(astext_type=sa.Text()),
            server_default=sa.text("'[]'::jsonb"),
            nullable=False,
        ),
        sa.Column("version", sa.Integer(), server_default=sa.text("1"), nullable=False),
        sa.PrimaryKeyConstraint("_id", name="pk_lessons"),
    )
    op.create_index("ix_lessons_id", "lessons", ["id"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_lessons_id", table_name="lessons")
    op.drop_table("lessons")
    op.drop_index("ix_students_id", table_name="students")
    op.drop_table("students")
