"""Create raquetas table

Revision ID: 001
Revises: None
Create Date: 2026-10-18 00:00:00.000000+00:00

What:  Creates the `raquetas` table for tennis racket records.
How:   Portable column types (Uuid, DateTime with timezone) so the same
       migration runs on PostgreSQL and SQLite.

Rollback: downgrade() drops the table entirely (destructive — all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the raquetas table and the unique external_id index."""
    op.create_table(
        "raquetas",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("external_id", sa.Uuid(), nullable=False),
        sa.Column("brand", sa.String(100), nullable=False),
        sa.Column("model", sa.String(100), nullable=False),
        sa.Column("price", sa.Float(), nullable=False),
        # URL or path, no integrity checking
        sa.Column("image_ref", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        # Soft-delete marker; reads do not filter on it
        sa.Column("deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index(
        "ix_raquetas_external_id",
        "raquetas",
        ["external_id"],
        unique=True,
    )


def downgrade() -> None:
    """Drop the raquetas table entirely."""
    op.drop_index("ix_raquetas_external_id", table_name="raquetas")
    op.drop_table("raquetas")
