"""Create repos table

Revision ID: repos_001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.sql import func

revision = "repos_001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "repos",
        sa.Column("id", sa.Integer, primary_key=True, index=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("url", sa.String(500), nullable=True),
        sa.Column("icon", sa.String(500), nullable=True),
        sa.Column("created_at", sa.DateTime, server_default=func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime, server_default=func.now(), nullable=False),
        sa.UniqueConstraint("name", name="uq_repos_name"),
    )


def downgrade() -> None:
    op.drop_table("repos")
