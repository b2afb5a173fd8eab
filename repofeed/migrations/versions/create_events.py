"""Create events table

Revision ID: events_001
Revises: repos_001
Create Date: 2026-10-19 00:00:00.000000

"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.sql import func

revision = "events_001"
down_revision = "repos_001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "events",
        sa.Column("id", sa.Integer, primary_key=True, index=True),
        sa.Column(
            "repo_id",
            sa.Integer,
            sa.ForeignKey("repos.id"),
            nullable=False,
            index=True,
        ),
        sa.Column("type", sa.String(32), nullable=False, index=True),
        sa.Column("title", sa.String, nullable=False),
        sa.Column("summary", sa.Text, nullable=False, server_default=""),
        sa.Column("body", sa.Text, nullable=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False, index=True),
        sa.Column("source_url", sa.String(1000), nullable=True),
        sa.Column("tags", sa.JSON, nullable=True),
        sa.Column(
            "status", sa.String(16), nullable=False, server_default="approved", index=True
        ),
        sa.Column("pinned", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("github_delivery_id", sa.String(255), nullable=True),
        sa.Column("github_event_id", sa.String(255), nullable=True, index=True),
        sa.Column("created_at", sa.DateTime, server_default=func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime, server_default=func.now(), nullable=False),
        # Concurrent retries of one occurrence race past the pre-insert lookup;
        # this constraint is what keeps them to a single row.
        sa.UniqueConstraint(
            "repo_id", "github_event_id", "type", name="uq_events_repo_event_type"
        ),
    )


def downgrade() -> None:
    op.drop_table("events")
