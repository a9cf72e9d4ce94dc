"""initial schema

Revision ID: 5c0e7a1d9b42
Revises:
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "5c0e7a1d9b42"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "checkin_users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("slack_team_id", sa.String, nullable=False),
        sa.Column("slack_user_id", sa.String, nullable=False),
        sa.Column("display_name", sa.String),
        sa.Column("google_refresh_token", sa.Text),
        sa.Column("google_doc_id", sa.String),
        sa.Column("timezone", sa.String, nullable=False, server_default="America/New_York"),
        sa.Column("reminder_time", sa.String, nullable=False, server_default="17:00"),
        sa.Column("last_log_at", sa.DateTime(timezone=True)),
        sa.Column("last_reminder_on", sa.Date),
        sa.Column("current_streak", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("slack_team_id", "slack_user_id", name="uq_checkin_users_team_user"),
    )
    op.create_index("ix_checkin_users_reminder_time", "checkin_users", ["reminder_time"])


def downgrade() -> None:
    op.drop_index("ix_checkin_users_reminder_time", table_name="checkin_users")
    op.drop_table("checkin_users")
