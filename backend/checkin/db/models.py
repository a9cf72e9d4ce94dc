import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "checkin_users"
    __table_args__ = (
        UniqueConstraint("slack_team_id", "slack_user_id", name="uq_checkin_users_team_user"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    slack_team_id: Mapped[str] = mapped_column(String, nullable=False)
    slack_user_id: Mapped[str] = mapped_column(String, nullable=False)
    display_name: Mapped[str | None] = mapped_column(String)
    google_refresh_token: Mapped[str | None] = mapped_column(Text)
    google_doc_id: Mapped[str | None] = mapped_column(String)
    timezone: Mapped[str] = mapped_column(String, nullable=False, default="America/New_York")
    reminder_time: Mapped[str] = mapped_column(String, nullable=False, default="17:00")
    last_log_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    last_reminder_on: Mapped[date | None] = mapped_column(Date)
    current_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
