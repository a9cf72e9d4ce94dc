from datetime import date, datetime

import structlog
from cryptography.exceptions import InvalidTag
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from checkin.config import settings
from checkin.db.crypto import decrypt, encrypt
from checkin.db.models import User
from checkin.reminders import REMINDER_OFF, next_streak

log = structlog.get_logger()


def refresh_token_of(user: User) -> str | None:
    if not user.google_refresh_token:
        return None
    try:
        return decrypt(user.google_refresh_token)
    except (ValueError, InvalidTag) as exc:
        log.error("refresh_token_decrypt_failed", user_id=user.slack_user_id, error=type(exc).__name__)
        return None


async def get_user(session: AsyncSession, team_id: str, user_id: str) -> User | None:
    return (
        await session.execute(
            select(User).where(
                User.slack_team_id == team_id,
                User.slack_user_id == user_id,
            )
        )
    ).scalar_one_or_none()


async def save_user(
    session: AsyncSession,
    *,
    team_id: str,
    user_id: str,
    refresh_token: str,
    doc_id: str,
    display_name: str | None = None,
    timezone: str | None = None,
) -> User:
    user = await get_user(session, team_id, user_id)
    if user is None:
        user = User(
            slack_team_id=team_id,
            slack_user_id=user_id,
            reminder_time=settings.default_reminder_time,
            current_streak=0,
        )
        session.add(user)

    user.google_refresh_token = encrypt(refresh_token)
    user.google_doc_id = doc_id
    user.timezone = timezone or settings.default_timezone
    if display_name:
        user.display_name = display_name
    await session.commit()
    return user


async def delete_user(session: AsyncSession, team_id: str, user_id: str) -> None:
    await session.execute(
        delete(User).where(
            User.slack_team_id == team_id,
            User.slack_user_id == user_id,
        )
    )
    await session.commit()


async def set_reminder_time(session: AsyncSession, user: User, reminder_time: str) -> None:
    user.reminder_time = reminder_time
    await session.commit()


async def record_log(session: AsyncSession, user: User, now: datetime) -> None:
    user.current_streak = next_streak(user.last_log_at, user.current_streak, now, user.timezone)
    user.last_log_at = now
    await session.commit()


async def mark_reminded(session: AsyncSession, user: User, day: date) -> None:
    user.last_reminder_on = day
    await session.commit()


async def list_reminder_candidates(session: AsyncSession) -> list[User]:
    return list(
        (
            await session.execute(
                select(User)
                .where(
                    User.google_doc_id.is_not(None),
                    User.reminder_time != REMINDER_OFF,
                )
                .order_by(User.created_at)
            )
        ).scalars().all()
    )
