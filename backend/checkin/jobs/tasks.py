from datetime import datetime, timezone

import structlog
from arq import Retry

from checkin.ai.refiner import get_refiner
from checkin.ai.summary import summarize_week
from checkin.config import settings
from checkin.db import users
from checkin.db.models import User
from checkin.db.session import async_session_factory
from checkin.doclog.dates import format_date_range, today_in, week_bounds
from checkin.doclog.log import CheckinLog
from checkin.doclog.writer import entry_lines
from checkin.errors import CredentialExpired, DocumentBusy, DocumentStoreError, TransientStoreFailure
from checkin.google import oauth as google_oauth
from checkin.google.docs import DocsClient, doc_url
from checkin.locks import user_document_lock
from checkin.reminders import is_reminder_due, local_day, logged_today
from checkin.slack import client as slack_client
from checkin.slack.messages import (
    LOG_FAILED_TEXT,
    NOT_SET_UP_TEXT,
    NOTHING_TO_LOG_TEXT,
    NOTHING_TO_UNDO_TEXT,
    RECONNECT_TEXT,
    build_logged_blocks,
    build_not_set_up_blocks,
    build_reminder_blocks,
    build_search_result_blocks,
    ephemeral,
)

log = structlog.get_logger()

PROCESSING_REACTION = "hourglass_flowing_sand"
DONE_REACTION = "white_check_mark"
MAX_TRIES = 2
RETRY_DELAY = 5


async def docs_client_for(user: User) -> DocsClient:
    refresh_token = users.refresh_token_of(user)
    if not refresh_token:
        raise CredentialExpired("no usable refresh token stored")
    return await DocsClient.from_refresh_token(refresh_token)


def _is_set_up(user: User | None) -> bool:
    return user is not None and bool(user.google_doc_id)


async def log_message(
    ctx: dict,
    team_id: str,
    user_id: str,
    channel_id: str,
    message_ts: str,
    text: str,
) -> None:
    async with async_session_factory() as session:
        user = await users.get_user(session, team_id, user_id)
        if not _is_set_up(user):
            await slack_client.post_message(
                channel_id,
                text="You haven't set up your check-in doc yet.",
                blocks=build_not_set_up_blocks(),
            )
            return

        await slack_client.add_reaction(channel_id, message_ts, PROCESSING_REACTION)
        refined = await get_refiner().refine(text) or text.strip()
        if not entry_lines(refined):
            log.info("log_nothing_to_write", user_id=user_id)
            await slack_client.remove_reaction(channel_id, message_ts, PROCESSING_REACTION)
            await slack_client.post_message(channel_id, text=NOTHING_TO_LOG_TEXT)
            return

        try:
            docs = await docs_client_for(user)
            async with user_document_lock(ctx["redis"], team_id, user_id):
                result = await CheckinLog(docs, user.google_doc_id).append(
                    refined, today_in(user.timezone)
                )
        except CredentialExpired:
            log.warning("log_credential_expired", user_id=user_id)
            await slack_client.remove_reaction(channel_id, message_ts, PROCESSING_REACTION)
            await slack_client.post_message(channel_id, text=RECONNECT_TEXT)
            return
        except TransientStoreFailure as exc:
            await slack_client.remove_reaction(channel_id, message_ts, PROCESSING_REACTION)
            if ctx.get("job_try", 1) < MAX_TRIES:
                log.warning("log_retrying", user_id=user_id, error=str(exc))
                raise Retry(defer=RETRY_DELAY) from exc
            log.error("log_failed", user_id=user_id, error=str(exc))
            await slack_client.post_message(channel_id, text=LOG_FAILED_TEXT)
            return
        except (DocumentBusy, DocumentStoreError) as exc:
            log.error("log_failed", user_id=user_id, error=str(exc))
            await slack_client.remove_reaction(channel_id, message_ts, PROCESSING_REACTION)
            await slack_client.post_message(channel_id, text=LOG_FAILED_TEXT)
            return

        await users.record_log(session, user, datetime.now(timezone.utc))
        document_url = doc_url(user.google_doc_id)

    await slack_client.remove_reaction(channel_id, message_ts, PROCESSING_REACTION)
    await slack_client.add_reaction(channel_id, message_ts, DONE_REACTION)
    await slack_client.post_message(
        channel_id,
        text="Logged: " + "; ".join(result.lines),
        blocks=build_logged_blocks(result.lines, document_url),
    )
    log.info("message_logged", user_id=user_id, lines=len(result.lines))


async def weekly_summary(ctx: dict, team_id: str, user_id: str, response_url: str) -> None:
    async with async_session_factory() as session:
        user = await users.get_user(session, team_id, user_id)
    if not _is_set_up(user):
        await slack_client.respond(response_url, ephemeral(NOT_SET_UP_TEXT))
        return

    start, end = week_bounds(today_in(user.timezone))
    try:
        docs = await docs_client_for(user)
        entries = await CheckinLog(docs, user.google_doc_id).entries_between(start, end)
    except CredentialExpired:
        await slack_client.respond(response_url, ephemeral(RECONNECT_TEXT))
        return
    except DocumentStoreError as exc:
        log.error("weekly_summary_failed", user_id=user_id, error=str(exc))
        await slack_client.respond(response_url, ephemeral("❌ Error generating summary. Please try again."))
        return

    summary = await summarize_week(entries, format_date_range(start, end))
    await slack_client.respond(response_url, ephemeral(summary))


async def undo_last_entry(ctx: dict, team_id: str, user_id: str, response_url: str) -> None:
    async with async_session_factory() as session:
        user = await users.get_user(session, team_id, user_id)
    if not _is_set_up(user):
        await slack_client.respond(response_url, ephemeral(NOT_SET_UP_TEXT))
        return

    try:
        docs = await docs_client_for(user)
        async with user_document_lock(ctx["redis"], team_id, user_id):
            removed = await CheckinLog(docs, user.google_doc_id).undo()
    except CredentialExpired:
        await slack_client.respond(response_url, ephemeral(RECONNECT_TEXT))
        return
    except (DocumentBusy, DocumentStoreError) as exc:
        log.error("undo_failed", user_id=user_id, error=str(exc))
        await slack_client.respond(response_url, ephemeral("❌ Error removing entry. Please try again."))
        return

    if removed is None:
        await slack_client.respond(response_url, ephemeral(NOTHING_TO_UNDO_TEXT))
        return
    await slack_client.respond(response_url, ephemeral(f'\U0001f5d1️ Removed: "{removed}"'))


async def search_log(ctx: dict, team_id: str, user_id: str, response_url: str, keyword: str) -> None:
    async with async_session_factory() as session:
        user = await users.get_user(session, team_id, user_id)
    if not _is_set_up(user):
        await slack_client.respond(response_url, ephemeral(NOT_SET_UP_TEXT))
        return

    try:
        docs = await docs_client_for(user)
        matches = await CheckinLog(docs, user.google_doc_id).search(keyword)
    except CredentialExpired:
        await slack_client.respond(response_url, ephemeral(RECONNECT_TEXT))
        return
    except DocumentStoreError as exc:
        log.error("search_failed", user_id=user_id, error=str(exc))
        await slack_client.respond(response_url, ephemeral("❌ Error searching your log. Please try again."))
        return

    await slack_client.respond(
        response_url,
        ephemeral(f"{len(matches)} matching entries", build_search_result_blocks(keyword, matches)),
    )


async def disconnect_user(ctx: dict, team_id: str, user_id: str, response_url: str) -> None:
    async with async_session_factory() as session:
        user = await users.get_user(session, team_id, user_id)
        if user is None:
            await slack_client.respond(response_url, ephemeral(NOT_SET_UP_TEXT))
            return
        refresh_token = users.refresh_token_of(user)
        if refresh_token:
            await google_oauth.revoke_token(refresh_token)
        await users.delete_user(session, team_id, user_id)

    log.info("user_disconnected", team_id=team_id, user_id=user_id)
    await slack_client.respond(
        response_url,
        ephemeral(
            "\U0001f44b Disconnected. Your Google Doc is still yours; "
            "run `/checkin setup` any time to start a new one."
        ),
    )


async def send_reminders(ctx: dict) -> dict:
    now = datetime.now(timezone.utc)
    sent = 0
    async with async_session_factory() as session:
        candidates = await users.list_reminder_candidates(session)
        for user in candidates:
            try:
                if not is_reminder_due(
                    user.reminder_time, now, user.timezone, settings.reminder_window_minutes
                ):
                    continue
                today = local_day(now, user.timezone)
                if logged_today(user.last_log_at, now, user.timezone) or user.last_reminder_on == today:
                    continue

                resp = await slack_client.post_message(
                    user.slack_user_id,
                    text="\U0001f44b Hey! What did you work on today?",
                    blocks=build_reminder_blocks(user.current_streak),
                )
                if not resp.get("ok"):
                    log.warning("reminder_not_delivered", user_id=user.slack_user_id, error=resp.get("error"))
                    continue
                await users.mark_reminded(session, user, today)
                sent += 1
            except Exception as exc:
                log.error("reminder_failed", user_id=user.slack_user_id, error=str(exc))
                await session.rollback()

    log.info("reminders_sent", count=sent, candidates=len(candidates))
    return {"reminders_sent": sent}
