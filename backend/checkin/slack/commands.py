import structlog
from fastapi import Request, Response
from fastapi.responses import JSONResponse

from checkin.auth.state import create_state
from checkin.config import settings
from checkin.db import users
from checkin.db.session import async_session_factory
from checkin.google.docs import doc_url
from checkin.google.oauth import get_auth_url
from checkin.reminders import parse_reminder_time
from checkin.slack import router
from checkin.slack.messages import (
    NOT_SET_UP_TEXT,
    build_help_blocks,
    build_setup_blocks,
    build_status_blocks,
    ephemeral,
)
from checkin.slack.verify import verify_slack_signature

log = structlog.get_logger()

# Subcommands that touch the document run as jobs and answer via response_url.
BACKGROUND_COMMANDS = {
    "weekly": ("weekly_summary", "⏳ Generating your weekly summary..."),
    "undo": ("undo_last_entry", "⏳ Removing your last entry..."),
    "search": ("search_log", "\U0001f50d Searching your log..."),
    "disconnect": ("disconnect_user", "⏳ Disconnecting your Google account..."),
}


@router.post("/commands")
async def slack_commands(request: Request) -> Response:
    body = await request.body()
    timestamp = request.headers.get("X-Slack-Request-Timestamp", "")
    signature = request.headers.get("X-Slack-Signature", "")

    if settings.slack_signing_secret and not verify_slack_signature(
        settings.slack_signing_secret, timestamp, body, signature
    ):
        return Response(status_code=401)

    form = await request.form()
    text = (form.get("text") or "").strip()
    team_id = form.get("team_id", "")
    user_id = form.get("user_id", "")
    channel_id = form.get("channel_id", "")
    response_url = form.get("response_url", "")

    subcommand, _, argument = text.partition(" ")
    subcommand = subcommand.lower()
    argument = argument.strip()

    log.info("slash_command", subcommand=subcommand, team_id=team_id, user_id=user_id)

    if subcommand in ("", "help"):
        return JSONResponse(ephemeral("Daily Check-in Help", build_help_blocks()))

    if subcommand == "setup":
        state = create_state(team_id, user_id, channel_id)
        return JSONResponse(
            ephemeral("Set up Daily Check-ins", build_setup_blocks(get_auth_url(state)))
        )

    if subcommand == "status":
        return JSONResponse(await _status(team_id, user_id))

    if subcommand == "remind":
        return JSONResponse(await _remind(team_id, user_id, argument))

    if subcommand in BACKGROUND_COMMANDS:
        if subcommand == "search" and not argument:
            return JSONResponse(ephemeral("Usage: `/checkin search <keywords>`"))
        job, ack_text = BACKGROUND_COMMANDS[subcommand]
        args = [team_id, user_id, response_url]
        if subcommand == "search":
            args.append(argument)
        await request.app.state.arq_pool.enqueue_job(job, *args)
        return JSONResponse(ephemeral(ack_text))

    return JSONResponse(
        ephemeral(
            f"Unknown command: `{subcommand}`. "
            "Try `/checkin help` for available commands."
        )
    )


async def _status(team_id: str, user_id: str) -> dict:
    async with async_session_factory() as session:
        user = await users.get_user(session, team_id, user_id)

    if user is None or not user.google_doc_id:
        return ephemeral(NOT_SET_UP_TEXT)

    return ephemeral(
        "Daily Check-ins Status",
        build_status_blocks(
            doc_url(user.google_doc_id),
            user.reminder_time,
            user.timezone,
            user.current_streak,
        ),
    )


async def _remind(team_id: str, user_id: str, argument: str) -> dict:
    try:
        reminder_time = parse_reminder_time(argument)
    except ValueError:
        return ephemeral("Usage: `/checkin remind HH:MM` (24-hour) or `/checkin remind off`")

    async with async_session_factory() as session:
        user = await users.get_user(session, team_id, user_id)
        if user is None or not user.google_doc_id:
            return ephemeral(NOT_SET_UP_TEXT)
        await users.set_reminder_time(session, user, reminder_time)

    log.info("reminder_updated", user_id=user_id, reminder_time=reminder_time)
    if reminder_time == "off":
        return ephemeral("\U0001f515 Daily reminders turned off.")
    return ephemeral(f"⏰ I'll remind you every day at {reminder_time} ({user.timezone}).")
