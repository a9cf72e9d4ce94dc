from html import escape

import structlog
from fastapi import Request
from fastapi.responses import HTMLResponse
from jose import JWTError

from checkin.auth import router
from checkin.auth.state import read_state
from checkin.config import settings
from checkin.db import users
from checkin.db.session import async_session_factory
from checkin.errors import CheckinError
from checkin.google import oauth as google_oauth
from checkin.google.docs import DocsClient
from checkin.slack import client as slack_client
from checkin.slack.messages import build_welcome_blocks

log = structlog.get_logger()

PAGE_TEMPLATE = """\
<!DOCTYPE html>
<html>
  <head>
    <title>{title}</title>
    <style>
      body {{ font-family: -apple-system, BlinkMacSystemFont, sans-serif; display: flex;
             justify-content: center; align-items: center; height: 100vh; margin: 0;
             background: {background}; }}
      .card {{ background: white; padding: 3rem; border-radius: 16px; text-align: center;
               max-width: 400px; box-shadow: 0 20px 60px rgba(0,0,0,0.2); }}
      a {{ display: inline-block; margin-top: 1.5rem; padding: 0.75rem 1.5rem;
           background: #667eea; color: white; text-decoration: none; border-radius: 8px; }}
    </style>
  </head>
  <body><div class="card">{body}</div></body>
</html>
"""


def _page(title: str, body: str, status_code: int = 200, background: str = "#667eea") -> HTMLResponse:
    return HTMLResponse(
        PAGE_TEMPLATE.format(title=title, body=body, background=background),
        status_code=status_code,
    )


def _failure(message: str, status_code: int) -> HTMLResponse:
    return _page(
        "Setup Failed",
        "<h1>❌ Setup Failed</h1>"
        f"<p>{escape(message)}</p>"
        "<p>Please try running <code>/checkin setup</code> again.</p>",
        status_code=status_code,
        background="#fee",
    )


async def _slack_profile(user_id: str) -> tuple[str, str]:
    data = await slack_client.users_info(user_id)
    if not data.get("ok"):
        return "User", settings.default_timezone
    user = data.get("user", {})
    name = user.get("real_name") or user.get("name") or "User"
    return name, user.get("tz") or settings.default_timezone


@router.get("/google/callback")
async def google_oauth_callback(request: Request):
    code = request.query_params.get("code")
    if not code:
        return _failure("Missing authorization code.", 400)

    try:
        state = read_state(request.query_params.get("state", ""))
    except JWTError:
        log.warning("oauth_invalid_state")
        return _failure("This setup link is invalid or has expired.", 400)

    team_id, user_id = state["team_id"], state["user_id"]

    try:
        tokens = await google_oauth.exchange_code(code)
        refresh_token = tokens.get("refresh_token")
        if not refresh_token:
            return _failure(
                "No refresh token received. Make sure to grant offline access.", 400
            )

        user_name, timezone = await _slack_profile(user_id)
        docs = DocsClient(tokens["access_token"])
        doc = await docs.create_checkin_doc(user_name)

        async with async_session_factory() as session:
            await users.save_user(
                session,
                team_id=team_id,
                user_id=user_id,
                refresh_token=refresh_token,
                doc_id=doc["doc_id"],
                display_name=user_name,
                timezone=timezone,
            )
    except CheckinError as exc:
        log.error("oauth_callback_failed", team_id=team_id, user_id=user_id, error=str(exc))
        return _failure(str(exc), 500)

    await slack_client.post_message(
        user_id,
        text="You're all set! Your Daily Check-in doc has been created.",
        blocks=build_welcome_blocks(doc["doc_url"], doc["title"]),
    )
    log.info("oauth_complete", team_id=team_id, user_id=user_id)

    return _page(
        "Setup Complete",
        "<h1>\U0001f389 Setup Complete!</h1>"
        "<p>Your Daily Check-in doc has been created. "
        "You can close this window and return to Slack.</p>"
        f'<a href="{escape(doc["doc_url"])}" target="_blank">Open Your Doc →</a>',
    )
