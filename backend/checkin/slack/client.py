import asyncio

import httpx
import structlog

from checkin.config import settings

log = structlog.get_logger()

SLACK_API = "https://slack.com/api"


async def _request(
    method: str,
    *,
    json: dict | None = None,
    params: dict | None = None,
    token: str | None = None,
    max_retries: int = 3,
) -> dict:
    headers = {"Authorization": f"Bearer {token or settings.slack_bot_token}"}
    url = f"{SLACK_API}/{method}"
    for attempt in range(max_retries):
        async with httpx.AsyncClient(timeout=10) as client:
            resp = await client.post(url, headers=headers, json=json, params=params)
        if resp.status_code == 429:
            retry_after = int(resp.headers.get("Retry-After", 1))
            log.warning("slack_rate_limited", method=method, retry_after=retry_after, attempt=attempt)
            await asyncio.sleep(retry_after)
            continue
        data = resp.json()
        if not data.get("ok"):
            log.error("slack_api_error", method=method, error=data.get("error"))
        return data
    return {"ok": False, "error": "max_retries_exceeded"}


async def post_message(
    channel: str,
    text: str | None = None,
    blocks: list[dict] | None = None,
) -> dict:
    payload: dict = {"channel": channel}
    if text is not None:
        payload["text"] = text
    if blocks is not None:
        payload["blocks"] = blocks
    return await _request("chat.postMessage", json=payload)


async def add_reaction(channel: str, ts: str, name: str) -> dict:
    return await _request(
        "reactions.add", json={"channel": channel, "timestamp": ts, "name": name}
    )


async def remove_reaction(channel: str, ts: str, name: str) -> dict:
    return await _request(
        "reactions.remove", json={"channel": channel, "timestamp": ts, "name": name}
    )


async def users_info(user_id: str) -> dict:
    return await _request("users.info", params={"user": user_id})


async def respond(response_url: str, message: dict) -> None:
    """Post a delayed reply to a slash command's ``response_url``."""
    async with httpx.AsyncClient(timeout=10) as client:
        resp = await client.post(
            response_url, json={"response_type": "ephemeral", **message}
        )
    if resp.status_code != 200:
        log.error("slack_response_url_error", status=resp.status_code)
