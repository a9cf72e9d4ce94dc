import json

import structlog
from fastapi import Request, Response

from checkin.config import settings
from checkin.slack import router
from checkin.slack.verify import verify_slack_signature

log = structlog.get_logger()


def is_loggable_dm(event: dict) -> bool:
    if event.get("type") != "message" or event.get("channel_type") != "im":
        return False
    # Bot echoes, edits, deletions and joins all carry one of these.
    if event.get("bot_id") or event.get("subtype"):
        return False
    return bool((event.get("text") or "").strip())


@router.post("/events")
async def slack_events(request: Request) -> Response:
    body = await request.body()
    timestamp = request.headers.get("X-Slack-Request-Timestamp", "")
    signature = request.headers.get("X-Slack-Signature", "")

    if settings.slack_signing_secret and not verify_slack_signature(
        settings.slack_signing_secret, timestamp, body, signature
    ):
        return Response(status_code=401)

    payload = json.loads(body)

    if payload.get("type") == "url_verification":
        return Response(
            content=json.dumps({"challenge": payload["challenge"]}),
            media_type="application/json",
        )

    event = payload.get("event", {})
    if not is_loggable_dm(event):
        return Response(status_code=200)

    dedup_key = event.get("client_msg_id") or payload.get("event_id") or event.get("ts")
    dedup = request.app.state.dedup
    if dedup_key and dedup.contains(dedup_key):
        log.info("duplicate_message_skipped", key=dedup_key)
        return Response(status_code=200)

    team_id = payload.get("team_id") or event.get("team", "")
    await request.app.state.arq_pool.enqueue_job(
        "log_message",
        team_id,
        event.get("user", ""),
        event.get("channel", ""),
        event.get("ts", ""),
        event.get("text", ""),
    )
    # Only a delivery that made it onto the queue counts; Slack retries the rest.
    if dedup_key:
        dedup.add(dedup_key)
    log.info("message_enqueued", team_id=team_id, user_id=event.get("user"))
    return Response(status_code=200)
