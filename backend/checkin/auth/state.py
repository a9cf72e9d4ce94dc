from datetime import datetime, timedelta, timezone

from jose import jwt

from checkin.config import settings

STATE_TTL = timedelta(minutes=15)
ALGORITHM = "HS256"


def create_state(team_id: str, user_id: str, channel_id: str = "", now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    return jwt.encode(
        {
            "team_id": team_id,
            "user_id": user_id,
            "channel_id": channel_id,
            "exp": now + STATE_TTL,
        },
        settings.state_secret,
        algorithm=ALGORITHM,
    )


def read_state(token: str) -> dict:
    """Raises ``jose.JWTError`` for forged or expired state."""
    payload = jwt.decode(token, settings.state_secret, algorithms=[ALGORITHM])
    return {
        "team_id": payload["team_id"],
        "user_id": payload["user_id"],
        "channel_id": payload.get("channel_id", ""),
    }
