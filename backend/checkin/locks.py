from contextlib import asynccontextmanager

import structlog
from redis.exceptions import LockError

from checkin.errors import DocumentBusy

log = structlog.get_logger()

LOCK_TIMEOUT = 30
ACQUIRE_TIMEOUT = 10


def lock_name(team_id: str, user_id: str) -> str:
    return f"checkin:doc-lock:{team_id}:{user_id}"


@asynccontextmanager
async def user_document_lock(redis, team_id: str, user_id: str):
    """Hold a Redis lock for one user's document read-modify-write."""
    lock = redis.lock(
        lock_name(team_id, user_id),
        timeout=LOCK_TIMEOUT,
        blocking_timeout=ACQUIRE_TIMEOUT,
    )
    if not await lock.acquire():
        log.warning("document_lock_busy", team_id=team_id, user_id=user_id)
        raise DocumentBusy(f"document for {user_id} is being updated")
    try:
        yield
    finally:
        try:
            await lock.release()
        except LockError:
            log.warning("document_lock_expired", team_id=team_id, user_id=user_id)
