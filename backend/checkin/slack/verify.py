import hashlib
import hmac
import time

MAX_REQUEST_AGE = 60 * 5


def verify_slack_signature(
    signing_secret: str,
    timestamp: str,
    body: bytes,
    signature: str,
    now: float | None = None,
) -> bool:
    try:
        sent_at = int(timestamp)
    except ValueError:
        return False
    now = time.time() if now is None else now
    if abs(now - sent_at) > MAX_REQUEST_AGE:
        return False
    basestring = f"v0:{timestamp}:".encode() + body
    computed = "v0=" + hmac.new(
        signing_secret.encode(), basestring, hashlib.sha256
    ).hexdigest()
    return hmac.compare_digest(computed, signature)
