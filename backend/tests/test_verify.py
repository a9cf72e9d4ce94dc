import hashlib
import hmac

from checkin.slack.verify import verify_slack_signature

SECRET = "8f742231b10e8888abcd99yyyzzz85a5"
BODY = b"token=xyz&command=%2Fcheckin&text=status"
NOW = 1_700_000_000


def _sign(timestamp: str, body: bytes = BODY) -> str:
    base = f"v0:{timestamp}:".encode() + body
    return "v0=" + hmac.new(SECRET.encode(), base, hashlib.sha256).hexdigest()


def test_valid_signature():
    ts = str(NOW)
    assert verify_slack_signature(SECRET, ts, BODY, _sign(ts), now=NOW)


def test_tampered_body_rejected():
    ts = str(NOW)
    assert not verify_slack_signature(SECRET, ts, BODY + b"x", _sign(ts), now=NOW)


def test_stale_timestamp_rejected():
    ts = str(NOW - 301)
    assert not verify_slack_signature(SECRET, ts, BODY, _sign(ts), now=NOW)


def test_garbage_timestamp_rejected():
    assert not verify_slack_signature(SECRET, "not-a-number", BODY, "v0=abc", now=NOW)
