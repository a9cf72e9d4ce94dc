import re
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

REMINDER_OFF = "off"

_TIME_RE = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")


def parse_reminder_time(value: str) -> str:
    value = value.strip().lower()
    if value == REMINDER_OFF:
        return REMINDER_OFF
    match = _TIME_RE.match(value)
    if match is None:
        raise ValueError(f"invalid reminder time: {value!r}")
    return f"{int(match.group(1)):02d}:{match.group(2)}"


def is_reminder_due(reminder_time: str | None, now: datetime, timezone: str, window_minutes: int = 5) -> bool:
    if not reminder_time or reminder_time == REMINDER_OFF:
        return False
    hour, minute = (int(p) for p in reminder_time.split(":"))
    local = now.astimezone(ZoneInfo(timezone))
    delta = abs((hour * 60 + minute) - (local.hour * 60 + local.minute))
    # Around midnight 23:58 and 00:01 are three minutes apart, not 1437.
    return min(delta, 24 * 60 - delta) <= window_minutes


def local_day(moment: datetime, timezone: str) -> date:
    return moment.astimezone(ZoneInfo(timezone)).date()


def logged_today(last_log_at: datetime | None, now: datetime, timezone: str) -> bool:
    if last_log_at is None:
        return False
    return local_day(last_log_at, timezone) == local_day(now, timezone)


def next_streak(last_log_at: datetime | None, current_streak: int, now: datetime, timezone: str) -> int:
    if last_log_at is None:
        return 1
    previous = local_day(last_log_at, timezone)
    today = local_day(now, timezone)
    if previous == today:
        return max(current_streak, 1)
    if previous == today - timedelta(days=1):
        return current_streak + 1
    return 1
