"""Day-heading vocabulary shared by formatting and parsing.

Headings render as ``Tuesday, December 31st, 2024``. The same name tables
drive ``parse_heading`` so anything ``format_heading`` writes can be read
back into the date it came from.
"""

import re
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

DAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_MONTH_NUMBERS = {name: i for i, name in enumerate(MONTH_NAMES, 1)}

HEADING_RE = re.compile(
    r"^\s*(?:#{1,2}\s*)?"
    rf"(?P<weekday>{'|'.join(DAY_NAMES)}),\s+"
    rf"(?P<month>{'|'.join(MONTH_NAMES)})\s+"
    r"(?P<day>\d{1,2})(?:st|nd|rd|th),\s+"
    r"(?P<year>\d{4})"
)


def ordinal_suffix(n: int) -> str:
    if 10 <= n % 100 <= 20:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")


def format_heading(day: date) -> str:
    return (
        f"{DAY_NAMES[day.weekday()]}, {MONTH_NAMES[day.month - 1]} "
        f"{day.day}{ordinal_suffix(day.day)}, {day.year}"
    )


def parse_heading(text: str) -> date | None:
    match = HEADING_RE.match(text)
    if match is None:
        return None
    try:
        return date(
            int(match.group("year")),
            _MONTH_NUMBERS[match.group("month")],
            int(match.group("day")),
        )
    except ValueError:
        return None


def today_in(timezone: str, now: datetime | None = None) -> date:
    tz = ZoneInfo(timezone)
    if now is None:
        return datetime.now(tz).date()
    return now.astimezone(tz).date()


def week_bounds(day: date) -> tuple[date, date]:
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)


def format_date_range(start: date, end: date) -> str:
    start_month = MONTH_NAMES[start.month - 1][:3]
    end_month = MONTH_NAMES[end.month - 1][:3]
    if start_month == end_month:
        return f"{start_month} {start.day}-{end.day}"
    return f"{start_month} {start.day} - {end_month} {end.day}"
