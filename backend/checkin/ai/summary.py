import structlog
from anthropic import APIError, AsyncAnthropic

from checkin.ai.prompts import WEEKLY_SUMMARY_SYSTEM_PROMPT
from checkin.config import settings
from checkin.doclog.extractor import Entry

log = structlog.get_logger()


def no_entries_summary(date_range: str) -> str:
    return (
        f"\U0001f4ca *Your Week ({date_range})*\n\n"
        "No entries yet! Start logging your work by sending me a DM."
    )


def basic_summary(entries: list[Entry], date_range: str) -> str:
    by_day: dict = {}
    for entry in entries:
        by_day.setdefault(entry.day, []).append(entry.text)

    lines = [
        f"\U0001f4ca *Your Week in Review ({date_range})*",
        "",
        f"\U0001f3af *Entries Logged:* {len(entries)}",
        f"\U0001f4c5 *Active Days:* {len(by_day)}",
        "",
        "*Recent Entries:*",
    ]
    lines.extend(f"• {entry.text}" for entry in entries[-5:])
    return "\n".join(lines)


def _format_entries(entries: list[Entry]) -> str:
    return "\n".join(f"- {e.day.strftime('%a %b %d %Y')}: {e.text}" for e in entries)


async def summarize_week(
    entries: list[Entry],
    date_range: str,
    client: AsyncAnthropic | None = None,
) -> str:
    if not entries:
        return no_entries_summary(date_range)
    if client is None:
        if not settings.anthropic_api_key:
            return basic_summary(entries, date_range)
        client = AsyncAnthropic(api_key=settings.anthropic_api_key)

    try:
        response = await client.messages.create(
            model=settings.anthropic_model,
            max_tokens=1024,
            system=WEEKLY_SUMMARY_SYSTEM_PROMPT,
            messages=[
                {
                    "role": "user",
                    "content": f"Date range: {date_range}\n\nEntries:\n{_format_entries(entries)}",
                }
            ],
        )
        text = response.content[0].text.strip()
    except APIError as exc:
        log.error("weekly_summary_error", error=str(exc))
        return basic_summary(entries, date_range)
    return text or basic_summary(entries, date_range)
