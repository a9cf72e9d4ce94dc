from checkin.doclog.dates import format_heading
from checkin.doclog.extractor import Entry

NOT_SET_UP_TEXT = (
    "❌ You haven't set up Daily Check-ins yet. "
    "Run `/checkin setup` to get started!"
)
RECONNECT_TEXT = (
    "\U0001f504 Your Google connection expired. "
    "Please run `/checkin setup` to reconnect."
)
LOG_FAILED_TEXT = "❌ Failed to log your entry. Please try again in a moment."
NOTHING_TO_LOG_TEXT = "\U0001f914 There was nothing to log in that message."
NOTHING_TO_UNDO_TEXT = "\U0001f937 No entries found to remove."

HELP_TEXT = (
    "`/checkin setup` - Connect Google & create your log doc\n"
    "`/checkin status` - Check your connection status\n"
    "`/checkin weekly` - Get your weekly summary\n"
    "`/checkin search <keywords>` - Find past entries\n"
    "`/checkin undo` - Remove your last entry\n"
    "`/checkin remind <HH:MM|off>` - Set or turn off your daily reminder\n"
    "`/checkin disconnect` - Forget your Google connection\n"
    "`/checkin help` - Show this help message\n\n"
    "*To log an entry:* Just DM me with your update!"
)

MAX_SEARCH_RESULTS = 10


def _section(text: str) -> dict:
    return {"type": "section", "text": {"type": "mrkdwn", "text": text}}


def _context(text: str) -> dict:
    return {"type": "context", "elements": [{"type": "mrkdwn", "text": text}]}


def ephemeral(text: str, blocks: list[dict] | None = None) -> dict:
    message: dict = {"response_type": "ephemeral", "text": text}
    if blocks is not None:
        message["blocks"] = blocks
    return message


def build_setup_blocks(auth_url: str) -> list[dict]:
    return [
        _section(
            "\U0001f680 *Set up Daily Check-ins*\n\n"
            "Connect your Google account to create a new document for your daily logs."
        ),
        {
            "type": "actions",
            "elements": [
                {
                    "type": "button",
                    "text": {
                        "type": "plain_text",
                        "text": "\U0001f517 Connect Google Account",
                        "emoji": True,
                    },
                    "url": auth_url,
                    "style": "primary",
                    "action_id": "connect_google",
                }
            ],
        },
        _context("\U0001f512 We only access documents created by this app. Your data stays yours."),
    ]


def build_not_set_up_blocks() -> list[dict]:
    return [
        _section(
            "\U0001f44b Hey! I'd love to log that for you, "
            "but you haven't set up your check-in doc yet."
        ),
        _section(
            "Run `/checkin setup` in any channel to connect your Google account "
            "and create your log."
        ),
    ]


def build_welcome_blocks(doc_url: str, title: str) -> list[dict]:
    return [
        _section("\U0001f389 *You're all set!*\n\nYour Daily Check-in doc has been created."),
        _section(f"\U0001f4c4 *Your document:* <{doc_url}|{title}>"),
        _section(
            "*How to use:*\nJust send me a DM with what you worked on, "
            "and I'll add it to your log!"
        ),
        _context("Try `/checkin status` to see your connection details."),
    ]


def build_status_blocks(doc_url: str, reminder_time: str, timezone: str, streak: int) -> list[dict]:
    return [
        _section(
            "✅ *Daily Check-ins Active*\n\n"
            f"\U0001f4c4 *Document:* <{doc_url}|Open your log>\n"
            f"\U0001f550 *Reminder:* {reminder_time}\n"
            f"\U0001f30d *Timezone:* {timezone}\n"
            f"\U0001f525 *Streak:* {streak} day{'s' if streak != 1 else ''}"
        ),
        _context("DM me anytime to log an entry!"),
    ]


def build_logged_blocks(lines: list[str], doc_url: str) -> list[dict]:
    if len(lines) == 1:
        body = f"✅ *Logged:* {lines[0]}"
    else:
        body = "✅ *Logged:*\n" + "\n".join(f"• {line}" for line in lines)
    return [_section(body), _context(f"<{doc_url}|View your log>")]


def build_help_blocks() -> list[dict]:
    return [_section("*\U0001f4dd Daily Check-in Commands*"), _section(HELP_TEXT)]


def build_reminder_blocks(streak: int) -> list[dict]:
    streak_text = (
        f"\U0001f525 Current streak: {streak} days" if streak else "Start your streak today!"
    )
    return [
        _section(
            "\U0001f44b *Daily Check-in Reminder*\n\n"
            "What did you work on today? Just reply to this message to log it!"
        ),
        _context(streak_text),
    ]


def build_search_result_blocks(keyword: str, entries: list[Entry]) -> list[dict]:
    if not entries:
        return [_section(f"\U0001f50d No entries matching *{keyword}*.")]

    shown = entries[-MAX_SEARCH_RESULTS:]
    blocks = [_section(f"\U0001f50d *{len(entries)}* entr{'y' if len(entries) == 1 else 'ies'} matching *{keyword}*")]
    blocks.append({"type": "divider"})
    lines = [f"*{format_heading(e.day)}*\n• {e.text}" for e in reversed(shown)]
    blocks.append(_section("\n".join(lines)))
    if len(entries) > len(shown):
        blocks.append(_context(f"Showing the {len(shown)} most recent matches."))
    return blocks
