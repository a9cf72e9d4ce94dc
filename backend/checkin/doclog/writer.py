import re

from checkin.doclog.blocks import BULLET, GROUP_MARKER
from checkin.doclog.resolver import InsertPosition

_MARKER_RE = re.compile(r"^\s*[-•*]\s*")


def entry_lines(entry_text: str) -> list[str]:
    lines = (_MARKER_RE.sub("", line).strip() for line in entry_text.splitlines())
    return [line for line in lines if line]


def bullet_lines(entry_text: str) -> str:
    return "\n".join(f"{BULLET} {line}" for line in entry_lines(entry_text))


def build_insert_requests(
    position: InsertPosition, heading: str, entry_text: str
) -> list[dict]:
    bullets = bullet_lines(entry_text)
    if not bullets:
        raise ValueError("entry text is empty")

    if position.needs_new_heading:
        payload = f"\n{GROUP_MARKER} {heading}\n{bullets}"
    else:
        payload = bullets

    text = f"\n{payload}" if position.at_document_end else f"{payload}\n"
    return [
        {
            "insertText": {
                "location": {"index": position.index},
                "text": text,
            }
        }
    ]
