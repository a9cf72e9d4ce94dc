from dataclasses import dataclass
from datetime import date

from checkin.doclog.dates import parse_heading

BULLET = "•"
GROUP_MARKER = "##"
TITLE_MARKER = "Daily Check-ins"
TITLE_TEXT = f"# {TITLE_MARKER}"


@dataclass(frozen=True)
class Paragraph:
    text: str
    start: int
    end: int

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()


@dataclass(frozen=True)
class Heading:
    day: date


@dataclass(frozen=True)
class Bullet:
    text: str


@dataclass(frozen=True)
class Other:
    pass


ParsedBlock = Heading | Bullet | Other


def paragraphs_from_document(document: dict) -> list[Paragraph]:
    """Flatten a Docs API document body into paragraphs.

    Text keeps everything except the terminating newline; offsets are the
    API's own ``startIndex``/``endIndex`` so they can be fed straight back
    into ``batchUpdate`` requests.
    """
    paragraphs = []
    for element in (document.get("body") or {}).get("content", []):
        paragraph = element.get("paragraph")
        if paragraph is None:
            continue
        text = "".join(
            (el.get("textRun") or {}).get("content", "")
            for el in paragraph.get("elements", [])
        )
        paragraphs.append(
            Paragraph(
                text=text.rstrip("\n"),
                start=element.get("startIndex", 0),
                end=element["endIndex"],
            )
        )
    return paragraphs


def parse_block(text: str) -> ParsedBlock:
    day = parse_heading(text)
    if day is not None:
        return Heading(day)
    stripped = text.strip()
    if stripped.startswith(BULLET):
        return Bullet(stripped[len(BULLET):].strip())
    return Other()


def is_title(text: str) -> bool:
    return TITLE_MARKER in text or text.startswith("# ")
