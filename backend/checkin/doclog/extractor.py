from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import date

from checkin.doclog.blocks import Bullet, Heading, Paragraph, parse_block


@dataclass(frozen=True)
class Entry:
    day: date
    text: str


def iter_entries(paragraphs: Iterable[Paragraph]) -> Iterator[Entry]:
    current_day = None
    for paragraph in paragraphs:
        block = parse_block(paragraph.text)
        if isinstance(block, Heading):
            current_day = block.day
        elif isinstance(block, Bullet) and current_day is not None and block.text:
            yield Entry(day=current_day, text=block.text)


def filter_date_range(entries: Iterable[Entry], start: date, end: date) -> list[Entry]:
    return [e for e in entries if start <= e.day <= end]


def search_entries(entries: Iterable[Entry], keyword: str) -> list[Entry]:
    needle = keyword.strip().lower()
    if not needle:
        return []
    return [e for e in entries if needle in e.text.lower()]
