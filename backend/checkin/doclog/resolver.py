"""Where does the next entry go?

The document is a title followed by day sections::

    # Daily Check-ins

    ## Monday, December 30th, 2024
    • Fixed bug
    ## Tuesday, December 31st, 2024
    • Reviewed PR

Entries for a day that already has a heading go after the last non-blank
paragraph of that day's section. A day without a heading gets a new section
after the last existing section, so days stay in chronological order. With
no sections at all the new section follows the title, and a document with
neither starts at ``FALLBACK_INDEX``.
"""

from dataclasses import dataclass

from checkin.doclog.blocks import Heading, Paragraph, is_title, parse_block
from checkin.errors import PositionNotResolvable

FALLBACK_INDEX = 1


@dataclass(frozen=True)
class InsertPosition:
    index: int
    needs_new_heading: bool
    # The anchor is the document's last paragraph; its newline is fixed, so
    # text must be inserted before it instead of after.
    at_document_end: bool = False


def _after(paragraph: Paragraph, paragraphs: list[Paragraph]) -> tuple[int, bool]:
    if paragraph is paragraphs[-1]:
        return paragraph.end - 1, True
    return paragraph.end, False


def _section_tail(paragraphs: list[Paragraph], heading_pos: int) -> Paragraph:
    tail = paragraphs[heading_pos]
    for paragraph in paragraphs[heading_pos + 1:]:
        if isinstance(parse_block(paragraph.text), Heading):
            break
        if not paragraph.is_blank:
            tail = paragraph
    return tail


def resolve_insert_position(paragraphs: list[Paragraph], heading: str) -> InsertPosition:
    target = None
    last_heading = None
    for pos, paragraph in enumerate(paragraphs):
        if not isinstance(parse_block(paragraph.text), Heading):
            continue
        if target is None and heading in paragraph.text:
            target = pos
        last_heading = pos

    if target is not None:
        index, at_end = _after(_section_tail(paragraphs, target), paragraphs)
        position = InsertPosition(index, needs_new_heading=False, at_document_end=at_end)
    elif last_heading is not None:
        index, at_end = _after(_section_tail(paragraphs, last_heading), paragraphs)
        position = InsertPosition(index, needs_new_heading=True, at_document_end=at_end)
    else:
        title = next((p for p in paragraphs if is_title(p.text)), None)
        if title is not None:
            index, at_end = _after(title, paragraphs)
            position = InsertPosition(index, needs_new_heading=True, at_document_end=at_end)
        else:
            position = InsertPosition(FALLBACK_INDEX, needs_new_heading=True)

    if position.index < FALLBACK_INDEX:
        raise PositionNotResolvable(
            f"resolved offset {position.index} is before the document body"
        )
    return position
