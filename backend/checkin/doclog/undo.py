from checkin.doclog.blocks import Bullet, Paragraph, parse_block


def find_last_entry(paragraphs: list[Paragraph]) -> tuple[Paragraph, str] | None:
    last = None
    for paragraph in paragraphs:
        block = parse_block(paragraph.text)
        if isinstance(block, Bullet) and block.text:
            last = (paragraph, block.text)
    return last


def build_delete_request(paragraph: Paragraph, paragraphs: list[Paragraph]) -> dict:
    start, end = paragraph.start, paragraph.end
    if paragraph is paragraphs[-1]:
        # The document's final newline can't be deleted; take the one before
        # the bullet with it instead.
        end -= 1
        if start > 1:
            start -= 1
    return {"deleteContentRange": {"range": {"startIndex": start, "endIndex": end}}}
