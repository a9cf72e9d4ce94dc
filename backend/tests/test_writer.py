import pytest

from checkin.doclog.resolver import InsertPosition
from checkin.doclog.writer import bullet_lines, build_insert_requests, entry_lines

HEADING = "Tuesday, December 31st, 2024"


def _text(requests):
    assert len(requests) == 1
    return requests[0]["insertText"]["text"]


class TestEntryLines:
    def test_multi_line_entry_becomes_separate_bullets(self):
        assert bullet_lines("Fixed bug\n- Reviewed PR\n\n• Wrote docs") == (
            "• Fixed bug\n• Reviewed PR\n• Wrote docs"
        )

    def test_blank_entry_has_no_lines(self):
        assert entry_lines("  \n \n") == []


class TestBuildInsertRequests:
    def test_new_heading(self):
        requests = build_insert_requests(InsertPosition(19, True), HEADING, "Fixed bug")
        assert requests[0]["insertText"]["location"] == {"index": 19}
        assert _text(requests) == f"\n## {HEADING}\n• Fixed bug\n"

    def test_existing_heading_inserts_bullet_only(self):
        requests = build_insert_requests(InsertPosition(40, False), HEADING, "Reviewed PR")
        assert _text(requests) == "• Reviewed PR\n"

    def test_document_end_puts_newline_first(self):
        requests = build_insert_requests(InsertPosition(40, False, True), HEADING, "Reviewed PR")
        assert _text(requests) == "\n• Reviewed PR"

    def test_empty_entry_rejected(self):
        with pytest.raises(ValueError):
            build_insert_requests(InsertPosition(19, True), HEADING, "•  ")
