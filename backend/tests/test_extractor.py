from datetime import date

from checkin.doclog.extractor import Entry, filter_date_range, iter_entries, search_entries
from checkin.doclog.undo import build_delete_request, find_last_entry

BODY = (
    "# Daily Check-ins\n"
    "• orphan before any heading\n"
    "\n"
    "## Monday, December 30th, 2024\n"
    "• Fixed login bug\n"
    "• Paired with Sam\n"
    "\n"
    "## Tuesday, December 31st, 2024\n"
    "• Reviewed PR for BUG tracker\n"
    "Some free text the user typed\n"
    "## Wednesday, January 1st, 2025\n"
    "• Rested\n"
    "\n"
)


class TestIterEntries:
    def test_groups_bullets_under_their_day(self, make_docs):
        entries = list(iter_entries(make_docs(BODY).paragraphs()))
        assert entries == [
            Entry(date(2024, 12, 30), "Fixed login bug"),
            Entry(date(2024, 12, 30), "Paired with Sam"),
            Entry(date(2024, 12, 31), "Reviewed PR for BUG tracker"),
            Entry(date(2025, 1, 1), "Rested"),
        ]

    def test_extraction_is_repeatable(self, make_docs):
        paragraphs = make_docs(BODY).paragraphs()
        assert list(iter_entries(paragraphs)) == list(iter_entries(paragraphs))

    def test_empty_document(self, make_docs):
        assert list(iter_entries(make_docs().paragraphs())) == []


class TestFilters:
    def test_date_range_is_inclusive(self, make_docs):
        entries = list(iter_entries(make_docs(BODY).paragraphs()))
        kept = filter_date_range(entries, date(2024, 12, 30), date(2024, 12, 31))
        assert [e.day for e in kept] == [date(2024, 12, 30)] * 2 + [date(2024, 12, 31)]

    def test_search_is_case_insensitive(self, make_docs):
        entries = list(iter_entries(make_docs(BODY).paragraphs()))
        assert [e.text for e in search_entries(entries, "bug")] == [
            "Fixed login bug",
            "Reviewed PR for BUG tracker",
        ]

    def test_blank_keyword_matches_nothing(self, make_docs):
        entries = list(iter_entries(make_docs(BODY).paragraphs()))
        assert search_entries(entries, "  ") == []


class TestUndo:
    def test_finds_last_bullet_in_document(self, make_docs):
        paragraphs = make_docs(BODY).paragraphs()
        paragraph, text = find_last_entry(paragraphs)
        assert text == "Rested"
        assert build_delete_request(paragraph, paragraphs) == {
            "deleteContentRange": {
                "range": {"startIndex": paragraph.start, "endIndex": paragraph.end}
            }
        }

    def test_nothing_to_remove(self, make_docs):
        assert find_last_entry(make_docs().paragraphs()) is None

    def test_last_paragraph_takes_preceding_newline(self, make_docs):
        docs = make_docs("# Daily Check-ins\n## Monday, December 30th, 2024\n• Only\n")
        paragraphs = docs.paragraphs()
        paragraph, _ = find_last_entry(paragraphs)
        rng = build_delete_request(paragraph, paragraphs)["deleteContentRange"]["range"]
        assert rng == {"startIndex": paragraph.start - 1, "endIndex": paragraph.end - 1}

    def test_empty_bullets_are_not_entries(self, make_docs):
        assert find_last_entry(make_docs("•\n").paragraphs()) is None

        paragraphs = make_docs("## Monday, December 30th, 2024\n• Shipped\n•\n").paragraphs()
        paragraph, text = find_last_entry(paragraphs)
        assert text == "Shipped"
        rng = build_delete_request(paragraph, paragraphs)["deleteContentRange"]["range"]
        assert rng["startIndex"] < rng["endIndex"]
