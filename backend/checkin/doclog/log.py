from dataclasses import dataclass
from datetime import date
from typing import Protocol

import structlog

from checkin.doclog.blocks import paragraphs_from_document
from checkin.doclog.dates import format_heading
from checkin.doclog.extractor import Entry, filter_date_range, iter_entries, search_entries
from checkin.doclog.resolver import resolve_insert_position
from checkin.doclog.undo import build_delete_request, find_last_entry
from checkin.doclog.writer import build_insert_requests, entry_lines

log = structlog.get_logger()


class DocumentStore(Protocol):
    async def get_document(self, document_id: str) -> dict: ...

    async def batch_update(self, document_id: str, requests: list[dict]) -> dict: ...


@dataclass(frozen=True)
class AppendResult:
    heading: str
    lines: list[str]
    new_heading: bool


class CheckinLog:
    def __init__(self, docs: DocumentStore, document_id: str) -> None:
        self.docs = docs
        self.document_id = document_id

    async def _paragraphs(self):
        document = await self.docs.get_document(self.document_id)
        return paragraphs_from_document(document)

    async def append(self, entry_text: str, day: date) -> AppendResult:
        heading = format_heading(day)
        paragraphs = await self._paragraphs()
        position = resolve_insert_position(paragraphs, heading)
        requests = build_insert_requests(position, heading, entry_text)
        await self.docs.batch_update(self.document_id, requests)
        log.info(
            "entry_appended",
            document_id=self.document_id,
            index=position.index,
            new_heading=position.needs_new_heading,
        )
        return AppendResult(
            heading=heading,
            lines=entry_lines(entry_text),
            new_heading=position.needs_new_heading,
        )

    async def undo(self) -> str | None:
        paragraphs = await self._paragraphs()
        found = find_last_entry(paragraphs)
        if found is None:
            return None
        paragraph, text = found
        await self.docs.batch_update(
            self.document_id, [build_delete_request(paragraph, paragraphs)]
        )
        log.info("entry_removed", document_id=self.document_id, start=paragraph.start)
        return text

    async def entries(self) -> list[Entry]:
        return list(iter_entries(await self._paragraphs()))

    async def entries_between(self, start: date, end: date) -> list[Entry]:
        return filter_date_range(await self.entries(), start, end)

    async def search(self, keyword: str) -> list[Entry]:
        return search_entries(await self.entries(), keyword)
