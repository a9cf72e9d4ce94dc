from unittest.mock import AsyncMock, MagicMock

import pytest

from checkin.db.models import User
from checkin.doclog.blocks import paragraphs_from_document

NEW_DOC_BODY = "# Daily Check-ins\n\n\n"


class FakeDocs:
    """In-memory stand-in for the Docs API.

    The body is plain text whose first character sits at index 1, like a
    real document. Paragraph offsets are recomputed on every read and the
    final newline can't be touched, matching what the API enforces.
    """

    def __init__(self, body: str = NEW_DOC_BODY) -> None:
        assert body.endswith("\n")
        self.body = body
        self.batches: list[list[dict]] = []

    @property
    def lines(self) -> list[str]:
        return self.body.split("\n")[:-1]

    def document(self) -> dict:
        content: list[dict] = [{"endIndex": 1, "sectionBreak": {}}]
        index = 1
        for line in self.lines:
            text = line + "\n"
            end = index + len(text)
            content.append(
                {
                    "startIndex": index,
                    "endIndex": end,
                    "paragraph": {
                        "elements": [
                            {"startIndex": index, "endIndex": end, "textRun": {"content": text}}
                        ]
                    },
                }
            )
            index = end
        return {"documentId": "doc-1", "body": {"content": content}}

    def paragraphs(self):
        return paragraphs_from_document(self.document())

    async def get_document(self, document_id: str) -> dict:
        return self.document()

    async def batch_update(self, document_id: str, requests: list[dict]) -> dict:
        self.batches.append(requests)
        for request in requests:
            if "insertText" in request:
                index = request["insertText"]["location"]["index"]
                assert 1 <= index <= len(self.body), f"insert index {index} out of range"
                text = request["insertText"]["text"]
                self.body = self.body[: index - 1] + text + self.body[index - 1:]
            elif "deleteContentRange" in request:
                rng = request["deleteContentRange"]["range"]
                start, end = rng["startIndex"], rng["endIndex"]
                assert 1 <= start < end <= len(self.body), f"delete range {start}-{end} out of range"
                self.body = self.body[: start - 1] + self.body[end - 1:]
        return {"documentId": document_id, "replies": [{} for _ in requests]}


@pytest.fixture
def make_docs():
    return FakeDocs


@pytest.fixture
def docs():
    return FakeDocs()


@pytest.fixture
def session_factory():
    session = AsyncMock()
    factory = MagicMock()
    factory.return_value.__aenter__.return_value = session
    factory.return_value.__aexit__.return_value = False
    return factory


@pytest.fixture
def fake_redis():
    lock = AsyncMock()
    lock.acquire.return_value = True
    redis = MagicMock()
    redis.lock.return_value = lock
    return redis


@pytest.fixture
def make_user():
    def _make_user(**overrides) -> User:
        fields = {
            "slack_team_id": "T1",
            "slack_user_id": "U1",
            "display_name": "Ada",
            "google_refresh_token": "encrypted",
            "google_doc_id": "doc-1",
            "timezone": "UTC",
            "reminder_time": "17:00",
            "last_log_at": None,
            "last_reminder_on": None,
            "current_streak": 0,
        }
        fields.update(overrides)
        return User(**fields)

    return _make_user
