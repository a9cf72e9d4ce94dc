import httpx
import structlog

from checkin.doclog.blocks import TITLE_TEXT
from checkin.errors import CredentialExpired, DocumentStoreError, TransientStoreFailure
from checkin.google import oauth

log = structlog.get_logger()

DOCS_API = "https://docs.googleapis.com/v1/documents"


def doc_url(document_id: str) -> str:
    return f"https://docs.google.com/document/d/{document_id}/edit"


class DocsClient:
    def __init__(self, access_token: str) -> None:
        self.access_token = access_token

    @classmethod
    async def from_refresh_token(cls, refresh_token: str) -> "DocsClient":
        return cls(await oauth.refresh_access_token(refresh_token))

    async def _request(self, method: str, url: str, *, json: dict | None = None) -> dict:
        headers = {"Authorization": f"Bearer {self.access_token}"}
        try:
            async with httpx.AsyncClient(timeout=15) as client:
                resp = await client.request(method, url, headers=headers, json=json)
        except httpx.HTTPError as exc:
            log.warning("docs_request_error", url=url, error=str(exc))
            raise TransientStoreFailure(f"docs api unreachable: {exc}") from exc

        if resp.status_code == 200:
            return resp.json()

        log.warning("docs_api_error", url=url, status=resp.status_code)
        if resp.status_code in (401, 403):
            raise CredentialExpired(f"docs api refused access ({resp.status_code})", resp.status_code)
        if resp.status_code == 429 or resp.status_code >= 500:
            raise TransientStoreFailure(f"docs api error {resp.status_code}", resp.status_code)
        raise DocumentStoreError(f"docs api error {resp.status_code}: {resp.text[:200]}", resp.status_code)

    async def get_document(self, document_id: str) -> dict:
        return await self._request("GET", f"{DOCS_API}/{document_id}")

    async def batch_update(self, document_id: str, requests: list[dict]) -> dict:
        return await self._request(
            "POST",
            f"{DOCS_API}/{document_id}:batchUpdate",
            json={"requests": requests},
        )

    async def create_checkin_doc(self, user_name: str = "User") -> dict:
        title = f"Daily Check-ins - {user_name}"
        doc = await self._request("POST", DOCS_API, json={"title": title})
        document_id = doc["documentId"]
        await self.batch_update(
            document_id,
            [{"insertText": {"location": {"index": 1}, "text": f"{TITLE_TEXT}\n\n"}}],
        )
        log.info("checkin_doc_created", document_id=document_id)
        return {"doc_id": document_id, "doc_url": doc_url(document_id), "title": title}
