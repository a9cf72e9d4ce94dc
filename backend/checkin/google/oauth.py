from urllib.parse import urlencode

import httpx
import structlog

from checkin.config import settings
from checkin.errors import CredentialExpired, DocumentStoreError, TransientStoreFailure

log = structlog.get_logger()

GOOGLE_AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_REVOKE_URL = "https://oauth2.googleapis.com/revoke"

SCOPES = " ".join([
    "https://www.googleapis.com/auth/drive.file",
    "https://www.googleapis.com/auth/documents",
])


def get_auth_url(state: str) -> str:
    params = urlencode({
        "client_id": settings.google_client_id,
        "redirect_uri": settings.google_redirect_uri,
        "response_type": "code",
        "scope": SCOPES,
        "access_type": "offline",
        # Forces the consent screen so Google issues a refresh token every time.
        "prompt": "consent",
        "state": state,
    })
    return f"{GOOGLE_AUTHORIZE_URL}?{params}"


async def _token_request(data: dict) -> dict:
    try:
        async with httpx.AsyncClient(timeout=10) as client:
            resp = await client.post(GOOGLE_TOKEN_URL, data=data)
    except httpx.HTTPError as exc:
        raise TransientStoreFailure(f"token endpoint unreachable: {exc}") from exc

    try:
        payload = resp.json()
    except ValueError:
        payload = {}
    if resp.status_code == 200:
        return payload

    error = payload.get("error", "")
    log.warning("google_token_error", status=resp.status_code, error=error)
    if error in ("invalid_grant", "unauthorized_client"):
        raise CredentialExpired(f"google rejected credentials: {error}", resp.status_code)
    if resp.status_code >= 500:
        raise TransientStoreFailure(f"token endpoint error {resp.status_code}", resp.status_code)
    raise DocumentStoreError(f"token request failed: {error or resp.status_code}", resp.status_code)


async def exchange_code(code: str) -> dict:
    return await _token_request({
        "code": code,
        "client_id": settings.google_client_id,
        "client_secret": settings.google_client_secret,
        "redirect_uri": settings.google_redirect_uri,
        "grant_type": "authorization_code",
    })


async def refresh_access_token(refresh_token: str) -> str:
    tokens = await _token_request({
        "refresh_token": refresh_token,
        "client_id": settings.google_client_id,
        "client_secret": settings.google_client_secret,
        "grant_type": "refresh_token",
    })
    return tokens["access_token"]


async def revoke_token(token: str) -> bool:
    try:
        async with httpx.AsyncClient(timeout=10) as client:
            resp = await client.post(GOOGLE_REVOKE_URL, data={"token": token})
    except httpx.HTTPError as exc:
        log.warning("google_revoke_error", error=str(exc))
        return False
    if resp.status_code != 200:
        log.warning("google_revoke_failed", status=resp.status_code)
        return False
    return True
