"""AES-256-GCM encryption for OAuth tokens at rest.

Stored form is ``base64(nonce):base64(ciphertext)``; the GCM tag travels at
the end of the ciphertext, as ``AESGCM`` produces it.
"""

import base64
import os

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from checkin.config import settings

NONCE_LENGTH = 12


def _key(key: str | None) -> bytes:
    key = key if key is not None else settings.encryption_key
    if not key:
        raise ValueError("ENCRYPTION_KEY is not configured")
    if len(key) != 64:
        raise ValueError("ENCRYPTION_KEY must be 64 hex characters (32 bytes)")
    return bytes.fromhex(key)


def generate_key() -> str:
    return os.urandom(32).hex()


def encrypt(plaintext: str, key: str | None = None) -> str:
    nonce = os.urandom(NONCE_LENGTH)
    ciphertext = AESGCM(_key(key)).encrypt(nonce, plaintext.encode(), None)
    return f"{base64.b64encode(nonce).decode()}:{base64.b64encode(ciphertext).decode()}"


def decrypt(token: str, key: str | None = None) -> str:
    """Raises ``ValueError`` for malformed input and ``InvalidTag`` if tampered."""
    parts = token.split(":")
    if len(parts) != 2:
        raise ValueError("invalid encrypted data format")
    nonce, ciphertext = (base64.b64decode(p) for p in parts)
    return AESGCM(_key(key)).decrypt(nonce, ciphertext, None).decode()
