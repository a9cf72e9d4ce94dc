import base64

import pytest
from cryptography.exceptions import InvalidTag

from checkin.db.crypto import decrypt, encrypt, generate_key

KEY = "00112233445566778899aabbccddeeff00112233445566778899aabbccddeeff"


def test_round_trip():
    token = encrypt("1//refresh-token", key=KEY)
    assert token != "1//refresh-token"
    assert decrypt(token, key=KEY) == "1//refresh-token"


def test_nonce_differs_per_call():
    assert encrypt("same", key=KEY) != encrypt("same", key=KEY)


def test_tampering_detected():
    nonce, ciphertext = encrypt("secret", key=KEY).split(":")
    raw = bytearray(base64.b64decode(ciphertext))
    raw[0] ^= 0x01
    forged = f"{nonce}:{base64.b64encode(bytes(raw)).decode()}"
    with pytest.raises(InvalidTag):
        decrypt(forged, key=KEY)


def test_wrong_key_detected():
    token = encrypt("secret", key=KEY)
    with pytest.raises(InvalidTag):
        decrypt(token, key=generate_key())


def test_malformed_input():
    with pytest.raises(ValueError):
        decrypt("no-separator", key=KEY)


def test_key_must_be_64_hex_chars():
    with pytest.raises(ValueError):
        encrypt("secret", key="abc")
    assert len(generate_key()) == 64
