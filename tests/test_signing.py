import base64
import hashlib
import hmac

import pytest

from forkast_keygen.errors import InputValidationError
from forkast_keygen.signing import (
    decode_secret,
    hmac_sha256_base64url,
    hmac_sha256_hex,
    sign,
    sign_request,
    signing_string,
)

# RFC 4231 test case 2
JEFE_SECRET = base64.b64encode(b"Jefe").decode()
JEFE_MESSAGE = "what do ya want for nothing?"
JEFE_DIGEST_HEX = "5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843"


def test_hex_digest_matches_rfc_vector():
    assert hmac_sha256_hex(JEFE_SECRET, JEFE_MESSAGE) == "0x" + JEFE_DIGEST_HEX


def test_base64url_digest_matches_rfc_vector_without_padding():
    expected = base64.urlsafe_b64encode(bytes.fromhex(JEFE_DIGEST_HEX)).rstrip(b"=").decode()
    digest = hmac_sha256_base64url(JEFE_SECRET, JEFE_MESSAGE)
    assert digest == expected
    assert "=" not in digest
    assert "+" not in digest and "/" not in digest


def test_sign_is_deterministic_and_input_sensitive():
    secret = base64.b64encode(b"super-secret-key").decode()
    first = sign(secret, "1700000000GET/auth/api-keys")
    assert first == sign(secret, "1700000000GET/auth/api-keys")
    assert first != sign(secret, "1700000001GET/auth/api-keys")
    other_secret = base64.b64encode(b"super-secret-kez").decode()
    assert first != sign(other_secret, "1700000000GET/auth/api-keys")


def test_secret_accepts_urlsafe_alphabet_and_missing_padding():
    raw = b"\xfb\xff\xfe secret"
    standard = base64.b64encode(raw).decode()
    urlsafe = base64.urlsafe_b64encode(raw).decode().rstrip("=")
    assert decode_secret(standard) == raw
    assert decode_secret(urlsafe) == raw
    assert decode_secret(" " + standard[:4] + "\n" + standard[4:]) == raw


@pytest.mark.parametrize("secret", ["a", "abc$", "not base64!!"])
def test_malformed_secret_fails_loudly(secret):
    with pytest.raises(InputValidationError):
        sign(secret, "message")


def test_unknown_encoding_rejected():
    with pytest.raises(ValueError):
        sign(JEFE_SECRET, JEFE_MESSAGE, "base32")  # type: ignore[arg-type]


def test_signing_string_uppercases_method_and_appends_body():
    assert signing_string("123", "get", "/auth/api-keys") == "123GET/auth/api-keys"
    assert (
        signing_string("123", "delete", "/auth/api-key?apiKey=k1", '{"a":1}')
        == '123DELETE/auth/api-key?apiKey=k1{"a":1}'
    )


def test_sign_request_uses_hmac_over_signing_string():
    secret = base64.b64encode(b"request-secret").decode()
    expected = base64.urlsafe_b64encode(
        hmac.new(b"request-secret", b"42DELETE/auth/api-key?apiKey=k1", hashlib.sha256).digest()
    ).rstrip(b"=").decode()
    assert sign_request(secret, "42", "delete", "/auth/api-key?apiKey=k1") == expected
