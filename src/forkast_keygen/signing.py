"""HMAC-SHA256 signing over base64-encoded API secrets."""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
from typing import Literal, Optional

from .errors import InputValidationError

DigestEncoding = Literal["hex", "base64url"]


def decode_secret(secret_b64: str) -> bytes:
    """Decode an API secret in either base64 alphabet.

    Whitespace is ignored and omitted ``=`` padding is restored. Anything that
    still fails to decode raises instead of yielding a key.
    """
    if not isinstance(secret_b64, str):
        raise InputValidationError("API secret must be a base64 string")
    normalized = "".join(secret_b64.split()).replace("-", "+").replace("_", "/")
    remainder = len(normalized) % 4
    if remainder == 1:
        raise InputValidationError("API secret is not valid base64")
    if remainder:
        normalized += "=" * (4 - remainder)
    try:
        return base64.b64decode(normalized, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InputValidationError("API secret is not valid base64") from exc


def sign(secret_b64: str, message: str, encoding: DigestEncoding = "base64url") -> str:
    key = decode_secret(secret_b64)
    digest = hmac.new(key, message.encode("utf-8"), hashlib.sha256).digest()
    if encoding == "hex":
        return "0x" + digest.hex()
    if encoding == "base64url":
        return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")
    raise ValueError(f"Unsupported digest encoding: {encoding!r}")


def hmac_sha256_hex(secret_b64: str, message: str) -> str:
    return sign(secret_b64, message, "hex")


def hmac_sha256_base64url(secret_b64: str, message: str) -> str:
    return sign(secret_b64, message, "base64url")


def signing_string(
    timestamp: str,
    method: str,
    path_with_query: str,
    body: Optional[str] = None,
) -> str:
    return f"{timestamp}{method.upper()}{path_with_query}{body or ''}"


def sign_request(
    secret_b64: str,
    timestamp: str,
    method: str,
    path_with_query: str,
    body: Optional[str] = None,
) -> str:
    """Signature for an authenticated management request (URL-safe base64)."""
    return hmac_sha256_base64url(
        secret_b64, signing_string(timestamp, method, path_with_query, body)
    )
