"""Normalize heterogeneous Forkast response payloads."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from .errors import ResponseShapeError
from .models import ApiCredentials

API_KEY_FIELDS: Sequence[str] = ("apiKey", "api_key", "key", "id")
API_SECRET_FIELDS: Sequence[str] = (
    "apiSecret",
    "api_secret",
    "apiSecretBase64",
    "api_secret_base64",
    "secret",
    "secretKey",
    "secret_key",
)
PASSPHRASE_FIELDS: Sequence[str] = (
    "passphrase",
    "api_passphrase",
    "passphraseHex",
    "passphrase_hex",
    "api_passphrase_hex",
)

UNEXPECTED_MINT_RESPONSE = "Unexpected response when minting API key."
UNEXPECTED_LIST_RESPONSE = "Unexpected response when listing keys."


def _pick(record: Dict[str, Any], keys: Sequence[str]) -> Optional[str]:
    for key in keys:
        candidate = record.get(key)
        if isinstance(candidate, str) and candidate:
            return candidate
    return None


def _unwrap(payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise ResponseShapeError(UNEXPECTED_MINT_RESPONSE)
    nested = payload.get("data")
    if isinstance(nested, dict):
        return nested
    return payload


def normalize_credentials(payload: Any) -> ApiCredentials:
    record = _unwrap(payload)

    api_key = _pick(record, API_KEY_FIELDS)
    api_secret = _pick(record, API_SECRET_FIELDS)
    passphrase = _pick(record, PASSPHRASE_FIELDS)

    if not api_key or not api_secret or not passphrase:
        keys = ", ".join(record.keys()) or "none"
        raise ResponseShapeError(
            f"Forkast did not return API credentials. Payload keys: {keys}",
            present_keys=record.keys(),
        )

    return ApiCredentials(api_key=api_key, api_secret=api_secret, passphrase=passphrase)


def normalize_key_list(payload: Any) -> List[str]:
    if not isinstance(payload, list):
        raise ResponseShapeError(UNEXPECTED_LIST_RESPONSE)
    return [value for value in payload if isinstance(value, str) and value]


def extract_error_message(payload: Any, default: str) -> str:
    if isinstance(payload, dict):
        for key in ("message", "error"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
    return default
