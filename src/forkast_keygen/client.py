"""Async client for issuing, listing and revoking Forkast API keys."""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import urlencode

import httpx

from .attestation import normalize_nonce
from .config import KeygenConfig
from .constants import CREATE_KEY_PATH, LIST_KEYS_PATH, REVOKE_KEY_PATH
from .endpoints import endpoint_url
from .errors import BackendRejection, InputValidationError, NetworkError, ResponseShapeError
from .fanout import any_success, fan_out, first_success, union
from .models import AttestationRequest, AuthContext, CredentialBundle, SignedRequestContext
from .normalize import (
    UNEXPECTED_LIST_RESPONSE,
    UNEXPECTED_MINT_RESPONSE,
    extract_error_message,
    normalize_credentials,
    normalize_key_list,
)
from .sanitize import sanitize_message
from .signing import decode_secret

logger = logging.getLogger(__name__)

CREATE_FAILED = "Failed to generate API key."
LIST_FAILED = "Failed to load keys."
REVOKE_FAILED = "Failed to revoke key."


class ForkastKeyClient:
    """Talks to every configured Forkast mirror.

    Issuance returns the first success in configuration order; listing
    returns the union of every mirror that answered; revocation succeeds when
    any mirror accepts it. Per-mirror failures are logged and only raised when
    every mirror failed.
    """

    def __init__(
        self,
        config: Optional[KeygenConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config or KeygenConfig.from_env()
        self._http_client = http_client
        self._owns_client = http_client is None
        self._clock = clock

    @property
    def config(self) -> KeygenConfig:
        return self._config

    def _get_async_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self._config.timeout)
        return self._http_client

    async def aclose(self) -> None:
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "ForkastKeyClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def _timestamp(self) -> str:
        return str(int(self._clock()))

    async def _send(
        self,
        method: str,
        endpoint: str,
        path_with_query: str,
        headers: Dict[str, str],
        failure_message: str,
    ) -> httpx.Response:
        client = self._get_async_client()
        try:
            # A malformed mirror URL fails only that mirror.
            url = endpoint_url(endpoint, path_with_query)
            logger.debug("forkast %s %s", method, url)
            response = await client.request(
                method, url, headers=headers, timeout=self._config.timeout
            )
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            raise NetworkError(endpoint, exc) from exc

        if not response.is_success:
            raise self._rejection(endpoint, response, failure_message)
        return response

    def _rejection(
        self, endpoint: str, response: httpx.Response, failure_message: str
    ) -> BackendRejection:
        try:
            payload = response.json()
        except ValueError:
            payload = None
        raw = extract_error_message(payload, failure_message)
        return BackendRejection(
            endpoint,
            response.status_code,
            sanitize_message(response.status_code, raw, debug=self._config.debug_errors),
            raw_message=raw,
        )

    # ------------------------------------------------------------------
    # Issuance
    # ------------------------------------------------------------------

    async def issue(self, attestation: AttestationRequest) -> CredentialBundle:
        attestation = replace(attestation, nonce=normalize_nonce(attestation.nonce))
        endpoints = self._config.resolve_endpoints()

        async def request_key(endpoint: str):
            response = await self._send(
                "POST", endpoint, CREATE_KEY_PATH, attestation.headers(), CREATE_FAILED
            )
            try:
                payload = response.json()
            except ValueError as exc:
                raise ResponseShapeError(UNEXPECTED_MINT_RESPONSE) from exc
            return normalize_credentials(payload)

        credentials = await fan_out(
            endpoints,
            request_key,
            first_success,
            operation="create key",
            fallback_message=CREATE_FAILED,
        )
        logger.info(
            "forkast key issued: address=%s api_key=%s",
            attestation.wallet_address,
            credentials.api_key,
        )
        return credentials.with_address(attestation.wallet_address)

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    async def list_keys(self, auth: AuthContext) -> List[str]:
        decode_secret(auth.api_secret)
        endpoints = self._config.resolve_endpoints()

        async def fetch_keys(endpoint: str) -> List[str]:
            signed = SignedRequestContext.build(auth, "GET", LIST_KEYS_PATH, self._timestamp())
            response = await self._send(
                "GET", endpoint, LIST_KEYS_PATH, signed.headers(), LIST_FAILED
            )
            try:
                payload = response.json()
            except ValueError as exc:
                raise ResponseShapeError(UNEXPECTED_LIST_RESPONSE) from exc
            return normalize_key_list(payload)

        return await fan_out(
            endpoints,
            fetch_keys,
            union,
            operation="list keys",
            fallback_message=LIST_FAILED,
        )

    # ------------------------------------------------------------------
    # Revocation
    # ------------------------------------------------------------------

    async def revoke(self, auth: AuthContext, api_key: str) -> bool:
        if not api_key or not api_key.strip():
            raise InputValidationError("An API key is required to revoke.")
        decode_secret(auth.api_secret)
        endpoints = self._config.resolve_endpoints()
        path_with_query = f"{REVOKE_KEY_PATH}?{urlencode({'apiKey': api_key})}"

        async def revoke_on(endpoint: str) -> bool:
            signed = SignedRequestContext.build(
                auth, "DELETE", path_with_query, self._timestamp()
            )
            await self._send(
                "DELETE", endpoint, path_with_query, signed.headers(), REVOKE_FAILED
            )
            return True

        return await fan_out(
            endpoints,
            revoke_on,
            any_success,
            operation="revoke key",
            fallback_message=REVOKE_FAILED,
            failure_note=f"revocation of {api_key} not confirmed there; "
            "the key may still be accepted by that mirror",
        )
