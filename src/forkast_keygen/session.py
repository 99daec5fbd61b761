"""Per-wallet credential lifecycle on top of ForkastKeyClient."""

from __future__ import annotations

import logging
from typing import List, Optional

from .attestation import WalletSigner, create_attestation
from .client import ForkastKeyClient
from .errors import BackendRejection, KeygenError, NoActiveCredentialsError
from .models import AuthContext, CredentialBundle

logger = logging.getLogger(__name__)


class KeySession:
    """Tracks the bundle issued to one wallet and the keys it can see.

    The bundle is dropped when its own key is revoked, when listing is
    rejected with 401/403, and on disconnect.
    """

    def __init__(self, client: ForkastKeyClient, address: str) -> None:
        self._client = client
        self.address = address
        self.bundle: Optional[CredentialBundle] = None
        self.keys: List[str] = []

    def _auth_context(self) -> AuthContext:
        if self.bundle is None:
            raise NoActiveCredentialsError("Generate an API key before managing credentials.")
        return self.bundle.auth_context()

    async def generate(
        self,
        signer: WalletSigner,
        chain_id: Optional[int] = None,
        nonce: Optional[str] = "0",
    ) -> CredentialBundle:
        if chain_id is None:
            chain_id = self._client.config.chain_id
        attestation = await create_attestation(signer, self.address, chain_id, nonce)
        bundle = await self._client.issue(attestation)
        self.bundle = bundle
        if bundle.api_key not in self.keys:
            self.keys.insert(0, bundle.api_key)
        return bundle

    async def refresh(self) -> List[str]:
        auth = self._auth_context()
        try:
            keys = await self._client.list_keys(auth)
        except KeygenError as exc:
            self.keys = []
            if isinstance(exc, BackendRejection) and exc.is_auth_rejection:
                logger.info("discarding rejected credentials for %s", self.address)
                self.bundle = None
            raise
        self.keys = keys
        return keys

    async def revoke(self, api_key: str) -> bool:
        auth = self._auth_context()
        await self._client.revoke(auth, api_key)
        self.keys = [key for key in self.keys if key != api_key]
        if self.bundle is not None and self.bundle.api_key == api_key:
            self.bundle = None
        return True

    def disconnect(self) -> None:
        self.bundle = None
        self.keys = []
