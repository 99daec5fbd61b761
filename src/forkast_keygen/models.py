"""Credential and request records exchanged with the Forkast backend."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from .constants import (
    HEADER_ADDRESS,
    HEADER_API_KEY,
    HEADER_NONCE,
    HEADER_PASSPHRASE,
    HEADER_SIGNATURE,
    HEADER_TIMESTAMP,
)
from .signing import sign_request


@dataclass(frozen=True)
class AuthContext:
    """Issued credentials used to authenticate list/revoke calls."""

    address: str
    api_key: str
    api_secret: str
    passphrase: str

    def __repr__(self) -> str:
        return f"AuthContext(address={self.address!r}, api_key={self.api_key!r})"


@dataclass(frozen=True)
class ApiCredentials:
    api_key: str
    api_secret: str
    passphrase: str

    def with_address(self, wallet_address: str) -> "CredentialBundle":
        return CredentialBundle(
            api_key=self.api_key,
            api_secret=self.api_secret,
            passphrase=self.passphrase,
            wallet_address=wallet_address,
        )

    def __repr__(self) -> str:
        return f"ApiCredentials(api_key={self.api_key!r})"


@dataclass(frozen=True)
class CredentialBundle:
    """API key, base64 secret and passphrase issued for one wallet."""

    api_key: str
    api_secret: str
    passphrase: str
    wallet_address: str

    def auth_context(self) -> AuthContext:
        return AuthContext(
            address=self.wallet_address,
            api_key=self.api_key,
            api_secret=self.api_secret,
            passphrase=self.passphrase,
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "apiKey": self.api_key,
            "apiSecret": self.api_secret,
            "passphrase": self.passphrase,
            "address": self.wallet_address,
        }

    def __repr__(self) -> str:
        return (
            f"CredentialBundle(api_key={self.api_key!r}, "
            f"wallet_address={self.wallet_address!r})"
        )


@dataclass(frozen=True)
class AttestationRequest:
    wallet_address: str
    signature: str
    timestamp: str
    nonce: str = "0"

    def headers(self) -> Dict[str, str]:
        return {
            HEADER_ADDRESS: self.wallet_address,
            HEADER_SIGNATURE: self.signature,
            HEADER_TIMESTAMP: self.timestamp,
            HEADER_NONCE: self.nonce,
        }


@dataclass(frozen=True)
class SignedRequestContext:
    address: str
    api_key: str
    passphrase: str
    timestamp: str
    signature: str

    @classmethod
    def build(
        cls,
        auth: AuthContext,
        method: str,
        path_with_query: str,
        timestamp: str,
        body: Optional[str] = None,
    ) -> "SignedRequestContext":
        return cls(
            address=auth.address,
            api_key=auth.api_key,
            passphrase=auth.passphrase,
            timestamp=timestamp,
            signature=sign_request(auth.api_secret, timestamp, method, path_with_query, body),
        )

    def headers(self) -> Dict[str, str]:
        return {
            HEADER_ADDRESS: self.address,
            HEADER_API_KEY: self.api_key,
            HEADER_PASSPHRASE: self.passphrase,
            HEADER_TIMESTAMP: self.timestamp,
            HEADER_SIGNATURE: self.signature,
        }
