"""Forkast API credential issuance, listing and revocation (Python)."""

from __future__ import annotations

from .attestation import (
    LocalAccountSigner,
    build_attestation,
    create_attestation,
    normalize_nonce,
)
from .client import ForkastKeyClient
from .config import KeygenConfig
from .constants import DEFAULT_ENDPOINTS, SUPPORTED_CHAINS
from .endpoints import resolve_endpoints
from .errors import (
    BackendRejection,
    ConfigurationError,
    InputValidationError,
    KeygenError,
    NetworkError,
    NoActiveCredentialsError,
    ResponseShapeError,
    UnsupportedChainError,
)
from .models import (
    ApiCredentials,
    AttestationRequest,
    AuthContext,
    CredentialBundle,
    SignedRequestContext,
)
from .normalize import normalize_credentials, normalize_key_list
from .sanitize import sanitize_message
from .session import KeySession
from .signing import hmac_sha256_base64url, hmac_sha256_hex, sign, sign_request
from .sync import ForkastKeyClientSync

__all__ = [
    "ForkastKeyClient",
    "ForkastKeyClientSync",
    "KeySession",
    "KeygenConfig",
    "DEFAULT_ENDPOINTS",
    "SUPPORTED_CHAINS",
    "resolve_endpoints",
    "normalize_credentials",
    "normalize_key_list",
    "sanitize_message",
    "sign",
    "sign_request",
    "hmac_sha256_hex",
    "hmac_sha256_base64url",
    "ApiCredentials",
    "AttestationRequest",
    "AuthContext",
    "CredentialBundle",
    "SignedRequestContext",
    "KeygenError",
    "ConfigurationError",
    "InputValidationError",
    "UnsupportedChainError",
    "NetworkError",
    "BackendRejection",
    "ResponseShapeError",
    "NoActiveCredentialsError",
    "LocalAccountSigner",
    "build_attestation",
    "create_attestation",
    "normalize_nonce",
]
