"""Shared constants for the Forkast key generator."""

from __future__ import annotations

from typing import Dict, List, TypedDict


DEFAULT_ENDPOINTS: List[str] = ["https://clob.forka.st", "https://relayer.forka.st"]

# Environment variables read by KeygenConfig.from_env, in resolution order.
ENDPOINT_ENV_VARS: List[str] = ["CLOB_URL", "RELAYER_URL"]
EXTRA_ENDPOINTS_ENV_VAR = "FORKAST_ENDPOINTS"
DEBUG_ERRORS_ENV_VAR = "FORKAST_DEBUG_ERRORS"
TIMEOUT_ENV_VAR = "FORKAST_TIMEOUT"
CHAIN_ID_ENV_VAR = "FORKAST_CHAIN_ID"

DEFAULT_TIMEOUT_SECONDS = 5.0

CREATE_KEY_PATH = "/auth/api-key"
LIST_KEYS_PATH = "/auth/api-keys"
REVOKE_KEY_PATH = "/auth/api-key"

HEADER_ADDRESS = "FORKAST_ADDRESS"
HEADER_SIGNATURE = "FORKAST_SIGNATURE"
HEADER_TIMESTAMP = "FORKAST_TIMESTAMP"
HEADER_NONCE = "FORKAST_NONCE"
HEADER_API_KEY = "FORKAST_API_KEY"
HEADER_PASSPHRASE = "FORKAST_PASSPHRASE"

ATTESTATION_DOMAIN_NAME = "ClobAuthDomain"
ATTESTATION_DOMAIN_VERSION = "1"
ATTESTATION_PRIMARY_TYPE = "ClobAuth"
ATTESTATION_MESSAGE = "This message attests that I control the given wallet"


class SupportedChain(TypedDict):
    chain_id: int
    name: str


SUPPORTED_CHAINS: Dict[int, SupportedChain] = {
    137: {"chain_id": 137, "name": "Polygon Mainnet"},
    80002: {"chain_id": 80002, "name": "Polygon Amoy"},
}

DEFAULT_CHAIN_ID = 137
