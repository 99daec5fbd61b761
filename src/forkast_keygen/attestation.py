"""EIP-712 ClobAuth attestation used to prove wallet control."""

from __future__ import annotations

import inspect
import time
from typing import Any, Awaitable, Dict, Optional, Protocol, Union

from eth_account import Account
from eth_account.messages import encode_typed_data

from .constants import (
    ATTESTATION_DOMAIN_NAME,
    ATTESTATION_DOMAIN_VERSION,
    ATTESTATION_MESSAGE,
    ATTESTATION_PRIMARY_TYPE,
    SUPPORTED_CHAINS,
)
from .errors import InputValidationError, UnsupportedChainError
from .models import AttestationRequest

TypedData = Dict[str, Any]


class WalletSigner(Protocol):
    """Anything able to produce an EIP-712 signature for typed data."""

    def sign_typed_data(self, typed_data: TypedData) -> Union[str, Awaitable[str]]:
        ...


def normalize_nonce(raw: Optional[str]) -> str:
    nonce = (raw or "").strip()
    if nonce == "":
        return "0"
    if not (nonce.isascii() and nonce.isdigit()):
        raise InputValidationError("Nonce must contain digits only.")
    return nonce


def ensure_supported_chain(chain_id: int) -> None:
    if chain_id not in SUPPORTED_CHAINS:
        names = " or ".join(
            f"{chain['name']} ({chain['chain_id']})" for chain in SUPPORTED_CHAINS.values()
        )
        raise UnsupportedChainError(f"Switch to {names} to continue.")


def current_timestamp() -> str:
    return str(int(time.time()))


def build_attestation(address: str, chain_id: int, timestamp: str, nonce: str) -> TypedData:
    ensure_supported_chain(chain_id)
    return {
        "types": {
            "EIP712Domain": [
                {"name": "name", "type": "string"},
                {"name": "version", "type": "string"},
                {"name": "chainId", "type": "uint256"},
            ],
            ATTESTATION_PRIMARY_TYPE: [
                {"name": "address", "type": "address"},
                {"name": "timestamp", "type": "string"},
                {"name": "nonce", "type": "uint256"},
                {"name": "message", "type": "string"},
            ],
        },
        "domain": {
            "name": ATTESTATION_DOMAIN_NAME,
            "version": ATTESTATION_DOMAIN_VERSION,
            "chainId": chain_id,
        },
        "primaryType": ATTESTATION_PRIMARY_TYPE,
        "message": {
            "address": address,
            "timestamp": timestamp,
            "nonce": int(normalize_nonce(nonce)),
            "message": ATTESTATION_MESSAGE,
        },
    }


class LocalAccountSigner:
    """Signs attestations with a locally held private key."""

    def __init__(self, private_key: str) -> None:
        self._account = Account.from_key(private_key)

    @property
    def address(self) -> str:
        return self._account.address

    def sign_typed_data(self, typed_data: TypedData) -> str:
        signable = encode_typed_data(full_message=typed_data)
        signed = self._account.sign_message(signable)
        return "0x" + bytes(signed.signature).hex()


def recover_attestation_signer(typed_data: TypedData, signature: str) -> str:
    return Account.recover_message(encode_typed_data(full_message=typed_data), signature=signature)


async def create_attestation(
    signer: WalletSigner,
    address: str,
    chain_id: int,
    nonce: Optional[str] = "0",
    timestamp: Optional[str] = None,
) -> AttestationRequest:
    """Validate inputs, have ``signer`` sign the ClobAuth payload, and bundle the result."""
    safe_nonce = normalize_nonce(nonce)
    ts = timestamp or current_timestamp()
    typed_data = build_attestation(address, chain_id, ts, safe_nonce)

    signature = signer.sign_typed_data(typed_data)
    if inspect.isawaitable(signature):
        signature = await signature

    return AttestationRequest(
        wallet_address=address,
        signature=signature,
        timestamp=ts,
        nonce=safe_nonce,
    )
