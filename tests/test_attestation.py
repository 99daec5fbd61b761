import pytest

pytest.importorskip("eth_account")

from forkast_keygen.attestation import (
    LocalAccountSigner,
    build_attestation,
    create_attestation,
    normalize_nonce,
    recover_attestation_signer,
)
from forkast_keygen.errors import InputValidationError, UnsupportedChainError

PRIVATE_KEY = "0x" + "1" * 64


def test_normalize_nonce():
    assert normalize_nonce("") == "0"
    assert normalize_nonce(None) == "0"
    assert normalize_nonce(" 42 ") == "42"
    with pytest.raises(InputValidationError):
        normalize_nonce("12a3")
    with pytest.raises(InputValidationError):
        normalize_nonce("-1")


def test_build_attestation_shape():
    typed = build_attestation("0xabc", 137, "1700000000", "7")
    assert typed["primaryType"] == "ClobAuth"
    assert typed["domain"] == {"name": "ClobAuthDomain", "version": "1", "chainId": 137}
    assert [field["name"] for field in typed["types"]["ClobAuth"]] == [
        "address",
        "timestamp",
        "nonce",
        "message",
    ]
    assert typed["message"] == {
        "address": "0xabc",
        "timestamp": "1700000000",
        "nonce": 7,
        "message": "This message attests that I control the given wallet",
    }


def test_build_attestation_rejects_unsupported_chain():
    with pytest.raises(UnsupportedChainError, match="Polygon Mainnet"):
        build_attestation("0xabc", 1, "1700000000", "0")


def test_local_signer_signature_recovers_to_address():
    signer = LocalAccountSigner(PRIVATE_KEY)
    typed = build_attestation(signer.address, 80002, "1700000000", "0")
    signature = signer.sign_typed_data(typed)
    assert signature.startswith("0x")
    assert len(signature) == 132
    assert recover_attestation_signer(typed, signature) == signer.address


def test_different_nonce_changes_signature():
    signer = LocalAccountSigner(PRIVATE_KEY)
    first = signer.sign_typed_data(build_attestation(signer.address, 137, "1700000000", "0"))
    second = signer.sign_typed_data(build_attestation(signer.address, 137, "1700000000", "1"))
    assert first != second


@pytest.mark.asyncio
async def test_create_attestation_with_local_signer():
    signer = LocalAccountSigner(PRIVATE_KEY)
    attestation = await create_attestation(
        signer, signer.address, 137, nonce="", timestamp="1700000000"
    )
    assert attestation.nonce == "0"
    assert attestation.timestamp == "1700000000"
    assert attestation.wallet_address == signer.address
    typed = build_attestation(signer.address, 137, "1700000000", "0")
    assert recover_attestation_signer(typed, attestation.signature) == signer.address


class AsyncWallet:
    def __init__(self):
        self.seen = []

    async def sign_typed_data(self, typed_data):
        self.seen.append(typed_data)
        return "0xwallet"


@pytest.mark.asyncio
async def test_create_attestation_awaits_async_signer():
    wallet = AsyncWallet()
    attestation = await create_attestation(wallet, "0xabc", 80002, nonce="5")
    assert attestation.signature == "0xwallet"
    assert wallet.seen[0]["message"]["nonce"] == 5
    assert attestation.timestamp.isdigit()


@pytest.mark.asyncio
async def test_create_attestation_rejects_bad_nonce_before_signing():
    wallet = AsyncWallet()
    with pytest.raises(InputValidationError):
        await create_attestation(wallet, "0xabc", 137, nonce="12a3")
    assert wallet.seen == []
