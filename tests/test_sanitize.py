import pytest

from forkast_keygen.sanitize import (
    CREDENTIALS_REJECTED,
    GENERIC_FAILURE,
    RATE_LIMITED,
    UNAVAILABLE,
    sanitize_message,
)


@pytest.mark.parametrize("status", [401, 403])
def test_auth_rejection_never_leaks_raw_message(status):
    assert sanitize_message(status, "invalid hmac for key 123", debug=False) == CREDENTIALS_REJECTED


def test_auth_rejection_in_debug_mode_shows_both():
    message = sanitize_message(401, "invalid hmac", debug=True)
    assert message.startswith(CREDENTIALS_REJECTED)
    assert "invalid hmac" in message


def test_rate_limit_and_unavailable():
    assert sanitize_message(429, "slow down", debug=False) == RATE_LIMITED
    assert sanitize_message(500, "Traceback ...", debug=False) == UNAVAILABLE
    assert sanitize_message(503, None, debug=False) == UNAVAILABLE


def test_other_status_passes_collapsed_truncated_message():
    raw = "  nonce   already\n\tused  " + "x" * 300
    message = sanitize_message(400, raw, debug=False)
    assert message.startswith("nonce already used xxx")
    assert len(message) == 200


def test_empty_message_falls_back_to_generic():
    assert sanitize_message(400, "   ", debug=False) == GENERIC_FAILURE
    assert sanitize_message(None, None, debug=False) == GENERIC_FAILURE


def test_debug_does_not_duplicate_passthrough_message():
    assert sanitize_message(400, "bad nonce", debug=True) == "bad nonce"


def test_debug_flag_read_from_environment(monkeypatch):
    monkeypatch.setenv("FORKAST_DEBUG_ERRORS", "true")
    assert "internal" in sanitize_message(403, "internal")
    monkeypatch.setenv("FORKAST_DEBUG_ERRORS", "0")
    assert sanitize_message(403, "internal") == CREDENTIALS_REJECTED
