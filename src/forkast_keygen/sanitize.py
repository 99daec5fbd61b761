"""Map backend failures onto messages that are safe to show to users."""

from __future__ import annotations

import os
import re
from typing import Optional

from .config import parse_flag
from .constants import DEBUG_ERRORS_ENV_VAR

MAX_MESSAGE_LENGTH = 200

CREDENTIALS_REJECTED = "Credentials rejected by Forkast. Generate a fresh API key and try again."
RATE_LIMITED = "Too many requests. Hold on a moment before retrying."
UNAVAILABLE = "Forkast is temporarily unavailable. Retry shortly."
GENERIC_FAILURE = "Forkast request failed. Please try again."

_WHITESPACE = re.compile(r"\s+")


def debug_errors_enabled() -> bool:
    return parse_flag(os.getenv(DEBUG_ERRORS_ENV_VAR))


def sanitize_message(
    status: Optional[int],
    raw_message: Optional[str] = None,
    debug: Optional[bool] = None,
) -> str:
    """Return a user-presentable message for a failed backend call.

    Authorization, rate-limit and availability failures map to fixed text so
    backend internals never leak. With ``debug`` enabled (defaults to the
    FORKAST_DEBUG_ERRORS environment flag) the raw message is appended.
    """
    truncated = _WHITESPACE.sub(" ", raw_message or "").strip()[:MAX_MESSAGE_LENGTH]

    if status in (401, 403):
        sanitized = CREDENTIALS_REJECTED
    elif status == 429:
        sanitized = RATE_LIMITED
    elif status in (500, 503):
        sanitized = UNAVAILABLE
    elif truncated:
        sanitized = truncated
    else:
        sanitized = GENERIC_FAILURE

    if debug is None:
        debug = debug_errors_enabled()
    if debug and truncated and sanitized != truncated:
        return f"{sanitized} ({truncated})"
    return sanitized
