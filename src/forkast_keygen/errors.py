"""Exception hierarchy for credential issuance and management."""

from __future__ import annotations

from typing import Iterable, List, Optional


class KeygenError(Exception):
    """Base class for every error raised by forkast_keygen."""


class ConfigurationError(KeygenError):
    """Raised when no backend endpoint is configured."""


class InputValidationError(KeygenError, ValueError):
    """Raised for caller input rejected before any network call."""


class UnsupportedChainError(InputValidationError):
    """Raised when an attestation targets a chain Forkast does not accept."""


class NoActiveCredentialsError(KeygenError):
    """Raised when a management call is made before a key was generated."""


class NetworkError(KeygenError):
    def __init__(self, endpoint: str, cause: BaseException) -> None:
        super().__init__(f"Could not reach Forkast at {endpoint}. Check your connection and retry.")
        self.endpoint = endpoint
        self.cause = cause


class BackendRejection(KeygenError):
    """Non-2xx answer from one endpoint.

    ``str(err)`` is the sanitized, user-presentable message; the raw backend
    message is kept on ``raw_message`` for logging only.
    """

    def __init__(
        self,
        endpoint: str,
        status: int,
        message: str,
        raw_message: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.endpoint = endpoint
        self.status = status
        self.message = message
        self.raw_message = raw_message

    @property
    def is_auth_rejection(self) -> bool:
        return self.status in (401, 403)


class ResponseShapeError(KeygenError):
    def __init__(self, message: str, present_keys: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.present_keys: List[str] = list(present_keys)
