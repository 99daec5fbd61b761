"""Runtime configuration read from the process environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from .constants import (
    CHAIN_ID_ENV_VAR,
    DEBUG_ERRORS_ENV_VAR,
    DEFAULT_CHAIN_ID,
    DEFAULT_TIMEOUT_SECONDS,
    ENDPOINT_ENV_VARS,
    EXTRA_ENDPOINTS_ENV_VAR,
    TIMEOUT_ENV_VAR,
)
from .endpoints import resolve_endpoints
from .errors import ConfigurationError

_TRUTHY = {"1", "true", "yes", "on"}


def parse_flag(value: Optional[str]) -> bool:
    if not value:
        return False
    return value.strip().lower() in _TRUTHY


@dataclass
class KeygenConfig:
    endpoints: List[str] = field(default_factory=list)
    debug_errors: bool = False
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    chain_id: int = DEFAULT_CHAIN_ID

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "KeygenConfig":
        env = os.environ if environ is None else environ

        endpoints: List[str] = [env.get(name, "") for name in ENDPOINT_ENV_VARS]
        extra = env.get(EXTRA_ENDPOINTS_ENV_VAR)
        if extra:
            endpoints.extend(extra.split(","))

        timeout_raw = (env.get(TIMEOUT_ENV_VAR) or "").strip()
        try:
            timeout = float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT_SECONDS
        except ValueError as exc:
            raise ConfigurationError(f"{TIMEOUT_ENV_VAR} must be a number of seconds") from exc

        chain_raw = (env.get(CHAIN_ID_ENV_VAR) or "").strip()
        try:
            chain_id = int(chain_raw, 0) if chain_raw else DEFAULT_CHAIN_ID
        except ValueError as exc:
            raise ConfigurationError(f"{CHAIN_ID_ENV_VAR} must be an integer chain id") from exc

        return cls(
            endpoints=endpoints,
            debug_errors=parse_flag(env.get(DEBUG_ERRORS_ENV_VAR)),
            timeout=timeout,
            chain_id=chain_id,
        )

    def resolve_endpoints(self) -> List[str]:
        return resolve_endpoints(self.endpoints)
