"""Backend endpoint resolution."""

from __future__ import annotations

from typing import Iterable, List, Optional
from urllib.parse import urljoin

from .errors import ConfigurationError


def resolve_endpoints(values: Iterable[Optional[str]]) -> List[str]:
    """Return the ordered, de-duplicated list of configured base URLs.

    Raises ConfigurationError when nothing usable is configured, so callers
    never reach the network without a target.
    """
    resolved: List[str] = []
    for value in values:
        if value is None:
            continue
        trimmed = value.strip()
        if trimmed and trimmed not in resolved:
            resolved.append(trimmed)
    if not resolved:
        raise ConfigurationError("CLOB_URL or RELAYER_URL must be defined.")
    return resolved


def endpoint_url(base_url: str, path_with_query: str) -> str:
    # An absolute path replaces any path on the base URL.
    return urljoin(base_url, path_with_query)
