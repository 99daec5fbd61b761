"""Run one logical operation against every mirror endpoint."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, List, Optional, Sequence, TypeVar

from .errors import BackendRejection, KeygenError, NetworkError

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@dataclass
class EndpointOutcome(Generic[T]):
    endpoint: str
    result: Optional[T] = None
    error: Optional[KeygenError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


Aggregator = Callable[[List[EndpointOutcome[T]]], R]


def first_success(outcomes: List[EndpointOutcome[T]]) -> T:
    """Result of the first endpoint, in configuration order, that succeeded."""
    for outcome in outcomes:
        if outcome.ok:
            return outcome.result  # type: ignore[return-value]
    raise LookupError("no successful outcome")


def union(outcomes: List[EndpointOutcome[List[str]]]) -> List[str]:
    seen: List[str] = []
    for outcome in outcomes:
        if not outcome.ok:
            continue
        for value in outcome.result or []:
            if value not in seen:
                seen.append(value)
    return seen


def any_success(outcomes: List[EndpointOutcome[object]]) -> bool:
    return any(outcome.ok for outcome in outcomes)


def _log_failure(
    operation: str, endpoint: str, error: KeygenError, note: Optional[str] = None
) -> None:
    status = None
    message: object = error
    if isinstance(error, BackendRejection):
        status = error.status
        message = error.raw_message if error.raw_message is not None else error.message
    elif isinstance(error, NetworkError):
        message = error.cause
    logger.warning(
        "forkast %s failed: endpoint=%s status=%s message=%s%s",
        operation,
        endpoint,
        status,
        message,
        f"; {note}" if note else "",
    )


async def _attempt(
    endpoint: str,
    call: Callable[[str], Awaitable[T]],
    operation: str,
    failure_note: Optional[str],
) -> EndpointOutcome[T]:
    try:
        result = await call(endpoint)
    except KeygenError as exc:
        _log_failure(operation, endpoint, exc, failure_note)
        return EndpointOutcome(endpoint=endpoint, error=exc)
    return EndpointOutcome(endpoint=endpoint, result=result)


async def fan_out(
    endpoints: Sequence[str],
    call: Callable[[str], Awaitable[T]],
    aggregate: Aggregator,
    *,
    operation: str,
    fallback_message: str,
    failure_note: Optional[str] = None,
):
    """Call every endpoint concurrently and aggregate the successes.

    Outcomes are kept in configuration order whatever order the calls finish
    in. When no endpoint succeeds, the last failure in that order is raised.
    Each failure is logged once, with ``failure_note`` appended when given.
    """
    outcomes: List[EndpointOutcome[T]] = list(
        await asyncio.gather(
            *(_attempt(endpoint, call, operation, failure_note) for endpoint in endpoints)
        )
    )

    if any(outcome.ok for outcome in outcomes):
        return aggregate(outcomes)

    errors = [outcome.error for outcome in outcomes if outcome.error is not None]
    if errors:
        raise errors[-1]
    raise KeygenError(fallback_message)
