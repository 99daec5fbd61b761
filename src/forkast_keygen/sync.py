"""Blocking wrapper around ForkastKeyClient."""

from __future__ import annotations

import asyncio
import threading
from concurrent.futures import Future
from typing import Callable, List, Optional

import httpx

from .client import ForkastKeyClient
from .config import KeygenConfig
from .models import AttestationRequest, AuthContext, CredentialBundle


class _LoopThread:
    """Event loop on a daemon thread, started lazily and stopped on demand."""

    def __init__(self, name: str = "forkast-keygen-async") -> None:
        self._name = name
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _start(self) -> asyncio.AbstractEventLoop:
        with self._lock:
            if self._loop is not None and self.running:
                return self._loop
            loop = asyncio.new_event_loop()
            started = threading.Event()

            def _serve() -> None:
                asyncio.set_event_loop(loop)
                loop.call_soon(started.set)
                loop.run_forever()

            thread = threading.Thread(target=_serve, name=self._name, daemon=True)
            thread.start()
            started.wait()
            self._loop, self._thread = loop, thread
            return loop

    def run(self, coro):
        loop = self._start()
        future: Future = asyncio.run_coroutine_threadsafe(coro, loop)
        return future.result()

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        with self._lock:
            loop, thread = self._loop, self._thread
            self._loop = self._thread = None
        if loop is None or thread is None:
            return
        loop.call_soon_threadsafe(loop.stop)
        thread.join(timeout)
        if not thread.is_alive():
            loop.close()


class ForkastKeyClientSync:
    """Sync facade with the same three operations as ForkastKeyClient.

    Usable from code that already runs an event loop, since the wrapped client
    lives on its own loop thread.
    """

    def __init__(
        self,
        config: Optional[KeygenConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        kwargs = {"clock": clock} if clock is not None else {}
        self._client = ForkastKeyClient(config, http_client=http_client, **kwargs)
        self._runner = _LoopThread()

    @property
    def config(self) -> KeygenConfig:
        return self._client.config

    def issue(self, attestation: AttestationRequest) -> CredentialBundle:
        return self._runner.run(self._client.issue(attestation))

    def list_keys(self, auth: AuthContext) -> List[str]:
        return self._runner.run(self._client.list_keys(auth))

    def revoke(self, auth: AuthContext, api_key: str) -> bool:
        return self._runner.run(self._client.revoke(auth, api_key))

    def close(self) -> None:
        try:
            self._runner.run(self._client.aclose())
        finally:
            self._runner.stop()

    def __enter__(self) -> "ForkastKeyClientSync":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
