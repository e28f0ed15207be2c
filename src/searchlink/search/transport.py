"""Serialized transport — One in-flight search request at a time.

``SerializedTransport`` composes an ``opensearchpy`` async transport with an
``asyncio.Lock``. Every ``perform_request`` call (including the transport's own
retries for that call) runs while holding the lock, so requests issued by any
number of concurrent callers reach the backend strictly one after another.
Waiters are woken in arrival order.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

logger = logging.getLogger(__name__)


class SerializedTransport:
    """Wrap a transport so that its requests never overlap.

    Args:
        transport: The real transport (normally ``opensearchpy.AsyncTransport``).
        gate: The lock serializing requests. A new one is created if omitted.

    Attributes other than ``perform_request`` are delegated to the wrapped
    transport, so the client can still close it, sniff, and so on.
    """

    def __init__(self, transport: Any, gate: asyncio.Lock | None = None) -> None:
        self._transport = transport
        self._gate = gate if gate is not None else asyncio.Lock()

    @property
    def wrapped(self) -> Any:
        """The underlying transport."""
        return self._transport

    @property
    def gate(self) -> asyncio.Lock:
        """The lock serializing requests."""
        return self._gate

    async def perform_request(self, method: str, url: str, *args: Any, **kwargs: Any) -> Any:
        """Run the wrapped transport's ``perform_request`` while holding the gate.

        The result or exception of the wrapped call is passed through unchanged.
        """
        async with self._gate:
            logger.debug("Search request %s %s", method, url)
            return await self._transport.perform_request(method, url, *args, **kwargs)

    def __getattr__(self, name: str) -> Any:
        if name == "_transport":
            raise AttributeError(name)
        return getattr(self._transport, name)
