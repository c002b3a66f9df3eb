"""Deadline-bounded capability invocation.

The invocation and the deadline race; whichever finishes first decides the
outcome. A timed-out invocation is not cancelled: it keeps running in the
background, and its eventual result or exception is collected and dropped.
Capabilities that hold resources are responsible for their own cleanup.
"""

import asyncio
import logging
from typing import Any, Awaitable, Set

from .errors import CapabilityKind, InvocationTimeout

logger = logging.getLogger(__name__)


class TimeoutExecutor:
    """Runs capability invocations against a deadline."""

    def __init__(self):
        self._detached: Set["asyncio.Future[Any]"] = set()

    @property
    def pending(self) -> int:
        """Number of timed-out invocations still running in the background."""
        return len(self._detached)

    async def run(
        self,
        kind: CapabilityKind,
        identifier: str,
        operation: Awaitable[Any],
        timeout: float,
    ) -> Any:
        """Await ``operation`` for at most ``timeout`` seconds.

        Returns:
            The operation's result

        Raises:
            InvocationTimeout: If the deadline passes first
            Exception: Whatever the operation raised, unchanged
        """
        task = asyncio.ensure_future(operation)
        done, _ = await asyncio.wait({task}, timeout=timeout)
        if task in done:
            return task.result()

        self._detach(task, kind, identifier)
        raise InvocationTimeout(kind, identifier, timeout)

    def _detach(self, task: "asyncio.Future[Any]", kind: CapabilityKind, identifier: str) -> None:
        self._detached.add(task)

        def _collect(finished: "asyncio.Future[Any]") -> None:
            self._detached.discard(finished)
            if finished.cancelled():
                return
            exc = finished.exception()
            if exc is not None:
                logger.debug(
                    "Timed-out %s %r later failed: %s", kind.label, identifier, exc
                )
            else:
                logger.debug(
                    "Timed-out %s %r later completed; result discarded",
                    kind.label, identifier,
                )

        task.add_done_callback(_collect)
