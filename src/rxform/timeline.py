"""Timeline — the single ordered event sequence of one engine.

Every emission into an engine goes through its Timeline. Calls made on
the owning thread run synchronously; calls from any other thread are
marshaled onto the asyncio loop with call_soon_threadsafe. Async work
(the external operation) is spawned as a task on the same loop, so its
result re-enters the pipeline on the same timeline.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any, Callable, Coroutine

logger = logging.getLogger("rxform.timeline")


class Timeline:
    """Serializes emissions onto one asyncio loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                loop = None  # bound on first spawn()
        self._loop = loop
        self._owner = threading.get_ident()
        self._tasks: set[asyncio.Task] = set()

    @property
    def loop(self) -> asyncio.AbstractEventLoop | None:
        return self._loop

    def dispatch(self, fn: Callable[..., None], *args: Any) -> None:
        """Run fn(*args) on the timeline. Auto-marshals from other threads."""
        if threading.get_ident() == self._owner:
            fn(*args)
        elif self._loop is not None:
            self._loop.call_soon_threadsafe(fn, *args)
        else:
            raise RuntimeError("Timeline has no event loop to marshal cross-thread events onto")

    def spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        """Schedule coro as a task on the timeline's loop."""
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        task = self._loop.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._finished)
        return task

    async def drain(self) -> None:
        """Wait until every spawned task has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _finished(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Timeline task failed", exc_info=exc)

    def __repr__(self) -> str:
        return f"Timeline(pending={len(self._tasks)})"
