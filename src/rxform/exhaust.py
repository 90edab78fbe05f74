"""exhaust_map() — at most one async operation in flight per stream.

While an operation started by one event is outstanding, further events
are dropped: not queued, not merged. The controller becomes idle again
only after the operation's result has been emitted.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, TypeVar

from rxform.stream import EventStream
from rxform.timeline import Timeline

logger = logging.getLogger("rxform.exhaust")

T = TypeVar("T")
U = TypeVar("U")


def exhaust_map(
    source: EventStream[T],
    fn: Callable[[T], Awaitable[U]],
    *,
    timeline: Timeline,
    on_start: Callable[[], None] | None = None,
    on_settle: Callable[[], None] | None = None,
) -> EventStream[U]:
    """Run fn for a source event unless a previous run is still pending.

    on_start runs synchronously when an event is accepted, before fn is
    scheduled. on_settle runs after the result has been emitted, or after
    fn failed. A failure in fn is logged by the timeline; nothing is
    emitted for it.
    """
    child: EventStream[U] = EventStream()
    busy = [False]

    async def _drive(value: T) -> None:
        try:
            result = await fn(value)
            child.emit(result)
        finally:
            busy[0] = False
            if on_settle is not None:
                on_settle()

    def _on_event(value: T) -> None:
        if busy[0]:
            logger.debug("Dropped %s event: operation already in flight", type(value).__name__)
            return
        busy[0] = True
        if on_start is not None:
            on_start()
        coro = _drive(value)
        try:
            timeline.spawn(coro)
        except RuntimeError:
            coro.close()
            busy[0] = False
            if on_settle is not None:
                on_settle()
            raise

    child._attach(source, _on_event)
    return child
