"""DisposeBag — owns every subject and subscription of one engine.

dispose() releases subscriptions first, then closes streams. It is
idempotent and total: once disposed, the bag releases anything added to
it on the spot.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from rxform.stream import Disposer, EventStream

logger = logging.getLogger("rxform.lifecycle")

TraceHook = Callable[[str, Any], None]


class DisposeBag:
    """Streams and disposers released together."""

    def __init__(self) -> None:
        self._streams: list[EventStream] = []
        self._disposers: list[Disposer] = []
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def add(self, resource: EventStream | Disposer) -> None:
        """Take ownership of a stream (closed on dispose) or a disposer (called on dispose)."""
        if isinstance(resource, EventStream):
            if self._disposed:
                resource.close()
            else:
                self._streams.append(resource)
        elif callable(resource):
            if self._disposed:
                resource()
            else:
                self._disposers.append(resource)
        else:
            raise TypeError(f"Cannot dispose {resource!r}")

    def trace(self, name: str, stream: EventStream, hook: TraceHook) -> None:
        """Report every value of stream to hook(name, value) until dispose."""
        self.add(stream.subscribe(lambda value: hook(name, value)))

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        logger.debug(
            "Disposing %d subscriptions, %d streams",
            len(self._disposers), len(self._streams),
        )
        for disposer in self._disposers:
            disposer()
        self._disposers.clear()
        for stream in self._streams:
            stream.close()
        self._streams.clear()


def logging_trace(trace_logger: logging.Logger | None = None) -> TraceHook:
    """A trace hook that logs "[name] = value" at DEBUG."""
    target = trace_logger or logging.getLogger("rxform.trace")

    def _hook(name: str, value: Any) -> None:
        target.debug("[%s] = %r", name, value)

    return _hook
