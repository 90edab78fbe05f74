"""Push-based event streams with operator chaining.

Every stream is hot and multicast: emit() delivers synchronously to all
current subscribers, and a derived stream runs its operator once per
upstream emission no matter how many subscribers it has. Each operator
returns a new stream. close() tears down the stream and everything
derived from it.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")

Disposer = Callable[[], None]

_UNSET = object()


def _noop() -> None:
    pass


class EventStream(Generic[T]):
    """Multicast push stream (a publish subject)."""

    def __init__(self) -> None:
        self._subscribers: list[Callable[[T], None]] = []
        self._children: list[EventStream] = []  # derived streams, closed with us
        self._upstream: list[Disposer] = []  # releases our parent subscriptions
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def emit(self, value: T) -> None:
        """Push a value to all subscribers."""
        if self._closed:
            return
        for cb in list(self._subscribers):
            if self._closed:
                break
            cb(value)

    def subscribe(self, callback: Callable[[T], None]) -> Disposer:
        """Register a callback. Returns a function that removes it."""
        if self._closed:
            return _noop
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            try:
                self._subscribers.remove(callback)
            except ValueError:
                pass  # already removed

        return _unsubscribe

    def map(self, fn: Callable[[T], U]) -> EventStream[U]:
        """Transform events through fn."""
        child: EventStream[U] = EventStream()
        child._attach(self, lambda v: child.emit(fn(v)))
        return child

    def filter(self, fn: Callable[[T], bool]) -> EventStream[T]:
        """Only pass events where fn returns True."""
        child: EventStream[T] = EventStream()
        child._attach(self, lambda v: child.emit(v) if fn(v) else None)
        return child

    def distinct(self) -> EventStream[T]:
        """Suppress consecutive duplicates."""
        child: EventStream[T] = EventStream()
        last: list[Any] = [_UNSET]

        def _on_event(value: T) -> None:
            if last[0] is not _UNSET and (last[0] is value or last[0] == value):
                return
            last[0] = value
            child.emit(value)

        child._attach(self, _on_event)
        return child

    def with_latest_from(self, other: EventStream[U], fn: Callable[[T, U], Any]) -> EventStream:
        """Combine each event with the most recent value of other.

        Never waits for other: events arriving before other has produced
        anything are dropped.
        """
        child: EventStream = EventStream()
        latest: list[Any] = [_UNSET]

        def _remember(value: U) -> None:
            latest[0] = value

        def _on_event(value: T) -> None:
            if latest[0] is not _UNSET:
                child.emit(fn(value, latest[0]))

        child._attach(other, _remember)
        child._attach(self, _on_event)
        return child

    def share_value(self, seed: T, *, distinct: bool = True) -> ValueStream[T]:
        """Multicast with last-value replay, starting from seed.

        distinct=False keeps consecutive equal values instead of dropping them.
        """
        from rxform.replay import ValueStream

        child: ValueStream[T] = ValueStream(seed, distinct=distinct)
        child._attach(self, child.emit)
        return child

    def close(self) -> None:
        """Tear down this stream and all downstream children."""
        if self._closed:
            return
        self._closed = True
        self._subscribers.clear()
        for child in list(self._children):
            child.close()
        self._children.clear()
        for release in self._upstream:
            release()
        self._upstream.clear()

    def _attach(self, parent: EventStream, handler: Callable[[Any], None]) -> None:
        """Subscribe handler to parent and close self when parent closes."""
        if parent._closed:
            self.close()
            return
        unsubscribe = parent.subscribe(handler)
        untrack = parent._track_child(self)

        def _release() -> None:
            unsubscribe()
            untrack()

        self._upstream.append(_release)

    def _track_child(self, child: EventStream) -> Disposer:
        """Register child for close propagation. Returns a disposer that removes it."""
        self._children.append(child)

        def _remove() -> None:
            try:
                self._children.remove(child)
            except ValueError:
                pass

        return _remove


def combine_latest(*args: Any) -> EventStream:
    """combine_latest(a, b, ..., fn): emit fn(*latest) whenever any source emits.

    Nothing is emitted until every source has a value. Value streams
    contribute their current value when wired, so they count as having one.
    """
    *sources, fn = args
    if not sources:
        raise TypeError("combine_latest() needs at least one source")
    child: EventStream = EventStream()
    latest: list[Any] = [_UNSET] * len(sources)
    wiring = [True]

    def _slot(index: int) -> Callable[[Any], None]:
        def _on_event(value: Any) -> None:
            latest[index] = value
            if wiring[0] or any(v is _UNSET for v in latest):
                return
            child.emit(fn(*latest))

        return _on_event

    for i, source in enumerate(sources):
        child._attach(source, _slot(i))
    wiring[0] = False
    return child


def merge(*sources: EventStream[T]) -> EventStream[T]:
    """Interleave events from every source in arrival order."""
    child: EventStream[T] = EventStream()
    for source in sources:
        child._attach(source, child.emit)
    return child
