"""Value streams — multicast with last-value replay.

A ValueStream holds a seed and the latest value. New subscribers get the
current value immediately, then live values only; nothing older is ever
replayed. By default setting an equal value is not an emission, so a
value stream behaves like a state cell. With distinct=False every value
is emitted (still replaying only the latest), for record streams where a
repeated record is a new event the UI must see.
"""

from __future__ import annotations

from typing import Callable, TypeVar

from rxform.stream import Disposer, EventStream

T = TypeVar("T")


class ValueStream(EventStream[T]):
    """A seeded stream that replays its latest value to each new subscriber."""

    def __init__(self, seed: T, *, distinct: bool = True) -> None:
        super().__init__()
        self._value = seed
        self._distinct = distinct

    @property
    def value(self) -> T:
        return self._value

    def emit(self, value: T) -> None:
        """Store value and notify, unless closed or (when distinct) unchanged."""
        if self._closed:
            return
        old = self._value
        if self._distinct and (old is value or old == value):
            return
        self._value = value
        super().emit(value)

    def subscribe(self, callback: Callable[[T], None]) -> Disposer:
        disposer = super().subscribe(callback)
        if not self._closed:
            callback(self._value)
        return disposer

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"ValueStream({self._value!r}, {state})"
