"""FormEngine — shared plumbing for form screens.

An engine owns its Timeline, its subjects and every subscription it makes,
all registered in one DisposeBag. Input methods are safe to call from any
thread; outputs are plain streams for the presentation layer.
"""

from __future__ import annotations

from typing import Callable, TypeVar

from rxform.lifecycle import DisposeBag, TraceHook
from rxform.replay import ValueStream
from rxform.stream import EventStream
from rxform.timeline import Timeline

T = TypeVar("T")


class FormEngine:
    """Base class for engines built from subjects and derived streams."""

    def __init__(self, *, timeline: Timeline | None = None, trace: TraceHook | None = None) -> None:
        self._timeline = timeline or Timeline()
        self._bag = DisposeBag()
        self._trace = trace
        self._outputs: dict[str, EventStream] = {}

    @property
    def timeline(self) -> Timeline:
        return self._timeline

    @property
    def disposed(self) -> bool:
        return self._bag.disposed

    @property
    def outputs(self) -> dict[str, EventStream]:
        """Output streams by name, as passed to the trace hook."""
        return dict(self._outputs)

    def own(self, disposer: Callable[[], None]) -> None:
        """Release disposer when the engine is disposed (at once if it already is)."""
        self._bag.add(disposer)

    def dispose(self) -> None:
        """Cancel every subscription, then close every subject. Safe to repeat."""
        self._bag.dispose()

    def _subject(self) -> EventStream:
        subject: EventStream = EventStream()
        self._bag.add(subject)
        return subject

    def _state(self, seed: T) -> ValueStream[T]:
        state: ValueStream[T] = ValueStream(seed)
        self._bag.add(state)
        return state

    def _input(self, subject: EventStream[T]) -> Callable[[T], None]:
        """A callable that emits into subject on this engine's timeline."""

        def _emit(value: T) -> None:
            self._timeline.dispatch(subject.emit, value)

        return _emit

    def _expose(self, streams: dict[str, EventStream]) -> None:
        """Register output streams for teardown and, if set, tracing."""
        for name, stream in streams.items():
            self._outputs[name] = stream
            self._bag.add(stream)
            if self._trace is not None:
                self._bag.trace(name, stream, self._trace)
