"""Textual integration for rxform. Opt-in — requires textual.

A FormBinding connects one engine's named outputs ("emailError",
"isLoading", "message", ...) to widget updates on one Textual app. The
binding is owned by the engine: disposing the engine unbinds every
effect. Widget coupling stays here; engines know nothing about Textual.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Iterator

from textual.css.query import NoMatches

from rxform.engine import FormEngine
from rxform.replay import ValueStream
from rxform.stream import EventStream

logger = logging.getLogger("rxform.textual")

Effect = Callable[[Any], None]


class FormBinding:
    """Routes an engine's outputs into widget effects on a Textual app.

    Effects run only while the app is running and the binding is not
    paused. Values produced off the app thread are marshaled through
    app.call_from_thread. A widget that is not mounted (NoMatches) skips
    that update; any other error propagates to the emitter.
    """

    def __init__(self, app, engine: FormEngine) -> None:
        self._app = app
        self._engine = engine
        self._main = threading.get_ident()
        self._pause_depth = 0
        self._bound: list[tuple[str, EventStream, Effect]] = []
        self._disposers: list[Callable[[], None]] = []
        self._closed = False
        engine.own(self.close)

    @property
    def active(self) -> bool:
        """Would an effect run right now?"""
        return not self._closed and self._app.is_running and self._pause_depth == 0

    @property
    def closed(self) -> bool:
        return self._closed

    def on(self, name: str, effect: Effect) -> FormBinding:
        """Run effect for every value of the engine output called name."""
        outputs = self._engine.outputs
        if name not in outputs:
            raise KeyError(f"{type(self._engine).__name__} has no output {name!r}; known: {sorted(outputs)}")
        if self._closed:
            return self
        stream = outputs[name]
        guarded = self._guard(name, effect)
        self._bound.append((name, stream, guarded))
        self._disposers.append(stream.subscribe(guarded))
        return self

    @contextmanager
    def paused(self) -> Iterator[None]:
        """Suspend effects during widget replacement, then resync state outputs.

        On leaving the outermost pause every bound value stream re-applies
        its current value, so freshly mounted widgets show current state.
        Plain event outputs (messages) missed during the pause are not replayed.
        """
        self._pause_depth += 1
        try:
            yield
        finally:
            self._pause_depth -= 1
        if self._pause_depth == 0:
            self._resync()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        for disposer in self._disposers:
            disposer()
        self._disposers.clear()
        logger.debug("Unbound %d effects from %s", len(self._bound), type(self._engine).__name__)
        self._bound.clear()

    def _resync(self) -> None:
        for _, stream, guarded in list(self._bound):
            if isinstance(stream, ValueStream) and not stream.closed:
                guarded(stream.value)

    def _guard(self, name: str, effect: Effect) -> Effect:
        def _safe(value: Any) -> None:
            try:
                effect(value)
            except NoMatches:
                logger.debug("Skipped %s update: widget not mounted", name)

        def _guarded(value: Any) -> None:
            if not self.active:
                return
            if threading.get_ident() != self._main:
                self._app.call_from_thread(_safe, value)
            else:
                _safe(value)

        return _guarded


def bind(app, engine: FormEngine, effects: dict[str, Effect]) -> FormBinding:
    """Bind several outputs at once: bind(app, engine, {"emailError": show_error})."""
    binding = FormBinding(app, engine)
    for name, effect in effects.items():
        binding.on(name, effect)
    return binding
