"""SubmissionGate — validity-gated, exhaust-deduplicated form submission.

Submit events are checked against the latest validity value. Rejected
submits become the invalid message at once; accepted ones snapshot the
latest payload and call the operation, with at most one call in flight.
The loading stream is raised when a call starts and lowered after its
message has been emitted.
"""

from __future__ import annotations

import enum
import logging
from typing import Awaitable, Callable, Generic, TypeVar

from rxform.exhaust import exhaust_map
from rxform.replay import ValueStream
from rxform.result import Failure, Result
from rxform.stream import EventStream, merge
from rxform.timeline import Timeline

logger = logging.getLogger("rxform.gate")

P = TypeVar("P")
M = TypeVar("M")


class SubmitPhase(enum.Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"


class SubmissionGate(Generic[P, M]):
    """Turns submit triggers into messages."""

    def __init__(
        self,
        trigger: EventStream[None],
        *,
        validity: ValueStream[bool],
        payload: ValueStream[P],
        operation: Callable[[P], Awaitable[Result]],
        to_message: Callable[[object], M],
        invalid_message: M,
        loading: ValueStream[bool],
        timeline: Timeline,
    ) -> None:
        self._operation = operation
        self._to_message = to_message
        self._loading = loading
        self._phase = SubmitPhase.IDLE

        checked = trigger.with_latest_from(validity, lambda _, is_valid: is_valid)
        accepted = checked.filter(lambda is_valid: is_valid).with_latest_from(
            payload, lambda _, snapshot: snapshot
        )
        rejected = checked.filter(lambda is_valid: not is_valid).map(lambda _: invalid_message)
        completed = exhaust_map(
            accepted,
            self._perform,
            timeline=timeline,
            on_start=self._begin,
            on_settle=self._settle,
        )
        self.message: EventStream[M] = merge(completed, rejected)

    @property
    def phase(self) -> SubmitPhase:
        return self._phase

    def _begin(self) -> None:
        self._phase = SubmitPhase.SUBMITTING
        self._loading.emit(True)

    def _settle(self) -> None:
        self._phase = SubmitPhase.IDLE
        self._loading.emit(False)

    async def _perform(self, payload: P) -> M:
        logger.debug("Submitting %r", payload)
        try:
            result = await self._operation(payload)
        except Exception as exc:
            # Repositories must resolve with a Result; still end in a message.
            logger.exception("Operation raised instead of returning a Result")
            result = Failure(str(exc) or type(exc).__name__, exc)
        return self._to_message(result)
