"""ChangePasswordEngine — current/new password validation and submission."""

from __future__ import annotations

from rxform.engine import FormEngine
from rxform.gate import SubmissionGate, SubmitPhase
from rxform.lifecycle import TraceHook
from rxform.messages import ChangePasswordState, InvalidInput, Message, result_to_message
from rxform.models import PasswordChange
from rxform.replay import ValueStream
from rxform.repository import UserRepository
from rxform.stream import EventStream, combine_latest, merge
from rxform.timeline import Timeline
from rxform.validators import current_password_error, is_valid_change, new_password_error

SUCCESS_TEXT = "Change password successfully!"
ERROR_FORMAT = "Error when change password: {message}"


def _to_message(result: object) -> Message:
    return result_to_message(result, success_text=SUCCESS_TEXT, error_format=ERROR_FORMAT)


class ChangePasswordEngine(FormEngine):
    """Drives a change-password form.

    Inputs: password_changed(), new_password_changed(), submit().
    Outputs: password_error, new_password_error, is_valid, is_loading,
    message, and state (a ChangePasswordState record combining the three).

    Both fields start out as "". The "same password" error is set on both
    fields together and cleared on both together. Error streams start at
    None (untouched); the first edit of either field evaluates both.

    Every record on state is emitted, including a repeat of the previous
    one, so each rejected submit shows up. Like LoginEngine, a valid
    submit needs a running asyncio loop on the timeline.
    """

    def __init__(
        self,
        repository: UserRepository,
        *,
        timeline: Timeline | None = None,
        trace: TraceHook | None = None,
    ) -> None:
        super().__init__(timeline=timeline, trace=trace)

        password = self._subject()
        new_password = self._subject()
        submit = self._subject()
        self.is_loading: ValueStream[bool] = self._state(False)

        both = combine_latest(
            password.share_value(""),
            new_password.share_value(""),
            PasswordChange,
        ).share_value(PasswordChange("", ""))

        self.is_valid: ValueStream[bool] = both.map(is_valid_change).share_value(False)
        self.password_error: ValueStream[str | None] = both.map(current_password_error).share_value(None)
        self.new_password_error: ValueStream[str | None] = both.map(new_password_error).share_value(None)

        self._gate: SubmissionGate[PasswordChange, Message] = SubmissionGate(
            submit,
            validity=self.is_valid,
            payload=both,
            operation=lambda change: repository.change_password(change.password, change.new_password),
            to_message=_to_message,
            invalid_message=InvalidInput(),
            loading=self.is_loading,
            timeline=self.timeline,
        )
        self.message: EventStream[Message] = self._gate.message

        self.state: ValueStream[ChangePasswordState] = merge(
            self.is_loading.filter(lambda loading: loading).map(lambda _: ChangePasswordState.loading()),
            self.message.map(ChangePasswordState.from_message),
        ).share_value(ChangePasswordState.initial(), distinct=False)

        self._expose({
            "newPasswordError": self.new_password_error,
            "passwordError": self.password_error,
            "isValidSubmit": self.is_valid,
            "both": both,
            "message": self.message,
            "changePasswordState": self.state,
        })

        self.password_changed = self._input(password)
        self.new_password_changed = self._input(new_password)
        self._submit = self._input(submit)

    @property
    def phase(self) -> SubmitPhase:
        return self._gate.phase

    def submit(self) -> None:
        self._submit(None)
