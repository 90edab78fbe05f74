"""LoginEngine — email/password validation and login submission."""

from __future__ import annotations

from rxform.engine import FormEngine
from rxform.gate import SubmissionGate, SubmitPhase
from rxform.lifecycle import TraceHook
from rxform.messages import InvalidInput, Message, result_to_message
from rxform.models import Credential
from rxform.replay import ValueStream
from rxform.repository import UserRepository
from rxform.stream import EventStream, combine_latest
from rxform.timeline import Timeline
from rxform.validators import email_error, is_valid_email, is_valid_password, password_error


class LoginEngine(FormEngine):
    """Drives a login form.

    Inputs: email_changed(), password_changed(), submit().
    Outputs: email_error, password_error, is_valid, is_loading, message.

    is_valid is False while a login is in flight, so a submit during that
    time is answered with InvalidInput and never reaches the repository.

    email_error and password_error start at None and report only after the
    first edit of their field: None means "valid or untouched", so an empty,
    never-edited field shows no error. is_valid is False from the start.

    Submitting a valid form spawns the login on the timeline's asyncio
    loop. Build the engine inside a running loop (or pass a Timeline bound
    to one); a valid submit with no loop raises RuntimeError and leaves
    the engine idle with no message.
    """

    def __init__(
        self,
        repository: UserRepository,
        *,
        timeline: Timeline | None = None,
        trace: TraceHook | None = None,
    ) -> None:
        super().__init__(timeline=timeline, trace=trace)

        email = self._subject()
        password = self._subject()
        submit = self._subject()
        self.is_loading: ValueStream[bool] = self._state(False)

        credential = combine_latest(
            email.share_value(""),
            password.share_value(""),
            Credential,
        ).share_value(Credential("", ""))

        self.is_valid: ValueStream[bool] = combine_latest(
            credential,
            self.is_loading,
            lambda c, loading: is_valid_email(c.email) and is_valid_password(c.password) and not loading,
        ).share_value(False)

        self.email_error: ValueStream[str | None] = email.map(email_error).share_value(None)
        self.password_error: ValueStream[str | None] = password.map(password_error).share_value(None)

        self._gate: SubmissionGate[Credential, Message] = SubmissionGate(
            submit,
            validity=self.is_valid,
            payload=credential,
            operation=lambda c: repository.login(c.email, c.password),
            to_message=result_to_message,
            invalid_message=InvalidInput(),
            loading=self.is_loading,
            timeline=self.timeline,
        )
        self.message: EventStream[Message] = self._gate.message

        self._expose({
            "emailError": self.email_error,
            "passwordError": self.password_error,
            "isValidSubmit": self.is_valid,
            "message": self.message,
            "isLoading": self.is_loading,
        })

        self.email_changed = self._input(email)
        self.password_changed = self._input(password)
        self._submit = self._input(submit)

    @property
    def phase(self) -> SubmitPhase:
        return self._gate.phase

    def submit(self) -> None:
        self._submit(None)
