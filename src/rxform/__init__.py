"""rxform: reactive form engines — validation, gated submission, loading state."""

from importlib.metadata import version as _version

__version__ = _version("rxform")

from rxform.stream import EventStream, combine_latest, merge
from rxform.replay import ValueStream
from rxform.timeline import Timeline
from rxform.exhaust import exhaust_map
from rxform.result import Failure, Result, Success
from rxform.messages import (
    ChangePasswordState,
    InvalidInput,
    Message,
    SubmitError,
    SubmitSuccess,
    result_to_message,
)
from rxform.models import Credential, PasswordChange
from rxform.repository import UserRepository
from rxform.lifecycle import DisposeBag, logging_trace
from rxform.gate import SubmissionGate, SubmitPhase
from rxform.engine import FormEngine
from rxform.login import LoginEngine
from rxform.change_password import ChangePasswordEngine
# textual NOT auto-imported: opt-in only

__all__ = [
    "EventStream",
    "ValueStream",
    "combine_latest",
    "merge",
    "exhaust_map",
    "Timeline",
    "Success",
    "Failure",
    "Result",
    "SubmitSuccess",
    "SubmitError",
    "InvalidInput",
    "Message",
    "ChangePasswordState",
    "result_to_message",
    "Credential",
    "PasswordChange",
    "UserRepository",
    "DisposeBag",
    "logging_trace",
    "SubmissionGate",
    "SubmitPhase",
    "FormEngine",
    "LoginEngine",
    "ChangePasswordEngine",
]
