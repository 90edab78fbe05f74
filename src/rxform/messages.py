"""Output messages and state records emitted by engines.

Messages are immutable values. The presentation layer only reads them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from rxform.result import Failure, Success

logger = logging.getLogger("rxform.messages")


@dataclass(frozen=True)
class SubmitSuccess:
    message: str | None = None


@dataclass(frozen=True)
class SubmitError:
    message: str
    cause: BaseException | None = None


@dataclass(frozen=True)
class InvalidInput:
    message: str = "Invalid information"


Message = Union[SubmitSuccess, SubmitError, InvalidInput]


def result_to_message(
    result: object,
    *,
    success_text: str | None = None,
    error_format: str = "{message}",
) -> Message:
    """Map an operation Result to the Message the UI renders.

    Anything that is neither Success nor Failure breaks the repository
    contract; it is logged and reported as an error message.
    """
    if isinstance(result, Success):
        return SubmitSuccess(success_text)
    if isinstance(result, Failure):
        return SubmitError(error_format.format(message=result.message), result.cause)
    logger.error("Repository returned %r, expected Success or Failure", result)
    return SubmitError(f"Unknown result {result!r}")


@dataclass(frozen=True)
class ChangePasswordState:
    """Combined loading / error / message record for the change-password screen."""

    is_loading: bool
    error: BaseException | None = None
    message: str | None = None

    @classmethod
    def initial(cls) -> ChangePasswordState:
        return cls(is_loading=False)

    @classmethod
    def loading(cls) -> ChangePasswordState:
        return cls(is_loading=True)

    @classmethod
    def from_message(cls, message: Message) -> ChangePasswordState:
        if isinstance(message, SubmitError):
            return cls(is_loading=False, error=message.cause, message=message.message)
        return cls(is_loading=False, message=message.message)
