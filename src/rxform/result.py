"""Result of an external operation: Success or Failure."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Success:
    value: Any = None


@dataclass(frozen=True)
class Failure:
    message: str
    cause: BaseException | None = None


Result = Union[Success, Failure]
