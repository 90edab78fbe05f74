"""Request payloads — immutable snapshots of form fields taken at submit time."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Credential:
    email: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class PasswordChange:
    password: str = field(repr=False)
    new_password: str = field(repr=False)
