"""The collaborator contract engines call out to.

Implementations live outside this package. They must resolve with a
Result rather than raise, and must tolerate concurrent calls from
independent engines.
"""

from __future__ import annotations

from typing import Protocol

from rxform.result import Result


class UserRepository(Protocol):
    async def login(self, email: str, password: str) -> Result: ...

    async def change_password(self, password: str, new_password: str) -> Result: ...
