"""Shared fixtures: a controllable in-memory UserRepository."""

import asyncio

import pytest

from rxform import Success


class FakeUserRepository:
    """Records calls and resolves with a preset result.

    With hold=True every call waits until release() is called, so tests
    can act while an operation is in flight.
    """

    def __init__(self, result=None, *, hold=False, error=None):
        self.result = Success() if result is None else result
        self.error = error
        self.calls = []
        self._hold = hold
        self._released = asyncio.Event()

    def release(self):
        self._released.set()

    async def _respond(self):
        if self._hold:
            await self._released.wait()
        if self.error is not None:
            raise self.error
        return self.result

    async def login(self, email, password):
        self.calls.append(("login", email, password))
        return await self._respond()

    async def change_password(self, password, new_password):
        self.calls.append(("change_password", password, new_password))
        return await self._respond()


@pytest.fixture
def repository():
    return FakeUserRepository()


@pytest.fixture
def held_repository():
    return FakeUserRepository(hold=True)


@pytest.fixture
def settle():
    """Let freshly spawned tasks run up to their first blocking await."""

    async def _settle():
        for _ in range(3):
            await asyncio.sleep(0)

    return _settle


@pytest.fixture
def make_repository():
    return FakeUserRepository
