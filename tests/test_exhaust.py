"""Tests for exhaust_map() — drop-while-busy async mapping."""

import asyncio
import logging

import pytest

from rxform import EventStream, Timeline, exhaust_map


class _Operation:
    """Async fn whose completion the test controls."""

    def __init__(self):
        self.calls = []
        self._gate = asyncio.Event()

    def release(self):
        self._gate.set()

    async def __call__(self, value):
        self.calls.append(value)
        await self._gate.wait()
        return f"done:{value}"


class TestExhaustMap:
    @pytest.mark.asyncio
    async def test_emits_result(self):
        timeline = Timeline()
        source = EventStream()
        op = _Operation()
        results = []
        exhaust_map(source, op, timeline=timeline).subscribe(results.append)

        source.emit("a")
        op.release()
        await timeline.drain()

        assert results == ["done:a"]

    @pytest.mark.asyncio
    async def test_drops_events_while_busy(self, settle):
        timeline = Timeline()
        source = EventStream()
        op = _Operation()
        results = []
        exhaust_map(source, op, timeline=timeline).subscribe(results.append)

        source.emit("a")
        await settle()
        for value in ("b", "c", "d"):
            source.emit(value)
        op.release()
        await timeline.drain()

        assert op.calls == ["a"]
        assert results == ["done:a"]

    @pytest.mark.asyncio
    async def test_accepts_again_after_completion(self):
        timeline = Timeline()
        source = EventStream()
        op = _Operation()
        op.release()
        results = []
        exhaust_map(source, op, timeline=timeline).subscribe(results.append)

        source.emit("a")
        await timeline.drain()
        source.emit("b")
        await timeline.drain()

        assert results == ["done:a", "done:b"]

    @pytest.mark.asyncio
    async def test_hooks_bracket_the_result(self):
        timeline = Timeline()
        source = EventStream()
        op = _Operation()
        op.release()
        log = []
        out = exhaust_map(
            source,
            op,
            timeline=timeline,
            on_start=lambda: log.append("start"),
            on_settle=lambda: log.append("settle"),
        )
        out.subscribe(lambda v: log.append(v))

        source.emit("a")
        assert log == ["start"]  # synchronous, before the operation runs
        await timeline.drain()

        assert log == ["start", "done:a", "settle"]

    @pytest.mark.asyncio
    async def test_failure_is_logged_and_controller_recovers(self, caplog):
        timeline = Timeline()
        source = EventStream()
        settled = []
        attempts = []

        async def flaky(value):
            attempts.append(value)
            if value == "bad":
                raise ValueError("boom")
            return value

        results = []
        out = exhaust_map(source, flaky, timeline=timeline, on_settle=lambda: settled.append(True))
        out.subscribe(results.append)

        with caplog.at_level(logging.ERROR, logger="rxform.timeline"):
            source.emit("bad")
            await timeline.drain()

        assert results == []
        assert settled == [True]
        assert "boom" in caplog.text

        source.emit("good")
        await timeline.drain()
        assert results == ["good"]

    @pytest.mark.asyncio
    async def test_result_after_close_is_not_emitted(self, settle):
        timeline = Timeline()
        source = EventStream()
        op = _Operation()
        results = []
        out = exhaust_map(source, op, timeline=timeline)
        out.subscribe(results.append)

        source.emit("a")
        await settle()
        source.close()
        op.release()
        await timeline.drain()

        assert out.closed
        assert results == []

    def test_spawn_failure_resets_controller(self):
        timeline = Timeline()  # no running loop
        source = EventStream()
        log = []
        exhaust_map(
            source,
            lambda v: asyncio.sleep(0),
            timeline=timeline,
            on_settle=lambda: log.append("settle"),
        )

        with pytest.raises(RuntimeError):
            source.emit("a")
        assert log == ["settle"]
