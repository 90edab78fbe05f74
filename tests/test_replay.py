"""Tests for ValueStream and share_value() — last-value replay."""

from rxform import EventStream, ValueStream


class TestValueStream:
    def test_replays_seed_to_subscriber(self):
        vs = ValueStream(False)
        received = []
        vs.subscribe(received.append)
        assert received == [False]

    def test_replays_latest_not_history(self):
        vs = ValueStream(0)
        vs.emit(1)
        vs.emit(2)
        received = []
        vs.subscribe(received.append)
        vs.emit(3)
        assert received == [2, 3]

    def test_equal_values_are_not_emitted(self):
        vs = ValueStream("a")
        received = []
        vs.subscribe(received.append)
        vs.emit("a")
        vs.emit("b")
        vs.emit("b")
        assert received == ["a", "b"]

    def test_value_property(self):
        vs = ValueStream(None)
        vs.emit("err")
        assert vs.value == "err"

    def test_closed_stream_does_not_replay(self):
        vs = ValueStream(1)
        vs.close()
        received = []
        vs.subscribe(received.append)
        vs.emit(2)
        assert received == []
        assert vs.value == 1

    def test_repr(self):
        assert "ValueStream(5, open)" in repr(ValueStream(5))


class TestShareValue:
    def test_computation_runs_once_per_upstream_event(self):
        source = EventStream()
        calls = []

        def compute(v):
            calls.append(v)
            return v * 2

        shared = source.map(compute).share_value(0)
        a, b = [], []
        shared.subscribe(a.append)
        shared.subscribe(b.append)
        source.emit(1)
        source.emit(2)
        assert calls == [1, 2]
        assert a == [0, 2, 4]
        assert b == [0, 2, 4]

    def test_late_subscriber_gets_latest(self):
        source = EventStream()
        shared = source.share_value("seed")
        source.emit("x")
        source.emit("y")
        received = []
        shared.subscribe(received.append)
        assert received == ["y"]

    def test_seed_until_source_emits(self):
        source = EventStream()
        shared = source.share_value("seed")
        received = []
        shared.subscribe(received.append)
        assert received == ["seed"]

    def test_closes_with_source(self):
        source = EventStream()
        shared = source.share_value(0)
        source.close()
        assert shared.closed

    def test_non_distinct_keeps_repeats(self):
        source = EventStream()
        shared = source.share_value("seed", distinct=False)
        received = []
        shared.subscribe(received.append)
        source.emit("x")
        source.emit("x")
        assert received == ["seed", "x", "x"]

    def test_non_distinct_replays_only_latest(self):
        vs = ValueStream(0, distinct=False)
        vs.emit(1)
        vs.emit(1)
        received = []
        vs.subscribe(received.append)
        assert received == [1]
