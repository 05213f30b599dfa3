"""Tests for preen.observability — render and viewer event recording."""

import threading
import time

from preen._errors import CompositionError
from preen.observability.collector import RenderCollector
from preen.observability.events import (
    RenderCompleted,
    RenderFailed,
    ViewerConnected,
    ViewerDisconnected,
    now_ns,
)
from preen.observability.log import EventLog


def _completed(sequence: int = 0, *, accepted: bool = True) -> RenderCompleted:
    return RenderCompleted(
        sequence=sequence, trigger_path="data.yml", accepted=accepted,
        clients_notified=1, size_bytes=10, duration_ms=1.0, timestamp_ns=now_ns(),
    )


# ---------------------------------------------------------------------------
# EventLog
# ---------------------------------------------------------------------------


class TestEventLog:
    """Tests for the event log store."""

    def test_append_and_len(self) -> None:
        log = EventLog()
        assert len(log) == 0
        log.append(_completed())
        assert len(log) == 1

    def test_max_events_enforced(self) -> None:
        log = EventLog(max_events=5)
        for i in range(10):
            log.append(_completed(i))
        assert len(log) == 5
        assert log.recent(1)[0].sequence == 9

    def test_recent_oldest_first(self) -> None:
        log = EventLog()
        for i in range(5):
            log.append(_completed(i))
        recent = log.recent(3)
        assert [e.sequence for e in recent] == [2, 3, 4]

    def test_of_type_most_recent_first(self) -> None:
        log = EventLog()
        log.append(_completed(0))
        log.append(ViewerConnected(client_id="a", timestamp_ns=now_ns()))
        log.append(_completed(1))

        results = log.of_type(RenderCompleted)
        assert [e.sequence for e in results] == [1, 0]

    def test_of_type_limit(self) -> None:
        log = EventLog()
        for i in range(10):
            log.append(_completed(i))
        assert len(log.of_type(RenderCompleted, limit=3)) == 3

    def test_stats(self) -> None:
        log = EventLog(max_events=100)
        log.append(_completed())
        log.append(ViewerConnected(client_id="a", timestamp_ns=now_ns()))

        stats = log.stats()
        assert stats["total"] == 2
        assert stats["max_events"] == 100
        assert stats["by_type"] == {"RenderCompleted": 1, "ViewerConnected": 1}

    def test_thread_safety(self) -> None:
        """Concurrent appends should not lose events."""
        log = EventLog(max_events=50_000)
        errors: list[Exception] = []

        def worker(start: int) -> None:
            try:
                for i in range(1000):
                    log.append(_completed(start * 1000 + i))
            except Exception as exc:
                errors.append(exc)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
        assert len(log) == 10_000


# ---------------------------------------------------------------------------
# RenderCollector
# ---------------------------------------------------------------------------


class TestRenderCollector:
    """Tests for the render collector."""

    def test_record_render(self) -> None:
        collector = RenderCollector()
        collector.record_render(3, trigger_path="style.css", clients_notified=2, duration_ms=4.5)

        [event] = collector.log.of_type(RenderCompleted)
        assert event.sequence == 3
        assert event.trigger_path == "style.css"
        assert event.clients_notified == 2
        assert event.accepted is True

    def test_record_failure(self) -> None:
        collector = RenderCollector()
        collector.record_failure(1, CompositionError("template.html: bad"), trigger_path="t")

        [event] = collector.log.of_type(RenderFailed)
        assert event.error_type == "CompositionError"
        assert event.message == "template.html: bad"

    def test_viewer_lifecycle(self) -> None:
        collector = RenderCollector()
        collector.record_connect("v1")
        collector.record_disconnect("v1")

        assert len(collector.log.of_type(ViewerConnected)) == 1
        assert collector.log.of_type(ViewerDisconnected)[0].client_id == "v1"

    def test_collector_with_custom_log(self) -> None:
        log = EventLog(max_events=50)
        collector = RenderCollector(log)
        collector.record_connect("v1")
        assert len(log) == 1
        assert collector.log is log


class TestSummary:
    """RenderCollector.summary() aggregates for the stats endpoint."""

    def test_empty(self) -> None:
        assert RenderCollector().summary() == {"renders": 0, "superseded": 0, "failures": 0}

    def test_counts_and_timings(self) -> None:
        collector = RenderCollector()
        collector.record_render(0, duration_ms=2.0)
        collector.record_render(1, duration_ms=4.0)
        collector.record_render(2, accepted=False, duration_ms=100.0)

        summary = collector.summary()
        assert summary["renders"] == 3
        assert summary["superseded"] == 1
        assert summary["avg_ms"] == 3.0
        assert summary["last_ms"] == 4.0

    def test_last_error(self) -> None:
        collector = RenderCollector()
        collector.record_failure(0, CompositionError("first"))
        collector.record_failure(1, CompositionError("second"))

        summary = collector.summary()
        assert summary["failures"] == 2
        assert summary["last_error"] == {"type": "CompositionError", "message": "second"}


# ---------------------------------------------------------------------------
# Event dataclasses
# ---------------------------------------------------------------------------


class TestEventDataclasses:
    """Tests for event immutability and structure."""

    def test_render_completed_frozen(self) -> None:
        event = _completed()
        try:
            event.sequence = 5  # type: ignore[misc]
            raise AssertionError("Should have raised")
        except AttributeError:
            pass  # frozen

    def test_now_ns_monotonic(self) -> None:
        t1 = now_ns()
        time.sleep(0.001)
        t2 = now_ns()
        assert t2 > t1
