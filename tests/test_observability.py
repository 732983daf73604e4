"""Tests for pawprint.observability — generation events and the event log."""

import threading
import time

import pytest

from pawprint.observability.events import (
    CustomEntryDropped,
    GenerationCompleted,
    RouteClash,
    RouteIgnored,
    now_ns,
)
from pawprint.observability.log import EventLog


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _ignored(path: str = "blog/@slug/+Page.tsx") -> RouteIgnored:
    return RouteIgnored(
        path=path, reason="SSGUnhandled", segment="@slug", timestamp_ns=now_ns(),
    )


# ---------------------------------------------------------------------------
# EventLog
# ---------------------------------------------------------------------------


class TestEventLog:
    """Tests for the event log store."""

    def test_append_and_len(self) -> None:
        log = EventLog()
        assert len(log) == 0
        log.append(_ignored())
        assert len(log) == 1

    def test_max_events_enforced(self) -> None:
        log = EventLog(max_events=5)
        for i in range(10):
            log.append(_ignored(f"p{i}/@id/+Page.tsx"))
        assert len(log) == 5
        assert log.recent(1)[0].path == "p9/@id/+Page.tsx"

    def test_recent(self) -> None:
        log = EventLog()
        log.append_many([_ignored("a"), _ignored("b"), _ignored("c")])
        assert [e.path for e in log.recent(2)] == ["b", "c"]

    def test_query_by_type(self) -> None:
        log = EventLog()
        log.append(_ignored())
        log.append(RouteClash(
            url_path="/dup", sources=("a", "b"), policy="ignore", timestamp_ns=now_ns(),
        ))
        results = log.query(event_type=RouteClash)
        assert len(results) == 1
        assert results[0].url_path == "/dup"

    def test_query_by_path(self) -> None:
        log = EventLog()
        log.append(_ignored("blog/@slug/+Page.tsx"))
        log.append(CustomEntryDropped(
            loc="https://example.com/blog", existing="discovered page", timestamp_ns=now_ns(),
        ))
        log.append(_ignored("shop/@id/+Page.tsx"))
        assert len(log.query(path="blog")) == 2
        assert len(log.query(path="shop")) == 1

    def test_query_most_recent_first_with_limit(self) -> None:
        log = EventLog()
        log.append_many([_ignored("a"), _ignored("b"), _ignored("c")])
        assert [e.path for e in log.query(limit=2)] == ["c", "b"]

    def test_query_since(self) -> None:
        log = EventLog()
        log.append(_ignored("old"))
        cutoff = now_ns()
        time.sleep(0.001)
        log.append(_ignored("new"))
        assert [e.path for e in log.query(since_ns=cutoff)] == ["new"]

    def test_clear(self) -> None:
        log = EventLog()
        log.append_many([_ignored(), _ignored()])
        assert log.clear() == 2
        assert len(log) == 0

    def test_stats(self) -> None:
        log = EventLog(max_events=10)
        log.append(_ignored())
        log.append(GenerationCompleted(
            entries=3, ignored=1, clashes=0, duration_ms=1.0, timestamp_ns=now_ns(),
        ))
        stats = log.stats()
        assert stats["total"] == 2
        assert stats["max_events"] == 10
        assert stats["by_type"] == {"RouteIgnored": 1, "GenerationCompleted": 1}

    def test_thread_safety(self) -> None:
        log = EventLog(max_events=10_000)

        def writer(n: int) -> None:
            for i in range(200):
                log.append(_ignored(f"{n}/{i}"))

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(log) == 1600


# ---------------------------------------------------------------------------
# Event dataclasses
# ---------------------------------------------------------------------------


class TestEventDataclasses:
    def test_frozen(self) -> None:
        event = _ignored()
        with pytest.raises(AttributeError):
            event.path = "x"  # type: ignore[misc]

    def test_now_ns_monotonic(self) -> None:
        a = now_ns()
        b = now_ns()
        assert b >= a
