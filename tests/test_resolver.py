"""Tests for pawprint.routes.resolver — clash detection and policies."""

from __future__ import annotations

from pathlib import Path

import pytest

from pawprint._errors import ConfigError, RouteConflictError
from pawprint.observability.events import RouteClash
from pawprint.observability.log import EventLog
from pawprint.routes.resolver import find_conflicts, group_by_url, resolve_duplicates
from pawprint.routes.walker import PageCandidate, ResolvedPage


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _page(short_path: str, url_path: str) -> ResolvedPage:
    """Shorthand for creating ResolvedPage fixtures."""
    parts = short_path.split("/")
    return ResolvedPage(
        candidate=PageCandidate(
            short_path=short_path,
            segments=tuple(parts[:-1]),
            file_name=parts[-1],
            absolute_path=Path("/site/pages") / short_path,
        ),
        url_path=url_path,
        loc="https://example.com" + url_path,
    )


@pytest.fixture
def clashing() -> list[ResolvedPage]:
    return [
        _page("+Page.tsx", "/"),
        _page("(a)/dup/+Page.tsx", "/dup"),
        _page("about/+Page.tsx", "/about"),
        _page("dup/+Page.tsx", "/dup"),
    ]


# ---------------------------------------------------------------------------
# Grouping
# ---------------------------------------------------------------------------


class TestGrouping:
    def test_group_preserves_order(self, clashing: list[ResolvedPage]) -> None:
        groups = group_by_url(clashing)
        assert list(groups) == ["/", "/dup", "/about"]
        assert [p.candidate.short_path for p in groups["/dup"]] == [
            "(a)/dup/+Page.tsx",
            "dup/+Page.tsx",
        ]

    def test_find_conflicts(self, clashing: list[ResolvedPage]) -> None:
        (group,) = find_conflicts(clashing)
        assert group.url_path == "/dup"
        assert group.sources == ("(a)/dup/+Page.tsx", "dup/+Page.tsx")

    def test_no_conflicts(self) -> None:
        assert find_conflicts([_page("+Page.tsx", "/"), _page("a/+Page.tsx", "/a")]) == ()


# ---------------------------------------------------------------------------
# Policies
# ---------------------------------------------------------------------------


class TestResolveDuplicates:
    def test_unique_pages_pass_through(self) -> None:
        pages = [_page("+Page.tsx", "/"), _page("a/+Page.tsx", "/a")]
        result = resolve_duplicates(pages, "error")
        assert result.pages == tuple(pages)
        assert result.conflicts == ()

    def test_ignore_keeps_first(
        self, clashing: list[ResolvedPage], capsys: pytest.CaptureFixture[str],
    ) -> None:
        result = resolve_duplicates(clashing, "ignore")
        assert [p.candidate.short_path for p in result.pages] == [
            "+Page.tsx",
            "(a)/dup/+Page.tsx",
            "about/+Page.tsx",
        ]
        err = capsys.readouterr().err
        assert "(a)/dup/+Page.tsx" in err
        assert "dup/+Page.tsx" in err

    def test_remove_drops_group(
        self, clashing: list[ResolvedPage], capsys: pytest.CaptureFixture[str],
    ) -> None:
        result = resolve_duplicates(clashing, "remove")
        assert [p.url_path for p in result.pages] == ["/", "/about"]
        assert len(result.conflicts) == 1
        assert "/dup" in capsys.readouterr().err

    def test_error_raises_with_all_sources(self, clashing: list[ResolvedPage]) -> None:
        with pytest.raises(RouteConflictError) as exc_info:
            resolve_duplicates(clashing, "error")
        message = str(exc_info.value)
        assert "(a)/dup/+Page.tsx" in message
        assert "dup/+Page.tsx" in message
        assert [g.url_path for g in exc_info.value.conflicts] == ["/dup"]

    def test_error_lists_every_group(self) -> None:
        pages = [
            _page("a/+Page.tsx", "/a"),
            _page("(x)/a/+Page.tsx", "/a"),
            _page("b/+Page.tsx", "/b"),
            _page("(x)/b/+Page.tsx", "/b"),
        ]
        with pytest.raises(RouteConflictError, match=r"\(2\)"):
            resolve_duplicates(pages, "error")

    def test_three_way_clash_ignore(self) -> None:
        pages = [
            _page("(a)/x/+Page.tsx", "/x"),
            _page("(b)/x/+Page.tsx", "/x"),
            _page("x/+Page.tsx", "/x"),
        ]
        result = resolve_duplicates(pages, "ignore")
        assert [p.candidate.short_path for p in result.pages] == ["(a)/x/+Page.tsx"]

    def test_clash_logged(self, clashing: list[ResolvedPage]) -> None:
        log = EventLog()
        resolve_duplicates(clashing, "remove", log=log)
        (event,) = log.query(event_type=RouteClash)
        assert event.url_path == "/dup"
        assert event.policy == "remove"
        assert len(event.sources) == 2

    def test_unknown_policy(self, clashing: list[ResolvedPage]) -> None:
        with pytest.raises(ConfigError):
            resolve_duplicates(clashing, "merge")  # type: ignore[arg-type]
