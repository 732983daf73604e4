"""Duplicate resolver — handle page files that resolve to the same URL.

Grouping is a pure reduction over the scan result, so it can run (and be
tested) independently of the walk.  Policies::

    ignore  -> keep the first page in walk order, warn
    remove  -> publish none of the clashing pages, warn
    error   -> raise RouteConflictError, nothing is written
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pawprint._errors import ConfigError, RouteConflictError
from pawprint.observability.events import RouteClash, now_ns

if TYPE_CHECKING:
    from pawprint._types import ClashPolicy
    from pawprint.observability.log import EventLog
    from pawprint.routes.walker import ResolvedPage


@dataclass(frozen=True, slots=True)
class ConflictGroup:
    """Pages whose URL path collides.

    Attributes:
        url_path: The shared URL path.
        pages: Every clashing page, in walk order.

    """

    url_path: str
    pages: tuple[ResolvedPage, ...]

    @property
    def sources(self) -> tuple[str, ...]:
        """Short paths of the clashing page files."""
        return tuple(page.candidate.short_path for page in self.pages)

    def describe(self) -> str:
        return f"{self.url_path!r} <- {' == '.join(self.sources)}"


@dataclass(frozen=True, slots=True)
class ResolveResult:
    """Pages left after applying the clash policy, plus what clashed."""

    pages: tuple[ResolvedPage, ...]
    conflicts: tuple[ConflictGroup, ...]


def group_by_url(pages: Sequence[ResolvedPage]) -> dict[str, list[ResolvedPage]]:
    """Group pages by URL path, preserving first-occurrence order."""
    groups: dict[str, list[ResolvedPage]] = {}
    for page in pages:
        groups.setdefault(page.url_path, []).append(page)
    return groups


def find_conflicts(pages: Sequence[ResolvedPage]) -> tuple[ConflictGroup, ...]:
    """Return every group of two or more pages sharing a URL path."""
    return tuple(
        ConflictGroup(url_path=url_path, pages=tuple(members))
        for url_path, members in group_by_url(pages).items()
        if len(members) > 1
    )


def resolve_duplicates(
    pages: Sequence[ResolvedPage],
    policy: ClashPolicy,
    *,
    log: EventLog | None = None,
) -> ResolveResult:
    """Apply ``policy`` to every clashing group.

    Non-clashing pages keep their walk order.  Under ``ignore`` the kept
    page stays at the position of its first occurrence.

    Raises:
        RouteConflictError: Under the ``error`` policy, listing every clash.
        ConfigError: On an unknown policy.

    """
    if policy not in ("ignore", "remove", "error"):
        msg = f"Unknown clash policy {policy!r}"
        raise ConfigError(msg)

    conflicts = find_conflicts(pages)
    if not conflicts:
        return ResolveResult(pages=tuple(pages), conflicts=())

    if log is not None:
        ts = now_ns()
        log.append_many([
            RouteClash(url_path=g.url_path, sources=g.sources, policy=policy, timestamp_ns=ts)
            for g in conflicts
        ])

    if policy == "error":
        details = "\n".join(f"  {g.describe()}" for g in conflicts)
        msg = f"Clashing page routes ({len(conflicts)}):\n{details}"
        raise RouteConflictError(msg, conflicts)

    clashing = {g.url_path for g in conflicts}
    kept: list[ResolvedPage] = []
    seen: set[str] = set()
    for page in pages:
        if page.url_path not in clashing:
            kept.append(page)
            continue
        if policy == "ignore" and page.url_path not in seen:
            kept.append(page)
        seen.add(page.url_path)

    for group in conflicts:
        action = (
            f"keeping {group.sources[0]}" if policy == "ignore"
            else "removing all of them"
        )
        print(
            f"  Sitemap: duplicate URL {group.describe()}, {action}",
            file=sys.stderr,
        )

    return ResolveResult(pages=tuple(kept), conflicts=conflicts)
