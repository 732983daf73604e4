"""Structured diagnostics for generation passes.

Every notable thing a pass does (a page ignored, a route clash, a custom
entry dropped, a failed stat, the pass itself completing or failing) is
recorded as a frozen dataclass with a monotonic nanosecond timestamp.

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Discovery events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RouteIgnored:
    """A page file was excluded by an ``_`` or ``@`` segment.

    Attributes:
        path: Page file path relative to the pages root.
        reason: ``specialFolder`` or ``SSGUnhandled``.
        segment: The segment that caused the rejection.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    reason: str
    segment: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class RouteClash:
    """Two or more page files resolved to the same URL path."""

    url_path: str
    sources: tuple[str, ...]
    policy: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class CustomEntryDropped:
    """A custom entry duplicated an existing ``loc`` and was dropped."""

    loc: str
    existing: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class StatFailed:
    """A page file's modification time could not be read."""

    path: str
    error: str
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Pass events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class GenerationCompleted:
    """A generation pass finished.

    Attributes:
        entries: Number of entries in the final sitemap.
        ignored: Number of page files excluded by segment rules.
        clashes: Number of clashing URL groups.
        duration_ms: Wall-clock time of the pass.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    entries: int
    ignored: int
    clashes: int
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class GenerationFailed:
    """A generation pass aborted; previously published output is untouched."""

    error_type: str
    message: str
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

type SitemapEvent = (
    RouteIgnored
    | RouteClash
    | CustomEntryDropped
    | StatFailed
    | GenerationCompleted
    | GenerationFailed
)


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
