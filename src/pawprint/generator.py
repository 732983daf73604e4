"""Generation pass — pages directory in, ordered sitemap entries out.

One pass runs, in order::

    walk -> classify -> resolve clashes -> enrich -> merge custom -> sort

A pass either completes or raises; it never hands back a partial result,
so callers can keep serving the previous pass on failure.
"""

from __future__ import annotations

import sys
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pawprint._errors import PawprintError
from pawprint.observability.events import GenerationCompleted, GenerationFailed, now_ns
from pawprint.routes.classifier import matcher_for
from pawprint.routes.resolver import resolve_duplicates
from pawprint.routes.sorter import sort_entries
from pawprint.routes.walker import scan_pages
from pawprint.sitemap.entries import enrich, merge_custom_entries

if TYPE_CHECKING:
    from pawprint.config import SitemapConfig
    from pawprint.observability.log import EventLog
    from pawprint.routes.resolver import ConflictGroup
    from pawprint.routes.walker import IgnoredPage
    from pawprint.sitemap.entries import SitemapEntry


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Outcome of one generation pass.

    Attributes:
        entries: Final sitemap entries, sorted.
        ignored: Page files excluded by ``_`` / ``@`` segments.
        conflicts: Clashing URL groups (already resolved per policy).
        dropped_custom: Custom entries rejected as duplicates.
        duration_ms: Wall-clock time of the pass.

    """

    entries: tuple[SitemapEntry, ...]
    ignored: tuple[IgnoredPage, ...]
    conflicts: tuple[ConflictGroup, ...]
    dropped_custom: tuple[SitemapEntry, ...]
    duration_ms: float

    @property
    def locs(self) -> list[str]:
        return [entry.loc for entry in self.entries]


def generate(config: SitemapConfig, *, log: EventLog | None = None) -> GenerationResult:
    """Run one full generation pass for ``config``.

    Raises:
        ScanError: If a pages directory cannot be read.
        RouteConflictError: On clashing routes under the ``error`` policy.

    """
    t0 = time.perf_counter()
    try:
        result = _generate(config, log, t0)
    except PawprintError as exc:
        if log is not None:
            log.append(GenerationFailed(
                error_type=type(exc).__name__, message=str(exc), timestamp_ns=now_ns(),
            ))
        raise

    if log is not None:
        log.append(GenerationCompleted(
            entries=len(result.entries),
            ignored=len(result.ignored),
            clashes=len(result.conflicts),
            duration_ms=result.duration_ms,
            timestamp_ns=now_ns(),
        ))
    return result


def _generate(config: SitemapConfig, log: EventLog | None, t0: float) -> GenerationResult:
    matcher = matcher_for(config.page_convention)

    scan = scan_pages(
        config.pages_path,
        matcher,
        base_url=config.effective_base_url,
        domain_driven=config.domain_driven,
        print_ignored=config.debug.print_ignored,
        log=log,
    )
    resolved = resolve_duplicates(scan.accepted, config.on_clash, log=log)

    discovered = enrich(
        resolved.pages,
        changefreq=config.default_changefreq,
        priority=config.default_priority,
        format_date=config.format_date,
        log=log,
    )
    merged = merge_custom_entries(discovered, config.custom_entries, log=log)
    entries = tuple(sort_entries(merged.entries))

    if config.debug.print_routes:
        for entry in entries:
            print(f"  Sitemap: route {entry.loc!r}", file=sys.stderr)

    return GenerationResult(
        entries=entries,
        ignored=scan.ignored,
        conflicts=resolved.conflicts,
        dropped_custom=merged.dropped,
        duration_ms=(time.perf_counter() - t0) * 1000,
    )
