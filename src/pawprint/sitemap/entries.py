"""Sitemap entries — metadata enrichment and custom entry merging.

Discovered pages become ``SitemapEntry`` records here: the source file's
mtime is formatted into ``lastmod`` and the configured default
``changefreq`` / ``priority`` are attached.  Caller-supplied entries are then
merged after the discovered ones without ever replacing them.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from pawprint._types import CHANGE_FREQUENCIES, ChangeFreq, DateFormatter
from pawprint.observability.events import CustomEntryDropped, StatFailed, now_ns

if TYPE_CHECKING:
    from pawprint.observability.log import EventLog
    from pawprint.routes.walker import ResolvedPage


@dataclass(frozen=True, slots=True)
class SitemapEntry:
    """One ``<url>`` element of the sitemap.

    Attributes:
        loc: Absolute URL of the page.
        lastmod: Formatted modification time, or None to omit ``<lastmod>``.
        changefreq: Expected change frequency, or None to omit ``<changefreq>``.
        priority: Relative priority (conventionally 0.0-1.0), or None to omit.

    """

    loc: str
    lastmod: str | None = None
    changefreq: ChangeFreq | None = None
    priority: float | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> SitemapEntry:
        """Build an entry from a plain mapping (config files, JSON).

        Raises:
            KeyError: If ``loc`` is missing.
            ValueError: On an unknown ``changefreq`` or non-numeric ``priority``.

        """
        loc = str(data["loc"])
        changefreq = data.get("changefreq")
        if changefreq is not None and changefreq not in CHANGE_FREQUENCIES:
            msg = f"unknown changefreq {changefreq!r}"
            raise ValueError(msg)
        priority = data.get("priority")
        lastmod = data.get("lastmod")
        return cls(
            loc=loc,
            lastmod=str(lastmod) if lastmod is not None else None,
            changefreq=changefreq,
            priority=float(priority) if priority is not None else None,
        )


@dataclass(frozen=True, slots=True)
class MergeResult:
    """Outcome of merging custom entries into the discovered set.

    Attributes:
        entries: Discovered entries followed by the accepted custom entries.
        dropped: Custom entries rejected because their ``loc`` already existed.

    """

    entries: tuple[SitemapEntry, ...]
    dropped: tuple[SitemapEntry, ...]


def iso_timestamp(moment: datetime) -> str:
    """Format a timestamp as UTC ISO 8601 with milliseconds (``2025-04-11T12:00:00.000Z``)."""
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def enrich(
    pages: Iterable[ResolvedPage],
    *,
    changefreq: ChangeFreq | None,
    priority: float | None,
    format_date: DateFormatter = iso_timestamp,
    log: EventLog | None = None,
) -> list[SitemapEntry]:
    """Turn resolved pages into sitemap entries with metadata attached.

    A page whose source file cannot be stat'ed still produces an entry,
    without ``lastmod``.

    """
    entries: list[SitemapEntry] = []
    for page in pages:
        entries.append(SitemapEntry(
            loc=page.loc,
            lastmod=_last_modified(page, format_date, log),
            changefreq=changefreq or None,
            priority=priority,
        ))
    return entries


def _last_modified(
    page: ResolvedPage,
    format_date: DateFormatter,
    log: EventLog | None,
) -> str | None:
    path = page.candidate.absolute_path
    try:
        mtime = path.stat().st_mtime
    except OSError as exc:
        print(
            f"  Sitemap: could not read last modified date for {page.candidate.short_path}: {exc}",
            file=sys.stderr,
        )
        if log is not None:
            log.append(StatFailed(path=str(path), error=str(exc), timestamp_ns=now_ns()))
        return None
    return format_date(datetime.fromtimestamp(mtime, tz=UTC))


def merge_custom_entries(
    entries: Iterable[SitemapEntry],
    custom: Iterable[SitemapEntry],
    *,
    log: EventLog | None = None,
) -> MergeResult:
    """Append custom entries after discovered ones, never overwriting.

    A custom entry whose ``loc`` matches a discovered entry or an earlier
    custom entry is dropped with a warning.  The clash policy does not apply
    here.

    """
    merged = list(entries)
    origins: dict[str, str] = {entry.loc: "discovered page" for entry in merged}
    dropped: list[SitemapEntry] = []

    for entry in custom:
        existing = origins.get(entry.loc)
        if existing is not None:
            print(
                f"  Sitemap: duplicate custom URL {entry.loc!r} "
                f"(already defined by {existing}), custom entry dropped",
                file=sys.stderr,
            )
            if log is not None:
                log.append(CustomEntryDropped(
                    loc=entry.loc, existing=existing, timestamp_ns=now_ns(),
                ))
            dropped.append(entry)
            continue
        origins[entry.loc] = "custom entry"
        merged.append(entry)

    return MergeResult(entries=tuple(merged), dropped=tuple(dropped))
