"""Tree walker — enumerate page files under the pages root.

Walks the pages directory depth-first, visiting directory entries in name
order so the walk order (and therefore "first-encountered" when routes
clash) is identical on every platform::

    pages/
      +Page.tsx                  -> /
      (marketing)/about/+Page.tsx -> /about
      blog/@slug/+Page.tsx       -> ignored (SSGUnhandled)
      _drafts/...                -> never listed

``_``-prefixed directories are pruned before they are read.  Each branch
returns its own list; the parent concatenates.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from pawprint._errors import ScanError
from pawprint.observability.events import RouteIgnored, now_ns
from pawprint.routes.classifier import (
    Accepted,
    RejectReason,
    build_loc,
    classify,
    is_private_segment,
)

if TYPE_CHECKING:
    from pawprint.observability.log import EventLog
    from pawprint.routes.classifier import PageMatcher


@dataclass(frozen=True, slots=True)
class PageCandidate:
    """A page source file found by the walker.

    Attributes:
        short_path: POSIX path relative to the scanned root
            (e.g. ``blog/(posts)/+Page.tsx``).
        segments: Directory names from the root down to the file.
        file_name: The page file's own name.
        absolute_path: Filesystem path, used for stat lookups.

    """

    short_path: str
    segments: tuple[str, ...]
    file_name: str
    absolute_path: Path


@dataclass(frozen=True, slots=True)
class ResolvedPage:
    """A candidate accepted by the classifier.

    Attributes:
        candidate: The source page file.
        url_path: Canonical URL path (``/``, ``/about``).
        loc: Absolute URL (``base_url + url_path``).

    """

    candidate: PageCandidate
    url_path: str
    loc: str


@dataclass(frozen=True, slots=True)
class IgnoredPage:
    """A candidate the classifier rejected."""

    candidate: PageCandidate
    reason: RejectReason
    segment: str


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Accepted and ignored pages, in walk order."""

    accepted: tuple[ResolvedPage, ...]
    ignored: tuple[IgnoredPage, ...]


def _list_dir(path: Path) -> list[os.DirEntry[str]]:
    """Read one directory, sorted by entry name.

    Raises:
        ScanError: If the directory cannot be read.

    """
    try:
        with os.scandir(path) as it:
            return sorted(it, key=lambda e: e.name)
    except OSError as exc:
        msg = f"Cannot read pages directory {path}: {exc}"
        raise ScanError(msg) from exc


def _check_name(directory: Path, name: str) -> None:
    """Reject entry names that are not valid UTF-8.

    Such names come back from the OS surrogate-escaped and cannot be
    written into a sitemap URL.

    Raises:
        ScanError: If ``name`` cannot be encoded as UTF-8.

    """
    try:
        name.encode("utf-8")
    except UnicodeEncodeError as exc:
        msg = f"Page path {directory / name!r} is not valid UTF-8: {exc.reason}"
        raise ScanError(msg) from exc


def walk_pages(
    root: Path,
    matcher: PageMatcher,
    segments: tuple[str, ...] = (),
) -> Iterator[PageCandidate]:
    """Yield every page file under ``root`` in deterministic walk order.

    Directories starting with ``_`` are never read.  ``@`` and
    parenthesized directories are descended; their pages are classified
    later.

    Raises:
        ScanError: If any non-pruned directory cannot be read (including
            a missing ``root``).

    """
    directory = root.joinpath(*segments)
    for entry in _list_dir(directory):
        if entry.is_dir():
            if is_private_segment(entry.name):
                continue
            _check_name(directory, entry.name)
            yield from walk_pages(root, matcher, (*segments, entry.name))
        elif entry.is_file() and matcher.match(entry.name) is not None:
            _check_name(directory, entry.name)
            yield PageCandidate(
                short_path="/".join((*segments, entry.name)),
                segments=segments,
                file_name=entry.name,
                absolute_path=directory / entry.name,
            )


def scan_pages(
    root: Path,
    matcher: PageMatcher,
    *,
    base_url: str,
    domain_driven: bool = False,
    print_ignored: bool = False,
    log: EventLog | None = None,
) -> ScanResult:
    """Walk ``root`` and classify every page file found.

    Ignored pages are recorded in ``log`` and, with ``print_ignored``,
    reported on stderr.

    """
    accepted: list[ResolvedPage] = []
    ignored: list[IgnoredPage] = []

    for candidate in walk_pages(root, matcher):
        verdict = classify(
            candidate.segments, candidate.file_name, matcher,
            domain_driven=domain_driven,
        )
        if verdict is None:
            continue
        if isinstance(verdict, Accepted):
            accepted.append(ResolvedPage(
                candidate=candidate,
                url_path=verdict.url_path,
                loc=build_loc(base_url, verdict.url_path),
            ))
            continue

        ignored.append(IgnoredPage(candidate, verdict.reason, verdict.segment))
        if print_ignored:
            print(
                f"  Sitemap: ignored {candidate.short_path} "
                f"({verdict.reason}: segment {verdict.segment!r})",
                file=sys.stderr,
            )
        if log is not None:
            log.append(RouteIgnored(
                path=candidate.short_path,
                reason=str(verdict.reason),
                segment=verdict.segment,
                timestamp_ns=now_ns(),
            ))

    return ScanResult(accepted=tuple(accepted), ignored=tuple(ignored))
