"""Path classifier — map a page file's location to a public URL path.

Routing convention for directory segments (and for the terminal name a
suffix-style page file contributes)::

    index, (group)     -> transparent, contributes nothing
    _private           -> rejected (special folder), subtree pruned by the walker
    @param             -> rejected (no static path generation for dynamic routes)
    anything else      -> appended verbatim

Examples::

    +Page.tsx                        -> /
    about/+Page.tsx                  -> /about
    (marketing)/pricing/+Page.tsx    -> /pricing
    blog/@slug/+Page.tsx             -> Rejected(SSG_UNHANDLED)
    _drafts/post/+Page.tsx           -> Rejected(SPECIAL_FOLDER)

Two page-file conventions are supported as pluggable matchers:
``DirectoryMarker`` (exactly ``+Page.<ext>`` per directory) and
``SuffixMarker`` (``<name>+Page.<ext>``, empty name = directory index).
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

from pawprint._errors import ConfigError

if TYPE_CHECKING:
    from pawprint._types import PageConvention, UrlPath

_GROUP_SEGMENT = re.compile(r"^\(.*\)$")
_SLASH_RUN = re.compile(r"/{2,}")

INDEX_SEGMENT = "index"
DOMAIN_PAGES_SEGMENT = "pages"


class RejectReason(StrEnum):
    """Why a page file is excluded from the sitemap."""

    SPECIAL_FOLDER = "specialFolder"
    SSG_UNHANDLED = "SSGUnhandled"


@dataclass(frozen=True, slots=True)
class Accepted:
    """The page is routable at ``url_path`` (always starts with ``/``)."""

    url_path: UrlPath


@dataclass(frozen=True, slots=True)
class Rejected:
    """The page is not published; ``segment`` is the offending path segment."""

    reason: RejectReason
    segment: str


type ClassificationResult = Accepted | Rejected


# ---------------------------------------------------------------------------
# Page matchers
# ---------------------------------------------------------------------------


class PageMatcher(Protocol):
    """Recognizes page source files by name.

    ``match`` returns None for files that are not pages, otherwise the
    terminal path segment the file contributes (``""`` for none).
    """

    def match(self, file_name: str) -> str | None: ...


class DirectoryMarker:
    """Exactly one ``+Page.<ext>`` file marks its directory as a page."""

    _pattern = re.compile(r"^\+Page\.[^.]+$")

    def match(self, file_name: str) -> str | None:
        return "" if self._pattern.match(file_name) else None

    def __repr__(self) -> str:
        return "DirectoryMarker()"


class SuffixMarker:
    """``<name>+Page.<ext>`` defines the page ``<name>`` inside its directory."""

    _pattern = re.compile(r"^(.*)\+Page\.[^.]+$")

    def match(self, file_name: str) -> str | None:
        m = self._pattern.match(file_name)
        return m.group(1) if m else None

    def __repr__(self) -> str:
        return "SuffixMarker()"


_MATCHERS: dict[str, type[DirectoryMarker] | type[SuffixMarker]] = {
    "directory": DirectoryMarker,
    "suffix": SuffixMarker,
}


def matcher_for(convention: PageConvention) -> PageMatcher:
    """Return the page matcher for a configured convention name."""
    try:
        return _MATCHERS[convention]()
    except KeyError:
        msg = f"Unknown page convention {convention!r}"
        raise ConfigError(msg) from None


# ---------------------------------------------------------------------------
# Segment rules
# ---------------------------------------------------------------------------


def is_private_segment(name: str) -> bool:
    """``_``-prefixed directories are excluded from routing entirely."""
    return name.startswith("_")


def is_dynamic_segment(name: str) -> bool:
    """``@``-prefixed directories denote parameterized routes."""
    return name.startswith("@")


def is_transparent_segment(name: str, *, domain_driven: bool = False) -> bool:
    """Segments that organize source layout without reaching the URL."""
    if name == INDEX_SEGMENT or _GROUP_SEGMENT.match(name):
        return True
    return domain_driven and name == DOMAIN_PAGES_SEGMENT


def classify_segments(
    segments: Sequence[str],
    *,
    domain_driven: bool = False,
) -> ClassificationResult:
    """Apply the segment rules in order and produce a verdict.

    The first ``_`` or ``@`` segment decides the rejection reason.

    """
    kept: list[str] = []
    for segment in segments:
        if not segment:
            continue
        if is_private_segment(segment):
            return Rejected(RejectReason.SPECIAL_FOLDER, segment)
        if is_dynamic_segment(segment):
            return Rejected(RejectReason.SSG_UNHANDLED, segment)
        if is_transparent_segment(segment, domain_driven=domain_driven):
            continue
        kept.append(segment)
    return Accepted(normalize_path("/".join(kept)))


def classify(
    segments: Sequence[str],
    file_name: str,
    matcher: PageMatcher,
    *,
    domain_driven: bool = False,
) -> ClassificationResult | None:
    """Classify one file found under ``segments``.

    Returns None when ``file_name`` is not a page source for ``matcher``.

    """
    terminal = matcher.match(file_name)
    if terminal is None:
        return None
    return classify_segments([*segments, terminal], domain_driven=domain_driven)


def normalize_path(joined: str) -> UrlPath:
    """Turn a ``/``-joined segment string into a canonical URL path.

    Empty and ``index`` map to ``/``; runs of slashes collapse to one; no
    trailing slash except for the root.

    """
    path = _SLASH_RUN.sub("/", "/" + joined.strip("/"))
    if path in ("/", "/" + INDEX_SEGMENT):
        return "/"
    return path.rstrip("/") or "/"


def build_loc(base_url: str, url_path: UrlPath) -> str:
    """Join a base URL and a URL path without a doubled slash.

    Only the path part is collapsed, so ``https://`` survives intact.

    """
    return base_url.rstrip("/") + normalize_path(url_path)
