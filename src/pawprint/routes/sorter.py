"""Entry sorter — deterministic sitemap ordering.

Entries are ordered by their URL path, segment by segment:

1. an index segment (the empty segment after a trailing slash) first,
2. then parameter segments (``@id``, ``[id]``, ``{id}``),
3. then everything else, case-insensitively, with the raw text as tie-break.

A path that is a prefix of another sorts first, so ``/`` leads and
``/blog`` precedes ``/blog/first-post``::

    ["/zebra", "/", "/@id", "/alpha"] -> ["/", "/@id", "/alpha", "/zebra"]
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

if TYPE_CHECKING:
    from pawprint.sitemap.entries import SitemapEntry

type SegmentKey = tuple[int, str, str]

_INDEX_RANK = 0
_PARAM_RANK = 1
_NAMED_RANK = 2


def is_parameter_segment(segment: str) -> bool:
    """Segments that stand for a route parameter rather than a fixed name."""
    return (
        segment.startswith("@")
        or (segment.startswith("[") and segment.endswith("]"))
        or (segment.startswith("{") and segment.endswith("}"))
    )


def path_segments(url_or_path: str) -> list[str]:
    """Split the path part of a URL into segments (``/`` -> ``[]``)."""
    path = urlsplit(url_or_path).path if "://" in url_or_path else url_or_path
    rest = path[1:] if path.startswith("/") else path
    return rest.split("/") if rest else []


def _segment_key(segment: str) -> SegmentKey:
    if segment == "":
        return (_INDEX_RANK, "", "")
    rank = _PARAM_RANK if is_parameter_segment(segment) else _NAMED_RANK
    return (rank, segment.casefold(), segment)


def route_sort_key(url_or_path: str) -> tuple[tuple[SegmentKey, ...], str]:
    """Sort key for a URL or URL path.

    The full string is the final tie-break, so only identical inputs
    compare equal.

    """
    return tuple(_segment_key(s) for s in path_segments(url_or_path)), url_or_path


def sort_entries(entries: Iterable[SitemapEntry]) -> list[SitemapEntry]:
    """Return entries ordered by :func:`route_sort_key` of their ``loc``."""
    return sorted(entries, key=lambda entry: route_sort_key(entry.loc))


def sort_paths(paths: Iterable[str]) -> list[str]:
    """Order plain URL paths with the same rules as :func:`sort_entries`."""
    return sorted(paths, key=route_sort_key)
