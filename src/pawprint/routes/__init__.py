"""Route discovery — page files to public URL paths.

Walks a pages directory, classifies each page file under the routing
convention, resolves clashing routes, and orders the result.

Public API::

    from pawprint.routes import DirectoryMarker, scan_pages, resolve_duplicates

    scan = scan_pages(Path("pages"), DirectoryMarker(), base_url="https://example.com")
    resolved = resolve_duplicates(scan.accepted, "ignore")
"""

from pawprint.routes.classifier import (
    Accepted,
    DirectoryMarker,
    PageMatcher,
    Rejected,
    RejectReason,
    SuffixMarker,
    build_loc,
    classify,
    matcher_for,
)
from pawprint.routes.resolver import ConflictGroup, ResolveResult, find_conflicts, resolve_duplicates
from pawprint.routes.sorter import route_sort_key, sort_entries, sort_paths
from pawprint.routes.walker import (
    IgnoredPage,
    PageCandidate,
    ResolvedPage,
    ScanResult,
    scan_pages,
    walk_pages,
)

__all__ = [
    "Accepted",
    "ConflictGroup",
    "DirectoryMarker",
    "IgnoredPage",
    "PageCandidate",
    "PageMatcher",
    "RejectReason",
    "Rejected",
    "ResolveResult",
    "ResolvedPage",
    "ScanResult",
    "SuffixMarker",
    "build_loc",
    "classify",
    "find_conflicts",
    "matcher_for",
    "resolve_duplicates",
    "route_sort_key",
    "scan_pages",
    "sort_entries",
    "sort_paths",
    "walk_pages",
]
