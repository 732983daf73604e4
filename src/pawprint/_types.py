"""Shared type definitions for pawprint."""

from collections.abc import Callable
from datetime import datetime
from typing import Literal

# Sitemap protocol change frequencies
type ChangeFreq = Literal["always", "hourly", "daily", "weekly", "monthly", "yearly", "never"]

# How clashing page routes are handled
type ClashPolicy = Literal["ignore", "remove", "error"]

# Which page-file naming scheme is authoritative
type PageConvention = Literal["directory", "suffix"]

# Formats a file's modification time for <lastmod>
type DateFormatter = Callable[[datetime], str]

# Route URL path (e.g., "/", "/blog/first-post")
type UrlPath = str

CHANGE_FREQUENCIES: frozenset[str] = frozenset({
    "always",
    "hourly",
    "daily",
    "weekly",
    "monthly",
    "yearly",
    "never",
})

CLASH_POLICIES: frozenset[str] = frozenset({"ignore", "remove", "error"})

PAGE_CONVENTIONS: frozenset[str] = frozenset({"directory", "suffix"})
