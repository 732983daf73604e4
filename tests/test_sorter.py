"""Tests for pawprint.routes.sorter — sitemap ordering."""

from __future__ import annotations

import random

from pawprint.routes.sorter import (
    is_parameter_segment,
    path_segments,
    route_sort_key,
    sort_entries,
    sort_paths,
)
from pawprint.sitemap.entries import SitemapEntry


class TestPathSegments:
    def test_root(self) -> None:
        assert path_segments("/") == []
        assert path_segments("https://example.com/") == []
        assert path_segments("https://example.com") == []

    def test_nested(self) -> None:
        assert path_segments("https://example.com/a/b") == ["a", "b"]

    def test_trailing_slash_is_index_segment(self) -> None:
        assert path_segments("/docs/") == ["docs", ""]


class TestParameterSegments:
    def test_markers(self) -> None:
        assert is_parameter_segment("@id")
        assert is_parameter_segment("[id]")
        assert is_parameter_segment("{id}")
        assert not is_parameter_segment("id")
        assert not is_parameter_segment("[id")


class TestSortPaths:
    """sort_paths — index first, parameters next, names alphabetically."""

    def test_fixture_order(self) -> None:
        assert sort_paths(["/zebra", "/", "/@id", "/alpha"]) == ["/", "/@id", "/alpha", "/zebra"]

    def test_shorter_prefix_first(self) -> None:
        assert sort_paths(["/blog/post", "/blog"]) == ["/blog", "/blog/post"]

    def test_index_segment_first(self) -> None:
        assert sort_paths(["/docs/api", "/docs/"]) == ["/docs/", "/docs/api"]

    def test_parameters_before_names_at_depth(self) -> None:
        assert sort_paths(["/blog/zz", "/blog/[slug]", "/blog/aa"]) == [
            "/blog/[slug]",
            "/blog/aa",
            "/blog/zz",
        ]

    def test_case_insensitive(self) -> None:
        assert sort_paths(["/beta", "/Alpha", "/alpha"]) == ["/Alpha", "/alpha", "/beta"]

    def test_segment_wise_not_string_wise(self) -> None:
        # String comparison would put "/a-b" before "/a/b" ("-" < "/")
        assert sort_paths(["/a-b", "/a/b", "/a"]) == ["/a", "/a/b", "/a-b"]

    def test_input_order_irrelevant(self) -> None:
        paths = ["/", "/about", "/blog", "/blog/@id", "/blog/first", "/contact"]
        shuffled = paths[:]
        random.Random(7).shuffle(shuffled)
        assert sort_paths(shuffled) == paths

    def test_identical_keys_only_for_identical_paths(self) -> None:
        assert route_sort_key("/Alpha") != route_sort_key("/alpha")


class TestSortEntries:
    def test_sorts_by_loc_path(self) -> None:
        entries = [
            SitemapEntry(loc="https://example.com/zebra"),
            SitemapEntry(loc="https://example.com/"),
            SitemapEntry(loc="https://example.com/alpha"),
        ]
        assert [e.loc for e in sort_entries(entries)] == [
            "https://example.com/",
            "https://example.com/alpha",
            "https://example.com/zebra",
        ]
