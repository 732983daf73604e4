"""Sitemap entries — metadata enrichment and custom entry merging."""

from pawprint.sitemap.entries import MergeResult, SitemapEntry, enrich, iso_timestamp, merge_custom_entries

__all__ = ["MergeResult", "SitemapEntry", "enrich", "iso_timestamp", "merge_custom_entries"]
