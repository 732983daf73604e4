"""Shared test fixtures for pawprint."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from pawprint.config import SitemapConfig

BASE_URL = "https://example.com"


def make_pages(pages_dir: Path, *files: str) -> Path:
    """Create page files (relative POSIX paths) under ``pages_dir``.

    Each file gets a tiny body so it has a real mtime.
    """
    for rel in files:
        path = pages_dir / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("export default function Page() {}\n")
    return pages_dir


def make_config(root: Path, **overrides: Any) -> SitemapConfig:
    """SitemapConfig rooted at ``root`` with the test base URL."""
    values: dict[str, Any] = {"base_url": BASE_URL}
    values.update(overrides)
    return SitemapConfig(root=root, **values)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A minimal project with a typical pages tree.

    Layout::

        pages/+Page.tsx
        pages/about/+Page.tsx
        pages/(marketing)/pricing/+Page.tsx
        pages/blog/+Page.tsx
        pages/blog/@slug/+Page.tsx
        pages/_drafts/secret/+Page.tsx
        pages/about/components/Header.tsx

    """
    make_pages(
        tmp_path / "pages",
        "+Page.tsx",
        "about/+Page.tsx",
        "(marketing)/pricing/+Page.tsx",
        "blog/+Page.tsx",
        "blog/@slug/+Page.tsx",
        "_drafts/secret/+Page.tsx",
        "about/components/Header.tsx",
    )
    return tmp_path


@pytest.fixture
def config(project: Path) -> SitemapConfig:
    """Config for the ``project`` fixture."""
    return make_config(project)
