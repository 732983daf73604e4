"""Tests for pawprint.dev.watcher — file change detection and categorization."""

from __future__ import annotations

from pathlib import Path

import pytest

from pawprint.config import SitemapConfig
from pawprint.dev.watcher import ChangeEvent, PagesWatcher, categorize_change


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def config(tmp_path: Path) -> SitemapConfig:
    """A SitemapConfig rooted at a temp directory."""
    return SitemapConfig(root=tmp_path)


# ---------------------------------------------------------------------------
# ChangeEvent dataclass tests
# ---------------------------------------------------------------------------


class TestChangeEvent:
    """Verify ChangeEvent is frozen and well-behaved."""

    def test_frozen(self) -> None:
        event = ChangeEvent(path=Path("/tmp/+Page.tsx"), kind="modified", category="page")
        with pytest.raises(AttributeError):
            event.kind = "created"  # type: ignore[misc]

    def test_equality(self) -> None:
        a = ChangeEvent(path=Path("/a/+Page.tsx"), kind="deleted", category="page")
        b = ChangeEvent(path=Path("/a/+Page.tsx"), kind="deleted", category="page")
        assert a == b

    def test_hashable(self) -> None:
        event = ChangeEvent(path=Path("/pawprint.yaml"), kind="created", category="config")
        assert isinstance(hash(event), int)


# ---------------------------------------------------------------------------
# categorize_change tests
# ---------------------------------------------------------------------------


class TestCategorizeChange:
    """Unit tests for categorize_change()."""

    def test_page_file(self, config: SitemapConfig) -> None:
        path = config.root / "pages" / "about" / "+Page.tsx"
        assert categorize_change(path, config) == "page"

    def test_any_file_under_pages(self, config: SitemapConfig) -> None:
        """Directory renames and non-page files can still change the route set."""
        path = config.root / "pages" / "(marketing)"
        assert categorize_change(path, config) == "page"

    def test_config_yaml(self, config: SitemapConfig) -> None:
        assert categorize_change(config.root / "pawprint.yaml", config) == "config"

    def test_config_toml(self, config: SitemapConfig) -> None:
        assert categorize_change(config.root / "pawprint.toml", config) == "config"

    def test_unknown_file_returns_none(self, config: SitemapConfig) -> None:
        assert categorize_change(config.root / "src" / "main.ts", config) is None

    def test_file_outside_root_returns_none(self, config: SitemapConfig) -> None:
        assert categorize_change(Path("/completely/elsewhere/+Page.tsx"), config) is None

    def test_nested_config_name_is_not_config(self, config: SitemapConfig) -> None:
        assert categorize_change(config.root / "sub" / "pawprint.yaml", config) is None

    def test_custom_pages_dir(self, tmp_path: Path) -> None:
        """Respects SitemapConfig.pages_dir override."""
        config = SitemapConfig(root=tmp_path, pages_dir="src/routes")
        path = tmp_path / "src" / "routes" / "+Page.tsx"
        assert categorize_change(path, config) == "page"
        assert categorize_change(tmp_path / "pages" / "+Page.tsx", config) is None


# ---------------------------------------------------------------------------
# PagesWatcher
# ---------------------------------------------------------------------------


class TestPagesWatcher:
    def test_watch_paths_existing_only(self, tmp_path: Path) -> None:
        (tmp_path / "pages").mkdir()
        (tmp_path / "pawprint.yaml").write_text("")
        watcher = PagesWatcher(SitemapConfig(root=tmp_path))
        assert watcher.watch_paths() == [tmp_path / "pages", tmp_path / "pawprint.yaml"]

    def test_watch_paths_missing_pages(self, tmp_path: Path) -> None:
        assert PagesWatcher(SitemapConfig(root=tmp_path)).watch_paths() == []

    def test_not_running_before_start(self, tmp_path: Path) -> None:
        assert PagesWatcher(SitemapConfig(root=tmp_path)).is_running is False


class TestReconfigure:
    """PagesWatcher.reconfigure — follow a reloaded pages_dir."""

    def test_idle_watcher_adopts_config(self, tmp_path: Path) -> None:
        (tmp_path / "src" / "pages").mkdir(parents=True)
        watcher = PagesWatcher(SitemapConfig(root=tmp_path))
        watcher.reconfigure(SitemapConfig(root=tmp_path, pages_dir="src/pages"))
        assert watcher.watch_paths() == [tmp_path / "src" / "pages"]
        assert watcher.is_running is False

    def test_running_watcher_restarts_on_new_paths(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        (tmp_path / "pages").mkdir()
        (tmp_path / "src" / "pages").mkdir(parents=True)
        calls: list[str] = []
        monkeypatch.setattr(PagesWatcher, "is_running", property(lambda self: True))
        monkeypatch.setattr(PagesWatcher, "stop", lambda self: calls.append("stop"))
        monkeypatch.setattr(PagesWatcher, "start", lambda self: calls.append("start"))

        watcher = PagesWatcher(SitemapConfig(root=tmp_path))
        watcher.reconfigure(SitemapConfig(root=tmp_path, pages_dir="src/pages"))

        assert calls == ["stop", "start"]

    def test_running_watcher_kept_when_paths_unchanged(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        (tmp_path / "pages").mkdir()
        calls: list[str] = []
        monkeypatch.setattr(PagesWatcher, "is_running", property(lambda self: True))
        monkeypatch.setattr(PagesWatcher, "stop", lambda self: calls.append("stop"))

        watcher = PagesWatcher(SitemapConfig(root=tmp_path))
        watcher.reconfigure(SitemapConfig(root=tmp_path, on_clash="remove"))

        assert calls == []
