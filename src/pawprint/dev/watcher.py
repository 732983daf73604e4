"""File watcher — triggers sitemap regeneration on page changes.

Monitors the pages directory and the pawprint config file.  Any add,
modify or delete under the pages directory means the route set may have
changed; a config change means the generation options may have.
"""

from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from watchfiles import Change

from pawprint.config_loader import CONFIG_FILENAMES

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from pawprint.config import SitemapConfig


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """A file change detected by the watcher.

    Attributes:
        path: Absolute path to the changed file.
        kind: Type of filesystem change.
        category: ``page`` for anything under the pages directory,
            ``config`` for the pawprint config file.

    """

    path: Path
    kind: Literal["created", "modified", "deleted"]
    category: Literal["page", "config"]


# Mapping from watchfiles Change enum to our kind literals.
_CHANGE_KIND_MAP: dict[Change, Literal["created", "modified", "deleted"]] = {
    Change.added: "created",
    Change.modified: "modified",
    Change.deleted: "deleted",
}


def categorize_change(path: Path, config: SitemapConfig) -> Literal["page", "config"] | None:
    """Determine the category of a changed file based on its location.

    Returns None if the file doesn't affect generation.

    """
    try:
        rel = path.relative_to(config.root)
    except ValueError:
        return None

    parts = rel.parts
    if not parts:
        return None

    if len(parts) == 1 and parts[0] in CONFIG_FILENAMES:
        return "config"

    try:
        path.relative_to(config.pages_path)
    except ValueError:
        return None
    return "page"


class PagesWatcher:
    """Watches the pages directory and config file for changes.

    Runs watchfiles in a background thread and bridges events to an
    asyncio queue on the loop that called :meth:`start`.

    """

    def __init__(self, config: SitemapConfig) -> None:
        self._config = config
        self._queue: asyncio.Queue[ChangeEvent] = asyncio.Queue()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        """Whether the watcher background thread is active."""
        return self._thread is not None and self._thread.is_alive()

    def watch_paths(self) -> list[Path]:
        """Existing paths handed to watchfiles."""
        paths = [self._config.pages_path]
        paths.extend(
            self._config.root / name
            for name in CONFIG_FILENAMES
            if (self._config.root / name).is_file()
        )
        return [p for p in paths if p.exists()]

    def reconfigure(self, config: SitemapConfig) -> None:
        """Adopt a reloaded configuration.

        A running watcher is restarted when the watched paths change, e.g.
        after ``pages_dir`` was edited in the config file.

        """
        previous = self.watch_paths()
        self._config = config
        if self.is_running and self.watch_paths() != previous:
            self.stop()
            self.start()

    def start(self) -> None:
        """Start watching in a background thread.  Must be called from a running loop."""
        if self.is_running:
            return

        self._loop = asyncio.get_running_loop()
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._watch_loop,
            name="pawprint-watcher",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        """Signal the watcher to stop and wait for the thread to finish."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=5.0)
            self._thread = None

    async def changes(self) -> AsyncIterator[ChangeEvent]:
        """Async iterator that yields ChangeEvent objects as they occur."""
        while self.is_running or not self._queue.empty():
            try:
                event = await asyncio.wait_for(self._queue.get(), timeout=0.5)
                yield event
            except TimeoutError:
                if not self.is_running:
                    break

    def _watch_loop(self) -> None:
        """Background thread: run watchfiles and push events to the queue."""
        from watchfiles import watch

        paths = self.watch_paths()
        if not paths:
            return

        for raw_changes in watch(
            *paths,
            stop_event=self._stop_event,
            debounce=300,
            step=100,
        ):
            for change_type, path_str in raw_changes:
                path = Path(path_str)
                category = categorize_change(path, self._config)
                if category is None:
                    continue

                kind = _CHANGE_KIND_MAP.get(change_type, "modified")
                event = ChangeEvent(path=path, kind=kind, category=category)
                if self._loop is not None:
                    self._loop.call_soon_threadsafe(self._queue.put_nowait, event)
