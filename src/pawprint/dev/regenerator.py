"""Regenerator — one full pass per change notification, latest wins.

Flow::

    ChangeEvent -> trigger() -> cancel in-flight pass -> new pass in a worker thread
                -> completed and still the latest? -> SitemapCache.publish()

A pass that fails (unreadable directory, clash under the ``error``
policy, or an unexpected error such as a raising ``format_date``) is
reported and leaves the previously published snapshot in place.
"""

from __future__ import annotations

import asyncio
import sys
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

from pawprint._errors import ConfigError, ExportError, PawprintError
from pawprint.dev.cache import Snapshot, build_snapshot
from pawprint.export.writer import write_outputs

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from pawprint.config import SitemapConfig
    from pawprint.dev.cache import SitemapCache
    from pawprint.dev.watcher import ChangeEvent
    from pawprint.observability.log import EventLog


class Regenerator:
    """Runs generation passes for the dev server and publishes the results.

    Args:
        config: Configuration for each pass.
        cache: Where completed passes are published.
        log: Optional event log shared by every pass.
        reload_config: Called on config-file changes to produce a fresh
            configuration.  When None, config changes just trigger a pass.
        on_reload: Called with each successfully reloaded configuration
            (the dev server uses it to move the watcher to a new pages
            directory).

    """

    def __init__(
        self,
        config: SitemapConfig,
        cache: SitemapCache,
        *,
        log: EventLog | None = None,
        reload_config: Callable[[], SitemapConfig] | None = None,
        on_reload: Callable[[SitemapConfig], None] | None = None,
    ) -> None:
        self._config = config
        self._cache = cache
        self._log = log
        self._reload_config = reload_config
        self._on_reload = on_reload
        self._generation = 0
        self._task: asyncio.Task[Snapshot | None] | None = None
        self._write_lock = threading.Lock()

    @property
    def config(self) -> SitemapConfig:
        return self._config

    @property
    def generation(self) -> int:
        """Number of the most recently triggered pass."""
        return self._generation

    def trigger(self) -> asyncio.Task[Snapshot | None]:
        """Start a new pass, superseding any pass still in flight."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._generation += 1
        self._task = asyncio.create_task(
            self._run(self._generation),
            name=f"pawprint-pass-{self._generation}",
        )
        return self._task

    async def wait(self) -> Snapshot | None:
        """Wait for the latest triggered pass; None if it failed or was superseded."""
        while self._task is not None:
            task = self._task
            try:
                snapshot = await asyncio.shield(task)
            except asyncio.CancelledError:
                if task is self._task:
                    raise
                continue
            if task is self._task:
                return snapshot
        return None

    async def handle_change(self, event: ChangeEvent) -> asyncio.Task[Snapshot | None]:
        """React to one watcher event."""
        if event.category == "config" and self._reload_config is not None:
            try:
                self._config = self._reload_config()
            except ConfigError as exc:
                print(f"  Config error, keeping previous config: {exc}", file=sys.stderr)
            else:
                if self._on_reload is not None:
                    self._on_reload(self._config)
        return self.trigger()

    async def run(self, changes: AsyncIterator[ChangeEvent]) -> None:
        """Consume watcher events until the iterator ends."""
        async for event in changes:
            try:
                await self.handle_change(event)
            except Exception as exc:
                print(f"  Regeneration error: {exc}", file=sys.stderr)

    async def _run(self, generation: int) -> Snapshot | None:
        config = self._config
        try:
            snapshot = await asyncio.to_thread(build_snapshot, config, generation, self._log)
        except PawprintError as exc:
            print(
                f"  Sitemap regeneration failed, keeping previous output:\n{exc}",
                file=sys.stderr,
            )
            return None
        except Exception as exc:
            print(
                f"  Sitemap regeneration error ({type(exc).__name__}), "
                f"keeping previous output: {exc}",
                file=sys.stderr,
            )
            return None

        if generation != self._generation:
            return None
        if not self._cache.publish(snapshot):
            return None

        if config.dev_write:
            try:
                await asyncio.to_thread(self._write_snapshot, snapshot, config)
            except ExportError as exc:
                print(f"  Write error: {exc}", file=sys.stderr)
        return snapshot

    def _write_snapshot(self, snapshot: Snapshot, config: SitemapConfig) -> bool:
        """Write ``snapshot`` to disk unless a newer one has been published.

        Writes are serialized, and the check runs under the same lock, so a
        superseded pass whose thread outlived its task cannot put stale
        files back after a newer pass wrote.

        """
        with self._write_lock:
            current = self._cache.current
            if current is None or current.generation != snapshot.generation:
                return False
            write_outputs(snapshot.result, config)
            return True
