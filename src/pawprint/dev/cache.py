"""In-memory sitemap cache for the development server.

A ``Snapshot`` is one fully completed pass with its rendered documents.
The cache only ever swaps whole snapshots, so a request sees either the
previous pass or the new one, never a mix.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pawprint.export.robots import ROBOTS_FILENAME
from pawprint.export.writer import render_documents
from pawprint.generator import generate

if TYPE_CHECKING:
    from pawprint.config import SitemapConfig
    from pawprint.generator import GenerationResult
    from pawprint.observability.log import EventLog


@dataclass(frozen=True, slots=True)
class Snapshot:
    """A completed generation pass, rendered.

    Attributes:
        generation: Monotonic pass number assigned by the regenerator.
        result: The generation result the documents were rendered from.
        sitemap_xml: Rendered sitemap document.
        robots_txt: Rendered robots.txt, or None when disabled.

    """

    generation: int
    result: GenerationResult
    sitemap_xml: str
    robots_txt: str | None


def build_snapshot(
    config: SitemapConfig,
    generation: int,
    log: EventLog | None = None,
) -> Snapshot:
    """Run a full pass and render its documents.  Blocking; run off-loop."""
    result = generate(config, log=log)
    documents = render_documents(result, config)
    return Snapshot(
        generation=generation,
        result=result,
        sitemap_xml=documents[config.filename],
        robots_txt=documents.get(ROBOTS_FILENAME),
    )


class SitemapCache:
    """Holds the currently published snapshot.

    ``publish`` refuses snapshots older than the current one, so a slow
    stale pass finishing late cannot replace a newer result.

    """

    __slots__ = ("_current", "_lock")

    def __init__(self) -> None:
        self._current: Snapshot | None = None
        self._lock = threading.Lock()

    @property
    def current(self) -> Snapshot | None:
        """The latest published snapshot, or None before the first pass."""
        return self._current

    def publish(self, snapshot: Snapshot) -> bool:
        """Swap in ``snapshot``.  Returns False if it is older than the current one."""
        with self._lock:
            if self._current is not None and snapshot.generation < self._current.generation:
                return False
            self._current = snapshot
            return True
