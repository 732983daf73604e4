"""Pawprint entry points — build, dev and routes.

``build`` writes sitemap.xml and robots.txt once; ``dev`` serves them from
memory and regenerates on every change under the pages directory;
``routes`` prints the resolved route table.
"""

from __future__ import annotations

import sys
import time
from pathlib import Path
from typing import TYPE_CHECKING

from pawprint.config_loader import load_config
from pawprint.export.writer import write_outputs
from pawprint.generator import generate

if TYPE_CHECKING:
    from chirp import App

    from pawprint.config import SitemapConfig
    from pawprint.dev.cache import SitemapCache
    from pawprint.dev.regenerator import Regenerator
    from pawprint.dev.watcher import PagesWatcher
    from pawprint.export.writer import ExportResult
    from pawprint.generator import GenerationResult
    from pawprint.observability.log import EventLog

ROUTES_ENDPOINT = "/__pawprint/routes"


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def build(root: str | Path = ".", **kwargs: object) -> ExportResult:
    """Generate and write sitemap.xml (and robots.txt) for a project.

    Args:
        root: Path to the project root directory.
        **kwargs: Override SitemapConfig fields.

    Raises:
        ConfigError: If ``base_url`` is missing or the config is invalid.
        ScanError: If the pages directory cannot be read.
        RouteConflictError: On clashing routes under the ``error`` policy.
        ExportError: If the output cannot be written.

    """
    config = load_config(Path(root), **kwargs)
    config.require_base_url()

    result = generate(config)
    export = write_outputs(result, config)
    _print_build_summary(result, export)
    return export


def routes(root: str | Path = ".", **kwargs: object) -> GenerationResult:
    """Resolve the route table without writing anything and print it."""
    config = load_config(Path(root), **kwargs)
    result = generate(config)
    _print_route_table(result)
    return result


def dev(root: str | Path = ".", **kwargs: object) -> None:
    """Serve sitemap.xml and robots.txt from memory, regenerating on change.

    The first pass runs at server startup.  A failing pass is reported and
    the previous output keeps being served.

    Args:
        root: Path to the project root directory.
        **kwargs: Override SitemapConfig fields.

    """
    from pawprint.dev.cache import SitemapCache
    from pawprint.dev.regenerator import Regenerator
    from pawprint.dev.watcher import PagesWatcher
    from pawprint.observability.log import EventLog

    project_root = Path(root)
    config = load_config(project_root, **kwargs)

    log = EventLog()
    cache = SitemapCache()
    watcher = PagesWatcher(config)
    regenerator = Regenerator(
        config,
        cache,
        log=log,
        reload_config=lambda: load_config(project_root, **kwargs),
        on_reload=watcher.reconfigure,
    )

    app = _create_chirp_app(config, cache, log)
    _start_watcher(watcher, regenerator, app)

    print(
        f"  pawprint dev: {config.effective_base_url}/{config.filename} "
        f"(watching {config.pages_path})",
        file=sys.stderr,
    )
    app.run(host=config.host, port=config.port)


# ---------------------------------------------------------------------------
# Dev server wiring
# ---------------------------------------------------------------------------


def _create_chirp_app(config: SitemapConfig, cache: SitemapCache, log: EventLog) -> App:
    """Create a Chirp App that serves the cached documents and a route listing."""
    from chirp import App, AppConfig

    from pawprint.dev.middleware import sitemap_middleware

    app = App(AppConfig(host=config.host, port=config.port, debug=True, static_dir=None))
    app.add_middleware(sitemap_middleware(cache, config))

    @app.route(ROUTES_ENDPOINT, name="pawprint:routes")
    async def routes_handler() -> dict[str, object]:
        snapshot = cache.current
        return {
            "generation": snapshot.generation if snapshot else None,
            "routes": snapshot.result.locs if snapshot else [],
            "ignored": [
                {"path": p.candidate.short_path, "reason": str(p.reason)}
                for p in (snapshot.result.ignored if snapshot else ())
            ],
            "events": log.stats(),
        }

    return app


def _start_watcher(watcher: PagesWatcher, regenerator: Regenerator, app: App) -> None:
    """Wire the PagesWatcher to the regenerator via Chirp lifecycle hooks.

    Flow:
        on_startup  -> first pass, start watcher, spawn the consumer task
        file change -> regenerator.handle_change() (supersedes in-flight pass)
        config edit -> reload, restart the watcher if pages_dir moved
        on_shutdown -> stop watcher, cancel consumer task

    """
    import asyncio

    _task: asyncio.Task[None] | None = None

    @app.on_startup
    async def _start_event_consumer() -> None:
        nonlocal _task
        regenerator.trigger()
        watcher.start()
        _task = asyncio.create_task(regenerator.run(watcher.changes()))

    @app.on_shutdown
    async def _stop_event_consumer() -> None:
        watcher.stop()
        if _task is not None and not _task.done():
            _task.cancel()


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


def _print_build_summary(result: GenerationResult, export: ExportResult) -> None:
    """Print build completion summary to stderr."""
    n = export.total_entries
    lines = [
        "",
        "─" * 41,
        f"  Sitemap: {n} URL{'s' if n != 1 else ''}",
    ]
    if result.ignored:
        lines.append(f"  Ignored {len(result.ignored)} page file(s)")
    if result.conflicts:
        lines.append(f"  Resolved {len(result.conflicts)} clashing route(s)")
    for exported in export.files:
        lines.append(f"  Wrote {exported.output_path}")
    lines.append(f"  Done in {result.duration_ms + export.duration_ms:.0f}ms")

    print("\n".join(lines), file=sys.stderr)


def _print_route_table(result: GenerationResult) -> None:
    """Print resolved routes to stdout and ignored page files to stderr."""
    t0 = time.perf_counter()
    for entry in result.entries:
        print(entry.loc)
    for page in result.ignored:
        print(f"  ignored {page.candidate.short_path} ({page.reason})", file=sys.stderr)
    elapsed = (time.perf_counter() - t0) * 1000 + result.duration_ms
    print(f"  {len(result.entries)} route(s) in {elapsed:.0f}ms", file=sys.stderr)
