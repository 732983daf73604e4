"""Disk output — write sitemap.xml and robots.txt to the output directory.

Both documents are rendered in memory before anything touches the disk,
and each file is written to a temporary sibling and renamed into place, so
a failed pass never leaves a half-written file over a previous good one.
"""

from __future__ import annotations

import os
import tempfile
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from pawprint._errors import ExportError
from pawprint.export.robots import ROBOTS_FILENAME, render_robots
from pawprint.export.sitemap import render_sitemap

if TYPE_CHECKING:
    from pawprint.config import SitemapConfig
    from pawprint.generator import GenerationResult


@dataclass(frozen=True, slots=True)
class ExportedFile:
    """Record of a single file written during export.

    Attributes:
        url_path: Path the file is served at (e.g., ``"/sitemap.xml"``).
        output_path: Absolute filesystem path to the written file.
        kind: Which document was written.
        size_bytes: Size of the written file in bytes.
        duration_ms: Time taken to write this file.

    """

    url_path: str
    output_path: Path
    kind: Literal["sitemap", "robots"]
    size_bytes: int
    duration_ms: float


@dataclass(frozen=True, slots=True)
class ExportResult:
    """Aggregate result of writing a generation pass to disk.

    Attributes:
        files: All files written.
        total_entries: Number of ``<url>`` entries in the sitemap.
        duration_ms: Total wall-clock time for rendering and writing.
        output_dir: Absolute path to the output directory.

    """

    files: tuple[ExportedFile, ...]
    total_entries: int
    duration_ms: float
    output_dir: Path


def render_documents(result: GenerationResult, config: SitemapConfig) -> dict[str, str]:
    """Render every output document, keyed by file name."""
    documents = {config.filename: render_sitemap(result.entries)}
    robots = render_robots(config)
    if robots is not None:
        documents[ROBOTS_FILENAME] = robots
    return documents


def write_outputs(result: GenerationResult, config: SitemapConfig) -> ExportResult:
    """Write the sitemap (and robots.txt unless disabled) for a completed pass.

    Raises:
        ExportError: If the output directory or a file cannot be written.

    """
    start = time.perf_counter()
    output_dir = config.output_path
    documents = render_documents(result, config)

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        msg = f"Cannot create output directory {output_dir}: {exc}"
        raise ExportError(msg) from exc

    files: list[ExportedFile] = []
    for name, text in documents.items():
        t0 = time.perf_counter()
        path = output_dir / name
        size = write_atomic(path, text)
        files.append(ExportedFile(
            url_path="/" + name,
            output_path=path,
            kind="robots" if name == ROBOTS_FILENAME else "sitemap",
            size_bytes=size,
            duration_ms=(time.perf_counter() - t0) * 1000,
        ))

    return ExportResult(
        files=tuple(files),
        total_entries=len(result.entries),
        duration_ms=(time.perf_counter() - start) * 1000,
        output_dir=output_dir,
    )


def write_atomic(path: Path, text: str) -> int:
    """Write ``text`` to ``path`` via a temp file and rename.

    Returns the size in bytes of the written file.

    Raises:
        ExportError: If the file cannot be written.

    """
    try:
        data = text.encode("utf-8")
    except UnicodeEncodeError as exc:
        msg = f"Cannot encode {path.name} as UTF-8: {exc.reason}"
        raise ExportError(msg) from exc
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    except OSError as exc:
        msg = f"Failed to write {path}: {exc}"
        raise ExportError(msg) from exc
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        os.replace(tmp_name, path)
    except OSError as exc:
        Path(tmp_name).unlink(missing_ok=True)
        msg = f"Failed to write {path}: {exc}"
        raise ExportError(msg) from exc
    return len(data)
