"""Pawprint error hierarchy.

All pawprint-specific errors inherit from PawprintError for easy catching.
Callers that need to branch (fail the build vs. keep serving stale dev
output) catch the specific subclasses.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pawprint.routes.resolver import ConflictGroup


class PawprintError(Exception):
    """Base error for all pawprint operations."""


class ConfigError(PawprintError):
    """Invalid or missing configuration."""


class ScanError(PawprintError):
    """A directory under the pages root could not be read."""


class RouteConflictError(PawprintError):
    """Two or more page files resolve to the same URL under the ``error`` policy.

    Attributes:
        conflicts: Every clashing group found during the pass.

    """

    def __init__(self, message: str, conflicts: tuple[ConflictGroup, ...] = ()) -> None:
        super().__init__(message)
        self.conflicts = conflicts


class ExportError(PawprintError):
    """Error while writing sitemap or robots output."""
