"""Export layer — sitemap.xml and robots.txt output.

Serializes a generation pass and writes the documents to the configured
output directory.
"""

from pawprint.export.robots import render_robots
from pawprint.export.sitemap import render_sitemap
from pawprint.export.writer import ExportedFile, ExportResult, render_documents, write_outputs

__all__ = [
    "ExportResult",
    "ExportedFile",
    "render_documents",
    "render_robots",
    "render_sitemap",
    "write_outputs",
]
