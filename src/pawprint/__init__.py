"""Pawprint — sitemap.xml and robots.txt from file-based page routes.

Walks a pages directory (``+Page.tsx``-style routing), maps each page file
to its public URL, and writes a sitemap and robots.txt.  In development the
documents are served from memory and regenerated whenever the pages tree
changes.

Quick start::

    import pawprint

    pawprint.build(".", base_url="https://example.com")

Three commands::

    pawprint.build(".")     # Write sitemap.xml + robots.txt
    pawprint.dev(".")       # Serve them live, regenerating on change
    pawprint.routes(".")    # Print the resolved route table

Routing convention::

    pages/+Page.tsx                   -> /
    pages/(marketing)/about/+Page.tsx -> /about
    pages/blog/@slug/+Page.tsx        -> ignored (dynamic route)
    pages/_drafts/...                 -> never scanned

"""

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0-dev"
__all__ = [
    "SitemapConfig",
    "SitemapEntry",
    "__version__",
    "build",
    "dev",
    "generate",
    "routes",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import pawprint`` fast; nothing below is loaded until used.
    """
    if name == "SitemapConfig":
        from pawprint.config import SitemapConfig

        return SitemapConfig

    if name == "SitemapEntry":
        from pawprint.sitemap.entries import SitemapEntry

        return SitemapEntry

    if name == "generate":
        from pawprint.generator import generate

        return generate

    if name in ("build", "dev", "routes"):
        from pawprint import app

        return getattr(app, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
