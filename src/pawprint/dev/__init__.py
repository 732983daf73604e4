"""Development mode — keep sitemap.xml and robots.txt in sync with the pages tree.

The watcher feeds the regenerator, the regenerator publishes whole passes
to the cache, and the middleware serves whatever the cache holds.
"""

from pawprint.dev.cache import SitemapCache, Snapshot, build_snapshot
from pawprint.dev.middleware import sitemap_middleware
from pawprint.dev.regenerator import Regenerator
from pawprint.dev.watcher import ChangeEvent, PagesWatcher, categorize_change

__all__ = [
    "ChangeEvent",
    "PagesWatcher",
    "Regenerator",
    "SitemapCache",
    "Snapshot",
    "build_snapshot",
    "categorize_change",
    "sitemap_middleware",
]
