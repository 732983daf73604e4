"""robots.txt serialization."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pawprint.config import SitemapConfig

ROBOTS_FILENAME = "robots.txt"

# https://developers.cloudflare.com/fundamentals/reference/cdn-cgi-endpoint/#disallow-using-robotstxt
CLOUDFLARE_DISALLOW = "Disallow: /cdn-cgi/"


def render_robots(config: SitemapConfig) -> str | None:
    """Build robots.txt content, or None when robots generation is disabled.

    Example::

        User-agent: *
        Disallow: /cdn-cgi/
        Sitemap: https://example.com/sitemap.xml

    """
    robots = config.robots
    if robots is None:
        return None

    lines = [f"User-agent: {robots.user_agent}"]
    if robots.disallow_cloudflare:
        lines.append(CLOUDFLARE_DISALLOW)
    lines.append(f"Sitemap: {config.sitemap_url}")
    return "\n".join(lines).strip()
