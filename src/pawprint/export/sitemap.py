"""Sitemap serialization — produce sitemap.xml from ordered entries.

Each entry becomes one ``<url>`` element holding ``<loc>`` and then, only
when set, ``<lastmod>``, ``<changefreq>`` and ``<priority>`` in that order.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING
from xml.etree.ElementTree import Element, SubElement, indent, tostring

if TYPE_CHECKING:
    from pawprint.sitemap.entries import SitemapEntry

# XML namespace for sitemaps
SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


def format_priority(priority: float) -> str:
    """Render a priority the way JavaScript prints numbers (``0.5``, ``1``)."""
    value = float(priority)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def render_sitemap(entries: Iterable[SitemapEntry]) -> str:
    """Generate a sitemap.xml string from already ordered entries.

    Returns:
        Complete XML document suitable for writing to ``sitemap.xml``.

    """
    urlset = Element("urlset")
    urlset.set("xmlns", SITEMAP_NS)

    for entry in entries:
        url_el = SubElement(urlset, "url")
        SubElement(url_el, "loc").text = entry.loc
        if entry.lastmod:
            SubElement(url_el, "lastmod").text = entry.lastmod
        if entry.changefreq:
            SubElement(url_el, "changefreq").text = entry.changefreq
        if entry.priority is not None:
            SubElement(url_el, "priority").text = format_priority(entry.priority)

    indent(urlset, space="  ")
    xml = tostring(urlset, encoding="unicode", xml_declaration=False)
    return XML_DECLARATION + "\n" + xml + "\n"
