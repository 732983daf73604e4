"""Dev-server middleware — serve sitemap.xml and robots.txt from the cache.

Every other request passes through untouched, so the middleware can be
added to any chirp app::

    app.add_middleware(sitemap_middleware(cache, config))
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pawprint.export.robots import ROBOTS_FILENAME

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from chirp.http.request import Request
    from chirp.http.response import Response, SSEResponse, StreamingResponse
    from chirp.middleware.protocol import Next

    from pawprint.config import SitemapConfig
    from pawprint.dev.cache import SitemapCache

    type AnyResponse = Response | StreamingResponse | SSEResponse

XML_CONTENT_TYPE = "application/xml; charset=utf-8"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"


def _make_response(body: str, content_type: str, status: int = 200) -> Any:
    from chirp.http.response import Response

    return Response(body=body, status=status, content_type=content_type)


def sitemap_middleware(
    cache: SitemapCache,
    config: SitemapConfig,
) -> Callable[[Request, Next], Awaitable[AnyResponse]]:
    """Build a chirp middleware bound to ``cache``.

    Until the first pass completes, the sitemap and robots paths answer
    ``503``.  ``/robots.txt`` passes through when robots generation is
    disabled.

    """
    sitemap_path = "/" + config.filename
    robots_path = "/" + ROBOTS_FILENAME
    robots_enabled = config.robots is not None

    async def middleware(request: Request, next: Next) -> AnyResponse:
        path = request.path
        if path == sitemap_path:
            snapshot = cache.current
            if snapshot is None:
                return _make_response("Sitemap not generated yet", TEXT_CONTENT_TYPE, 503)
            return _make_response(snapshot.sitemap_xml, XML_CONTENT_TYPE)

        if path == robots_path and robots_enabled:
            snapshot = cache.current
            if snapshot is None or snapshot.robots_txt is None:
                return _make_response("robots.txt not generated yet", TEXT_CONTENT_TYPE, 503)
            return _make_response(snapshot.robots_txt, TEXT_CONTENT_TYPE)

        return await next(request)

    middleware.__name__ = "pawprint_sitemap"
    return middleware
