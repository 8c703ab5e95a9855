from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Iterable, NamedTuple, Optional, Protocol

from .markers import get_hint
from .node import ChangeFrequency
from .routes import walk_routes

logger = logging.getLogger(__name__)


class SitemapEndpoint(NamedTuple):
    endpoint_id: str
    frequency: ChangeFrequency
    priority: float
    last_modified: Optional[datetime] = None
    sitemaps: Optional[frozenset[str]] = None

    def belongs_to(self, name: str) -> bool:
        return self.sitemaps is None or name in self.sitemaps


class EndpointDiscovery(Protocol):
    def enumerate_sitemap_endpoints(self) -> Iterable[SitemapEndpoint]: ...


class RouteDiscovery:
    """Finds marked GET routes in a Starlette/FastAPI route table.

    The route name is used as the endpoint id; it is what
    ``app.url_path_for`` expects when the URL is resolved.
    """

    def __init__(self, app: Any):
        self.app = app

    def enumerate_sitemap_endpoints(self) -> list[SitemapEndpoint]:
        found: list[SitemapEndpoint] = []
        seen: set[str] = set()
        for prefix, route in walk_routes(self.app.routes):
            endpoint = getattr(route, "endpoint", None)
            hint = get_hint(endpoint)
            if hint is None:
                continue
            methods = getattr(route, "methods", None) or set()
            if "GET" not in methods:
                logger.debug("Skipping sitemap marker on non-GET route %r", route)
                continue
            name = getattr(route, "name", None)
            if not name:
                continue
            endpoint_id = prefix + name
            if endpoint_id in seen:
                continue
            seen.add(endpoint_id)
            found.append(
                SitemapEndpoint(
                    endpoint_id=endpoint_id,
                    frequency=hint.frequency,
                    priority=hint.priority,
                    last_modified=hint.last_modified,
                    sitemaps=hint.sitemaps,
                )
            )
        logger.info("Discovered %d sitemap endpoints", len(found))
        return found
