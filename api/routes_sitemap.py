from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, FastAPI, HTTPException, Request, Response

from api.deps import SitemapServiceDep
from sitemaps.config import sitemap_settings
from sitemaps.discovery import EndpointDiscovery, RouteDiscovery
from sitemaps.errors import InvalidPageError
from sitemaps.resolver import StarletteUrlResolver
from sitemaps.service import SitemapService

logger = logging.getLogger(__name__)

XML_MEDIA_TYPE = "application/xml"


def install_sitemaps(
    app: FastAPI,
    discovery: Optional[EndpointDiscovery] = None,
    service: Optional[SitemapService] = None,
) -> SitemapService:
    """Attach the application's sitemap service to ``app.state``."""
    if service is None:
        service = SitemapService(discovery or RouteDiscovery(app))
    app.state.sitemap_service = service
    return service


def _etag_matches(if_none_match: Optional[str], etag: str) -> bool:
    if not if_none_match:
        return False
    for candidate in if_none_match.split(","):
        candidate = candidate.strip()
        if candidate == "*":
            return True
        if candidate.startswith("W/"):
            candidate = candidate[2:]
        if candidate == etag:
            return True
    return False


def _default_path(name: str) -> str:
    if name == sitemap_settings.default_name:
        return sitemap_settings.default_path
    return f"/{name}"


def register_sitemap(app: FastAPI, name: Optional[str] = None, path: Optional[str] = None) -> str:
    """Serve the sitemap ``name`` at ``path``; returns the route name.

    Call once per named sitemap.  ``install_sitemaps`` must have run (or
    run before the first request).
    """
    name = name or sitemap_settings.default_name
    path = path or _default_path(name)
    route_name = f"sitemap_{name}"
    router = APIRouter(tags=["sitemaps"])

    @router.get(path, name=route_name, response_class=Response, include_in_schema=False)
    def sitemap_xml(
        request: Request,
        page: Optional[int] = None,
        count: Optional[int] = None,
        service: SitemapService = SitemapServiceDep,
    ) -> Any:
        resolver = StarletteUrlResolver.from_request(request)
        try:
            doc = service.get_document(resolver, name, page, count)
        except InvalidPageError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        headers = {"Cache-Control": f"public, max-age={sitemap_settings.cache_max_age_s}"}
        if sitemap_settings.etag_enabled:
            etag = f'"{doc.etag}"'
            headers["ETag"] = etag
            if _etag_matches(request.headers.get("if-none-match"), etag):
                return Response(status_code=304, headers=headers)

        return Response(content=doc.content, media_type=XML_MEDIA_TYPE, headers=headers)

    app.include_router(router)
    logger.info("Registered sitemap %r at %s", name, path)
    return route_name
