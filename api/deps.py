from __future__ import annotations

from fastapi import Depends, HTTPException, Request

from sitemaps.service import SitemapService


def _sitemap_service_dep(request: Request) -> SitemapService:
    service = getattr(request.app.state, "sitemap_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="sitemaps_not_installed")
    return service


SitemapServiceDep = Depends(_sitemap_service_dep)
