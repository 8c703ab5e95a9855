from .config import sitemap_settings, SitemapSettings
from .errors import SitemapError, InvalidNodeError, InvalidPageError
from .node import ChangeFrequency, SitemapNode
from .markers import SitemapHint, sitemap, mark_router
from .discovery import EndpointDiscovery, RouteDiscovery, SitemapEndpoint
from .resolver import UrlResolver, StarletteUrlResolver
from .paging import Page, paginate
from .static_cache import StaticNodeCache
from .registry import DynamicNodeRegistry
from .renderer import SitemapRenderer, SITEMAPS_NAMESPACE
from .service import SitemapService, SitemapDocument, compute_etag

__all__ = [
    "sitemap_settings",
    "SitemapSettings",
    "SitemapError",
    "InvalidNodeError",
    "InvalidPageError",
    "ChangeFrequency",
    "SitemapNode",
    "SitemapHint",
    "sitemap",
    "mark_router",
    "EndpointDiscovery",
    "RouteDiscovery",
    "SitemapEndpoint",
    "UrlResolver",
    "StarletteUrlResolver",
    "Page",
    "paginate",
    "StaticNodeCache",
    "DynamicNodeRegistry",
    "SitemapRenderer",
    "SITEMAPS_NAMESPACE",
    "SitemapService",
    "SitemapDocument",
    "compute_etag",
]
