from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .config import sitemap_settings
from .discovery import EndpointDiscovery
from .metrics import MetricsCollector
from .node import SitemapNode
from .paging import Page, paginate
from .registry import DynamicNodeRegistry
from .renderer import SitemapRenderer
from .resolver import UrlResolver
from .static_cache import StaticNodeCache

logger = logging.getLogger(__name__)


def compute_etag(content: str) -> str:
    """Content identity for HTTP validators; not a security hash."""
    return hashlib.md5(content.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class SitemapDocument:
    content: str
    etag: str


class SitemapService:
    """Entry point for application code and the HTTP adapter.

    One instance owns the static cache and the dynamic registry for every
    named sitemap of an application; create it once at startup and hand it
    to request handlers.
    """

    def __init__(
        self,
        discovery: EndpointDiscovery,
        page_size: Optional[int] = None,
        default_name: Optional[str] = None,
    ):
        self.page_size = page_size or sitemap_settings.page_size
        self.default_name = default_name or sitemap_settings.default_name
        self.metrics = MetricsCollector()
        self.static_nodes = StaticNodeCache(discovery, metrics=self.metrics)
        self.dynamic_nodes = DynamicNodeRegistry()
        self.renderer = SitemapRenderer(metrics=self.metrics)

    def _name(self, name: Optional[str]) -> str:
        return name or self.default_name

    def get_static_nodes(self, resolver: UrlResolver, name: Optional[str] = None) -> Tuple[SitemapNode, ...]:
        return self.static_nodes.get(self._name(name), resolver)

    def get_dynamic_nodes(self, name: Optional[str] = None) -> Tuple[SitemapNode, ...]:
        return self.dynamic_nodes.get(self._name(name))

    def get_nodes(
        self,
        resolver: UrlResolver,
        name: Optional[str] = None,
        page: Optional[int] = None,
        count: Optional[int] = None,
    ) -> Page[SitemapNode]:
        name = self._name(name)
        source = self.static_nodes.get(name, resolver) + self.dynamic_nodes.get(name)
        return paginate(source, page, count, default_page_size=self.page_size)

    def get_xml(
        self,
        resolver: UrlResolver,
        name: Optional[str] = None,
        page: Optional[int] = None,
        count: Optional[int] = None,
    ) -> str:
        name = self._name(name)

        def fetch_page(p: Optional[int], c: Optional[int]) -> Page[SitemapNode]:
            return self.get_nodes(resolver, name, p, c)

        return self.renderer.render(fetch_page, resolver.sitemap_url, page, count)

    def get_document(
        self,
        resolver: UrlResolver,
        name: Optional[str] = None,
        page: Optional[int] = None,
        count: Optional[int] = None,
    ) -> SitemapDocument:
        content = self.get_xml(resolver, name, page, count)
        return SitemapDocument(content=content, etag=compute_etag(content))

    def add_nodes(self, nodes: Iterable[SitemapNode], name: Optional[str] = None) -> None:
        """Replace the dynamic nodes of ``name`` (or the default sitemap)."""
        self.dynamic_nodes.set(self._name(name), nodes)

    def reset_static_nodes(self, name: Optional[str] = None) -> None:
        self.static_nodes.invalidate(name)
        logger.info("Static sitemap nodes reset for %s", repr(name) if name else "all sitemaps")

    compute_etag = staticmethod(compute_etag)
