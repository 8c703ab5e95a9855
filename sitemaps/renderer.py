"""sitemaps.org 0.9 XML rendering.

Two document shapes are produced: a ``urlset`` listing nodes, and a
``sitemapindex`` pointing at the numbered pages of a sitemap that does not
fit on one page.
"""

from __future__ import annotations

import logging
import math
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional
from urllib.parse import quote

from .metrics import MetricsCollector
from .node import STRAY_PERCENT_RE, SitemapNode
from .paging import Page

logger = logging.getLogger(__name__)

SITEMAPS_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

# RFC 3986 reserved + unreserved characters, plus "%" so valid escapes survive.
_URI_SAFE = "!#$%&'()*+,/:;=?@[]~"

FetchPage = Callable[[Optional[int], Optional[int]], Page[SitemapNode]]


def escape_loc(url: str) -> str:
    # A "%" not followed by two hex digits is data, not an escape.
    return quote(STRAY_PERCENT_RE.sub("%25", url), safe=_URI_SAFE)


def format_lastmod(value: datetime) -> str:
    """Minute precision W3C datetime, e.g. ``2024-05-01T10:30+02:00``."""
    if value.tzinfo is None or value.utcoffset() is None:
        value = value.replace(tzinfo=timezone.utc)
    offset = value.utcoffset()
    minutes = int(offset.total_seconds() // 60)
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{value.strftime('%Y-%m-%dT%H:%M')}{sign}{hours:02d}:{minutes:02d}"


def format_priority(value: float) -> str:
    text = f"{float(value):.4f}".rstrip("0")
    return text + "0" if text.endswith(".") else text


def _page_url(sitemap_url: str, page: int, count: Optional[int]) -> str:
    sep = "&" if "?" in sitemap_url else "?"
    url = f"{sitemap_url}{sep}page={page}"
    if count is not None:
        url += f"&count={count}"
    return url


def _to_xml(root: ET.Element) -> str:
    return XML_DECLARATION + ET.tostring(root, encoding="unicode")


def _sub(parent: ET.Element, tag: str, text: str) -> ET.Element:
    el = ET.SubElement(parent, tag)
    el.text = text
    return el


def render_urlset(nodes: Iterable[SitemapNode]) -> str:
    root = ET.Element("urlset", {"xmlns": SITEMAPS_NAMESPACE})
    for node in nodes:
        url = ET.SubElement(root, "url")
        _sub(url, "loc", escape_loc(node.url))
        _sub(url, "lastmod", format_lastmod(node.last_modified))
        _sub(url, "changefreq", node.frequency.value)
        _sub(url, "priority", format_priority(node.priority))
    return _to_xml(root)


def render_index(entries: Iterable[tuple[str, Optional[datetime]]]) -> str:
    """Render a sitemap index from ``(loc, lastmod)`` pairs."""
    root = ET.Element("sitemapindex", {"xmlns": SITEMAPS_NAMESPACE})
    for loc, lastmod in entries:
        entry = ET.SubElement(root, "sitemap")
        _sub(entry, "loc", escape_loc(loc))
        if lastmod is not None:
            _sub(entry, "lastmod", format_lastmod(lastmod))
    return _to_xml(root)


class SitemapRenderer:
    def __init__(self, metrics: Optional[MetricsCollector] = None):
        self.metrics = metrics or MetricsCollector()

    def render(
        self,
        fetch_page: FetchPage,
        sitemap_url: str,
        page: Optional[int] = None,
        count: Optional[int] = None,
    ) -> str:
        """Render one sitemap document.

        Without an explicit ``page``, a source larger than one page becomes
        a ``sitemapindex``; every other request yields a ``urlset`` for the
        requested slice.
        """
        first = fetch_page(page, count)

        if page is None and first.is_partial:
            with self.metrics.timer("render.index_ms"):
                xml = render_index(self._index_entries(fetch_page, first, sitemap_url, count))
            self.metrics.increment("render.index")
            logger.debug("Rendered sitemap index with %d pages", first.page_count)
            return xml

        with self.metrics.timer("render.urlset_ms"):
            xml = render_urlset(first.items)
        self.metrics.increment("render.urlset")
        return xml

    def _index_entries(
        self,
        fetch_page: FetchPage,
        first: Page[SitemapNode],
        sitemap_url: str,
        count: Optional[int],
    ) -> list[tuple[str, Optional[datetime]]]:
        pages = math.ceil(first.total_count / first.page_size)
        entries = []
        for number in range(1, pages + 1):
            current = first if number == first.page else fetch_page(number, count)
            lastmod = max((n.last_modified for n in current.items), key=_sort_key, default=None)
            entries.append((_page_url(sitemap_url, number, count), lastmod))
        return entries


def _sort_key(value: datetime) -> datetime:
    # Naive and aware timestamps can be mixed across static and dynamic nodes.
    if value.tzinfo is None or value.utcoffset() is None:
        return value.replace(tzinfo=timezone.utc)
    return value
