from __future__ import annotations

import threading
import time
from datetime import datetime, timedelta, timezone

from sitemaps.discovery import SitemapEndpoint
from sitemaps.node import ChangeFrequency, SitemapNode


BASE = datetime(2024, 5, 1, 10, 30, tzinfo=timezone.utc)


class FakeResolver:
    def __init__(self, urls=None, get_urls=None, sitemap_url="https://example.com/sitemap"):
        self.urls = dict(urls or {})
        self.get_urls = set(get_urls) if get_urls is not None else None
        self.sitemap_url = sitemap_url

    def resolve_url(self, endpoint_id):
        return self.urls.get(endpoint_id)

    def supports_http_get(self, url):
        return self.get_urls is None or url in self.get_urls


class FakeDiscovery:
    def __init__(self, endpoints=(), delay=0.0):
        self.endpoints = list(endpoints)
        self.delay = delay
        self.calls = 0
        self._lock = threading.Lock()

    def enumerate_sitemap_endpoints(self):
        with self._lock:
            self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        return list(self.endpoints)


def make_endpoints(count, prefix="page"):
    return [
        SitemapEndpoint(f"{prefix}{i}", ChangeFrequency.DAILY, 0.5, BASE + timedelta(minutes=i))
        for i in range(count)
    ]


def make_urls(count, prefix="page"):
    return {f"{prefix}{i}": f"https://example.com/{prefix}/{i}" for i in range(count)}


def make_nodes(count, prefix="dyn"):
    return [
        SitemapNode(f"https://example.com/{prefix}/{i}", last_modified=BASE + timedelta(hours=i))
        for i in range(count)
    ]
