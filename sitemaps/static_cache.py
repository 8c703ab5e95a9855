from __future__ import annotations

import enum
import logging
import threading
from typing import Dict, Optional, Tuple

from .discovery import EndpointDiscovery
from .metrics import MetricsCollector
from .node import SitemapNode, is_well_formed_absolute_url, utcnow
from .resolver import UrlResolver

logger = logging.getLogger(__name__)


class EntryState(enum.Enum):
    EMPTY = "empty"
    POPULATED = "populated"


class _Entry:
    __slots__ = ("lock", "state", "nodes")

    def __init__(self):
        self.lock = threading.Lock()
        self.state = EntryState.EMPTY
        self.nodes: Tuple[SitemapNode, ...] = ()


class StaticNodeCache:
    """Nodes built from marked endpoints, scanned once per sitemap name.

    The first caller for a name runs discovery under that name's lock;
    everyone else either waits on the lock or reads the published tuple.
    A scan that finds nothing still counts as populated; call
    ``invalidate`` to force a rescan.
    """

    def __init__(self, discovery: EndpointDiscovery, metrics: Optional[MetricsCollector] = None):
        self.discovery = discovery
        self.metrics = metrics or MetricsCollector()
        self._entries: Dict[str, _Entry] = {}
        self._entries_lock = threading.Lock()

    def _entry(self, name: str) -> _Entry:
        entry = self._entries.get(name)
        if entry is not None:
            return entry
        with self._entries_lock:
            entry = self._entries.get(name)
            if entry is None:
                entry = _Entry()
                self._entries[name] = entry
            return entry

    def get(self, name: str, resolver: UrlResolver) -> Tuple[SitemapNode, ...]:
        entry = self._entry(name)
        if entry.state is EntryState.POPULATED:
            return entry.nodes

        with entry.lock:
            if entry.state is EntryState.POPULATED:
                return entry.nodes
            nodes = self._scan(name, resolver)
            # Publish nodes before flipping the state for lock-free readers.
            entry.nodes = nodes
            entry.state = EntryState.POPULATED
            return nodes

    def is_populated(self, name: str) -> bool:
        entry = self._entries.get(name)
        return entry is not None and entry.state is EntryState.POPULATED

    def invalidate(self, name: Optional[str] = None) -> None:
        with self._entries_lock:
            if name is None:
                self._entries = {}
            else:
                self._entries.pop(name, None)

    def _scan(self, name: str, resolver: UrlResolver) -> Tuple[SitemapNode, ...]:
        self.metrics.increment("static.scans")
        timestamp = utcnow()
        nodes: list[SitemapNode] = []

        with self.metrics.timer("static.scan_ms"):
            for endpoint in self.discovery.enumerate_sitemap_endpoints():
                if not endpoint.belongs_to(name):
                    continue
                url = resolver.resolve_url(endpoint.endpoint_id)
                if url is None or not is_well_formed_absolute_url(url) or not resolver.supports_http_get(url):
                    logger.debug("Dropping endpoint %r for sitemap %r (url=%r)", endpoint.endpoint_id, name, url)
                    self.metrics.increment("static.dropped")
                    continue
                nodes.append(
                    SitemapNode(
                        url=url,
                        last_modified=endpoint.last_modified or timestamp,
                        frequency=endpoint.frequency,
                        priority=endpoint.priority,
                    )
                )

        if not nodes:
            logger.warning("No sitemap endpoints found for sitemap %r", name)
        else:
            logger.info("Cached %d static nodes for sitemap %r", len(nodes), name)
        return tuple(nodes)
