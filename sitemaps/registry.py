from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, Tuple

from .node import SitemapNode

logger = logging.getLogger(__name__)


class DynamicNodeRegistry:
    """Runtime-registered nodes, one replaceable set per sitemap name."""

    def __init__(self):
        self._nodes: Dict[str, Tuple[SitemapNode, ...]] = {}
        self._lock = threading.Lock()

    def set(self, name: str, nodes: Iterable[SitemapNode]) -> None:
        """Replace the whole dynamic set for ``name``."""
        snapshot = tuple(nodes)
        with self._lock:
            # Publish a new mapping so readers never see a half-built one.
            updated = dict(self._nodes)
            updated[name] = snapshot
            self._nodes = updated
        logger.info("Registered %d dynamic nodes for sitemap %r", len(snapshot), name)

    def get(self, name: str) -> Tuple[SitemapNode, ...]:
        return self._nodes.get(name, ())

    def names(self) -> list[str]:
        return sorted(self._nodes)
