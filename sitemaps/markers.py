from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Iterable, Optional

from fastapi import APIRouter

from .errors import InvalidNodeError
from .node import ChangeFrequency
from .routes import walk_routes


SITEMAP_ATTR = "__sitemap__"


@dataclass(frozen=True)
class SitemapHint:
    frequency: ChangeFrequency = ChangeFrequency.WEEKLY
    priority: float = 0.5
    last_modified: Optional[datetime] = None
    # Restrict the endpoint to these named sitemaps; None means all of them.
    sitemaps: Optional[frozenset[str]] = None


def _make_hint(
    frequency: ChangeFrequency | str,
    priority: float,
    last_modified: Optional[datetime],
    sitemaps: Optional[Iterable[str]],
) -> SitemapHint:
    if not isinstance(frequency, ChangeFrequency):
        frequency = ChangeFrequency(str(frequency).lower())
    if not 0.0 <= float(priority) <= 1.0:
        raise InvalidNodeError(f"priority must be within [0.0, 1.0], got {priority}")
    if isinstance(sitemaps, str):
        sitemaps = [sitemaps]
    return SitemapHint(
        frequency=frequency,
        priority=float(priority),
        last_modified=last_modified,
        sitemaps=frozenset(sitemaps) if sitemaps is not None else None,
    )


def sitemap(
    frequency: ChangeFrequency | str = ChangeFrequency.WEEKLY,
    priority: float = 0.5,
    last_modified: Optional[datetime] = None,
    sitemaps: Optional[Iterable[str]] = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Mark a route handler for inclusion in the sitemap.

    The handler is returned unchanged, so the marker works on either side
    of the router decorator::

        @router.get("/about")
        @sitemap(frequency="monthly", priority=0.8)
        def about(): ...
    """
    hint = _make_hint(frequency, priority, last_modified, sitemaps)

    def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
        setattr(fn, SITEMAP_ATTR, hint)
        return fn

    return decorator


def mark_router(
    router: APIRouter,
    frequency: ChangeFrequency | str = ChangeFrequency.WEEKLY,
    priority: float = 0.5,
    last_modified: Optional[datetime] = None,
    sitemaps: Optional[Iterable[str]] = None,
) -> APIRouter:
    """Mark every GET route currently on ``router`` for inclusion.

    Router-level hints replace any per-route marker.  Call before
    ``include_router`` or after; the endpoints are shared either way.
    """
    hint = _make_hint(frequency, priority, last_modified, sitemaps)
    for _, route in walk_routes(router.routes):
        methods = getattr(route, "methods", None) or set()
        endpoint = getattr(route, "endpoint", None)
        if endpoint is None or "GET" not in methods:
            continue
        setattr(endpoint, SITEMAP_ATTR, hint)
    return router


def get_hint(endpoint: Any) -> Optional[SitemapHint]:
    hint = getattr(endpoint, SITEMAP_ATTR, None)
    return hint if isinstance(hint, SitemapHint) else None
