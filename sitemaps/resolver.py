from __future__ import annotations

from typing import Any, Iterable, Optional, Protocol
from urllib.parse import urlsplit

from starlette.requests import Request
from starlette.routing import Match, Mount, NoMatchFound

from .config import sitemap_settings
from .node import is_well_formed_absolute_url


class UrlResolver(Protocol):
    sitemap_url: str

    def resolve_url(self, endpoint_id: str) -> Optional[str]: ...

    def supports_http_get(self, url: str) -> bool: ...


def _matches_get(routes: Iterable[Any], scope: dict[str, Any]) -> bool:
    for route in routes:
        match, child_scope = route.matches(scope)
        if match != Match.FULL:
            continue
        if isinstance(route, Mount):
            # A mount matches on prefix alone; the mounted routes decide.
            sub_routes = route.routes
            if not sub_routes:
                return True
            if _matches_get(sub_routes, {**scope, **child_scope}):
                return True
            continue
        return True
    return False


class StarletteUrlResolver:
    """Resolves route names to absolute URLs against one application.

    ``base_url`` is the externally visible root of the application (with
    any root path), ``sitemap_url`` the address the sitemap is served from.
    """

    def __init__(self, app: Any, base_url: str, sitemap_url: str):
        self.app = app
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.sitemap_url = sitemap_url

    @classmethod
    def from_request(cls, request: Request, base_url: Optional[str] = None) -> "StarletteUrlResolver":
        """Build a resolver for ``request``.

        A configured ``base_url`` (argument or ``SITEMAPS_BASE_URL``) wins
        over the request's Host header, which the client controls.
        """
        base_url = base_url or sitemap_settings.base_url
        if not base_url:
            return cls(
                request.app,
                base_url=str(request.base_url),
                sitemap_url=str(request.url.replace(query="")),
            )

        path = request.url.path
        root_path = request.scope.get("root_path", "")
        if root_path and path.startswith(root_path):
            path = path[len(root_path):]
        return cls(request.app, base_url=base_url, sitemap_url=base_url.rstrip("/") + path)

    def resolve_url(self, endpoint_id: str) -> Optional[str]:
        try:
            path = self.app.url_path_for(endpoint_id)
        except NoMatchFound:
            # Routes that need path parameters cannot be listed statically.
            return None
        return str(path.make_absolute_url(base_url=self.base_url))

    def supports_http_get(self, url: str) -> bool:
        if not is_well_formed_absolute_url(url):
            return False
        parts = urlsplit(url)
        base = urlsplit(self.base_url)
        if (parts.scheme, parts.netloc) != (base.scheme, base.netloc):
            return False
        root_path = base.path.rstrip("/")
        if root_path and not parts.path.startswith(root_path + "/"):
            return False
        scope = {
            "type": "http",
            "method": "GET",
            "path": parts.path or "/",
            "root_path": root_path,
            "query_string": parts.query.encode("latin-1"),
            "headers": [],
        }
        return _matches_get(self.app.routes, scope)
