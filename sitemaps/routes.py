from __future__ import annotations

from typing import Any, Iterable, Iterator

from starlette.routing import Host, Mount


def walk_routes(routes: Iterable[Any], prefix: str = "") -> Iterator[tuple[str, Any]]:
    """Yield ``(name_prefix, route)`` for every leaf route of a route table.

    Mounted and host-routed apps are addressed as ``"<name>:<route>"``.
    Routers folded in with ``include_router`` keep their route names, whether
    FastAPI copies their routes or wraps the router (``original_router``).
    """
    for route in routes:
        if isinstance(route, (Mount, Host)):
            sub_prefix = f"{prefix}{route.name}:" if route.name else prefix
            yield from walk_routes(route.routes or [], sub_prefix)
            continue
        included = getattr(route, "original_router", None)
        if included is not None:
            yield from walk_routes(included.routes, prefix)
            continue
        if getattr(route, "endpoint", None) is None and isinstance(getattr(route, "routes", None), list):
            yield from walk_routes(route.routes, prefix)
            continue
        yield prefix, route
