import logging
import threading
from typing import Any, Dict, Optional, Protocol, Tuple

logger = logging.getLogger(__name__)


class PathRevalidator(Protocol):
    def revalidate_path(self, path: str) -> None: ...


def _normalize(path: str) -> str:
    # "dashboard/invoices/" and "/dashboard/invoices" name the same route
    route, sep, query = path.partition("?")
    return "/" + route.strip("/") + sep + query


def _route(path: str) -> str:
    return _normalize(path).partition("?")[0]


class PageCache:
    """In-process cache of rendered pages keyed by route path.

    A key may carry a query string (`/dashboard/invoices?offset=50`);
    revalidating a route drops every variant of it and bumps the route's
    generation. `get` hands out the generation it saw, and `set` refuses a
    value rendered under an older one, so a render that raced a
    revalidation is never stored.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Any] = {}
        self._generations: Dict[str, int] = {}
        self._lock = threading.Lock()

    def get(self, path: str) -> Tuple[Optional[Any], int]:
        with self._lock:
            return self._entries.get(_normalize(path)), self._generations.get(_route(path), 0)

    def set(self, path: str, value: Any, generation: Optional[int] = None) -> bool:
        with self._lock:
            current = self._generations.get(_route(path), 0)
            if generation is not None and generation != current:
                logger.debug("Discarded stale render of %s (generation %s < %s)", path, generation, current)
                return False
            self._entries[_normalize(path)] = value
            return True

    def revalidate_path(self, path: str) -> None:
        route = _route(path)
        with self._lock:
            self._generations[route] = self._generations.get(route, 0) + 1
            stale = [k for k in self._entries if k.partition("?")[0] == route]
            for key in stale:
                del self._entries[key]
        logger.debug("Revalidated %s (%d cached entries dropped)", route, len(stale))
