"""
ZIGROUTE Boundary API

Convenience helpers over one process-wide router, for application code
that should not pass a Router around:

    from zigroute import initialize, route, current_route_name

    initialize(config)
    route("posts.show", {"post": post})   # "/posts/hello-world"
    current_route_name()                  # "posts.index"

The helpers never raise for a missing router: they log an error and return
None, so templates rendered during bootstrap keep working. Errors from
compiling a route (unknown name, missing parameters) do propagate.
"""

import logging
import threading
from typing import Any, Dict, Mapping, Optional, Union

from zigroute.config import RouterConfig
from zigroute.core.router import Router
from zigroute.errors import RouterUninitialized
from zigroute.location import LocationProvider

logger = logging.getLogger(__name__)

_router_lock = threading.Lock()
_current_router: Optional[Router] = None


def initialize(
    config: Union[RouterConfig, Mapping[str, Any]],
    location_provider: Optional[LocationProvider] = None
) -> Router:
    """
    Build a Router and make it the current one.

    A later call replaces the current router entirely.

    Args:
        config: RouterConfig, or a mapping validated into one
        location_provider: Source of the current location (optional)

    Returns:
        The new Router
    """
    global _current_router

    router = Router.initialize(config, location_provider)
    with _router_lock:
        _current_router = router

    logger.debug(f"Router initialized with {len(router)} routes")
    return router


def get_router() -> Optional[Router]:
    """The current router, or None before initialize()."""
    return _current_router


def reset() -> None:
    """Forget the current router."""
    global _current_router

    with _router_lock:
        _current_router = None


def _ensure_router() -> Optional[Router]:
    router = _current_router
    if router is None:
        logger.error(str(RouterUninitialized()))
    return router


def route(name: str, params: Any = None, absolute: Optional[bool] = None) -> Optional[str]:
    """
    Generate the URL for a named route with the current router.

    Returns:
        The URL, or None if no router has been initialized
    """
    router = _ensure_router()
    if router is None:
        return None

    return router.compile(name, params, absolute)


def current_route_name() -> Optional[str]:
    """Name of the route matching the current location, or None."""
    router = _ensure_router()
    if router is None:
        return None

    current = router.current()
    return current.name() if current is not None else None


def current_params() -> Optional[Dict[str, Any]]:
    """Parameters of the current location (see Router.current_params)."""
    router = _ensure_router()
    if router is None:
        return None

    return router.current_params()
