"""
ZIGROUTE - Named routes for Python clients

Generate URLs from the named routes of a Laravel (Ziggy) style route list,
and find which route a URL belongs to.

Quick Start:
    from zigroute import initialize, route, current_route_name

    initialize({
        "baseUrl": "https://www.example.com",
        "routes": {
            "posts.show": {"uri": "posts/{post}", "methods": ["GET", "HEAD"], "bindings": {"post": "slug"}},
        },
    })

    route("posts.show", {"post": {"id": 4, "slug": "hello-world"}})  # "/posts/hello-world"

Full Import Guide:
    # Core
    from zigroute import Router, Route, RouterConfig, RouteDefinition, load_config

    # Current location
    from zigroute.location import Location, bind_location

    # Web integrations
    from zigroute.adapters.flask import ZigrouteFlask
    from zigroute.adapters.fastapi import LocationMiddleware

    # Logging
    from zigroute.logging import get_logger, setup_logging
"""

__version__ = "0.1.0"


from zigroute.api import current_params, current_route_name, get_router, initialize, route
from zigroute.config import HttpMethod, RouteDefinition, RouterConfig, load_config
from zigroute.core import Route, Router
from zigroute.errors import (
    LocationUnavailable,
    MissingBindingKey,
    MissingRequiredParameter,
    RouteNotFound,
    RouterUninitialized,
    ZigrouteError,
)
from zigroute.location import Location

__all__ = [
    # Boundary API
    "initialize",
    "route",
    "current_route_name",
    "current_params",
    "get_router",
    # Core
    "Router",
    "Route",
    "RouterConfig",
    "RouteDefinition",
    "HttpMethod",
    "Location",
    "load_config",
    # Errors
    "ZigrouteError",
    "RouteNotFound",
    "MissingRequiredParameter",
    "MissingBindingKey",
    "RouterUninitialized",
    "LocationUnavailable",
    # Version
    "__version__",
]
