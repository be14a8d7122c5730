"""
ZIGROUTE Errors

Exceptions raised while compiling and matching named routes.
"""

from typing import Optional


class ZigrouteError(Exception):
    """Base class for all zigroute errors."""


class RouteNotFound(ZigrouteError, LookupError):
    """Raised when a route name is not present in the route list."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"The route '{name}' is not defined in the route list.")


class MissingRequiredParameter(ZigrouteError, ValueError):
    """Raised when a required segment has no value after parsing."""

    def __init__(self, parameter: str, route: str):
        self.parameter = parameter
        self.route = route
        super().__init__(f"'{parameter}' parameter is required for route '{route}'.")


class MissingBindingKey(ZigrouteError, ValueError):
    """Raised when an object passed for a segment lacks its binding key and 'id'."""

    def __init__(self, parameter: str, key: Optional[str]):
        self.parameter = parameter
        self.key = key or "id"
        super().__init__(
            f"Object passed as '{parameter}' parameter is missing route model binding key '{self.key}'."
        )


class RouterUninitialized(ZigrouteError, RuntimeError):
    """Raised when the boundary helpers are used before initialize()."""

    def __init__(self):
        super().__init__(
            "Router not initialized, make sure you called the initialize function before parsing urls"
        )


class LocationUnavailable(ZigrouteError, RuntimeError):
    """Raised when no location source is available to resolve the current URL."""

    def __init__(self, detail: str = "no location provider or location override is available"):
        super().__init__(f"The current location cannot be resolved: {detail}")
