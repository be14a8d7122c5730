"""
Router Module

Holds the named route table and resolves names to URLs and URLs to routes.
"""

import logging
import re
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union

from zigroute.config import RouterConfig
from zigroute.core.route import Route
from zigroute.errors import LocationUnavailable, RouteNotFound
from zigroute.location import AmbientLocationProvider, Location, LocationProvider
from zigroute import query

logger = logging.getLogger(__name__)


class Router:
    """
    Named route table built from a RouterConfig.

    The table is built once and never modified; initialize again to change
    it. The current location is read through a location provider, which
    defaults to the ambient per-context location (see zigroute.location).

    Example:
        router = Router.initialize(config)
        router.compile("posts.show", 4)          # "/posts/4"
        router.parse("/posts/4").name()          # "posts.show"
    """

    def __init__(
        self,
        config: Union[RouterConfig, Mapping[str, Any]],
        location_provider: Optional[LocationProvider] = None
    ):
        """
        Initialize the Router.

        Args:
            config: RouterConfig, or a mapping validated into one
            location_provider: Source of the current location (defaults to
                AmbientLocationProvider)
        """
        if not isinstance(config, RouterConfig):
            config = RouterConfig.model_validate(config)

        self.config = config
        self.location_provider = location_provider or AmbientLocationProvider()
        self._routes: Dict[str, Route] = {
            name: Route(name, definition, config)
            for name, definition in config.routes.items()
        }
        logger.debug(f"Built route table with {len(self._routes)} routes")

    @classmethod
    def initialize(
        cls,
        config: Union[RouterConfig, Mapping[str, Any]],
        location_provider: Optional[LocationProvider] = None
    ) -> "Router":
        return cls(config, location_provider)

    @property
    def routes(self) -> Mapping[str, Route]:
        """Read-only view of the route table, in declaration order."""
        return MappingProxyType(self._routes)

    def names(self) -> List[str]:
        return list(self._routes)

    def has(self, name: str) -> bool:
        return name in self._routes

    def __contains__(self, name: object) -> bool:
        return name in self._routes

    def __len__(self) -> int:
        return len(self._routes)

    def get(self, name: str) -> Route:
        """
        Look up a route by name.

        Raises:
            RouteNotFound: If the name is not in the route list
        """
        route = self._routes.get(name)
        if route is None:
            raise RouteNotFound(name)
        return route

    def compile(self, name: str, params: Any = None, absolute: Optional[bool] = None) -> str:
        """
        Generate the URL for a named route.

        Args:
            name: Route name
            params: Route parameters (scalar, list or mapping)
            absolute: Generate an absolute URL (defaults to the config setting)

        Raises:
            RouteNotFound: If the route is not defined
            MissingRequiredParameter: If a required segment has no value
            MissingBindingKey: If a model object lacks its binding key
        """
        return self.get(name).compile(params, absolute)

    def parse(self, url: str) -> Optional[Route]:
        """
        Find the route matching ``url``.

        Routes are tried in declaration order and the first match wins, so
        specific routes must be declared before general ones.
        """
        for route in self._routes.values():
            if route.matches_url(url):
                return route
        return None

    def location(self) -> Location:
        """
        The current location, with config overrides applied field by field.

        Raises:
            LocationUnavailable: If neither the provider nor the config
                supply a location
        """
        ambient = self.location_provider.get_location()
        override = self.config.location

        if ambient is None and override is None:
            raise LocationUnavailable()

        location = override.merged_over(ambient) if override is not None else ambient
        return Location(
            host=location.host or "",
            pathname=location.pathname or "",
            search=location.search or "",
        )

    def _location_string(self, location: Location) -> str:
        if self.config.absolute:
            url = f"{location.host}{location.pathname}"
        else:
            base_path = re.sub(r'^\w*://[^/]+', '', self.config.base_url)
            pathname = location.pathname
            if base_path and (pathname == base_path or pathname.startswith(f"{base_path}/")):
                pathname = pathname[len(base_path):]
            url = re.sub(r'^/+', '/', pathname) or "/"

        if not url.strip("/") and not location.host and not location.pathname:
            raise LocationUnavailable("the location is empty")
        return url

    def current_url(self) -> str:
        """
        The current location as a string suitable for parse().

        Absolute mode: host + path. Relative mode: path with the base URL's
        path prefix removed.

        Raises:
            LocationUnavailable: If there is no current location
        """
        return self._location_string(self.location())

    def current(self) -> Optional[Route]:
        """The route matching the current location, or None."""
        try:
            url = self.current_url()
        except LocationUnavailable as e:
            logger.error(str(e))
            return None

        return self.parse(url)

    def current_params(self) -> Optional[Dict[str, Any]]:
        """
        Parameters of the current location: decoded query string values
        overlaid with the current route's segment values.

        Returns None when there is no location or no route matches.
        """
        try:
            location = self.location()
            url = self._location_string(location)
        except LocationUnavailable as e:
            logger.error(str(e))
            return None

        route = self.parse(url)
        if route is None:
            return None

        segments = {
            name: value
            for name, value in route.extract_params(url).items()
            if value is not None
        }
        return {**query.parse(location.search), **segments}
