"""
Flask Adapter for ZIGROUTE

Binds the current request's location for the duration of every request, so
Router.current() works inside views, and exposes ``route`` and
``current_route_name`` to Jinja templates.

Example:
    from flask import Flask
    from zigroute import Router, load_config
    from zigroute.adapters.flask import ZigrouteFlask

    app = Flask(__name__)
    ZigrouteFlask(app, Router(load_config("routes.json")))

    # templates: <a href="{{ route('posts.show', post) }}">
"""

from typing import Any, Optional

from flask import Flask, g, request

from zigroute import api
from zigroute.core.router import Router
from zigroute.location import Location, reset_ambient_location, set_ambient_location

_TOKEN_ATTR = "_zigroute_location_token"


def location_from_request(flask_request=None) -> Location:
    """Build a Location from a Flask request (the active one by default)."""
    flask_request = flask_request or request
    query_string = flask_request.query_string.decode("latin-1")
    return Location(
        host=flask_request.host,
        pathname=f"{flask_request.script_root}{flask_request.path}",
        search=f"?{query_string}" if query_string else "",
    )


class ZigrouteFlask:
    """
    Flask extension wiring a Router into the request cycle.

    When no router is given, the process-wide router from
    zigroute.initialize() is used.
    """

    def __init__(self, app: Optional[Flask] = None, router: Optional[Router] = None):
        """
        Initialize the Flask extension.

        Args:
            app: Flask application instance (or call init_app later)
            router: Router to use (defaults to the current process-wide router)
        """
        self.router = router
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        app.before_request(self._bind_location)
        app.teardown_request(self._unbind_location)
        app.jinja_env.globals.update(
            route=self.route,
            current_route_name=self.current_route_name,
        )
        app.extensions["zigroute"] = self

    def _bind_location(self) -> None:
        setattr(g, _TOKEN_ATTR, set_ambient_location(location_from_request()))

    def _unbind_location(self, exc: Optional[BaseException] = None) -> None:
        token = g.pop(_TOKEN_ATTR, None)
        if token is not None:
            reset_ambient_location(token)

    def route(self, name: str, params: Any = None, absolute: Optional[bool] = None) -> Optional[str]:
        if self.router is None:
            return api.route(name, params, absolute)
        return self.router.compile(name, params, absolute)

    def current_route_name(self) -> Optional[str]:
        if self.router is None:
            return api.current_route_name()
        current = self.router.current()
        return current.name() if current is not None else None
