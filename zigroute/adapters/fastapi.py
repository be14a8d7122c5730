"""
FastAPI / Starlette Adapter for ZIGROUTE

ASGI middleware binding the request's location for the duration of each
request, so Router.current() works inside endpoints.

Example:
    from fastapi import FastAPI
    from zigroute.adapters.fastapi import LocationMiddleware

    app = FastAPI()
    app.add_middleware(LocationMiddleware)
"""

from fastapi.requests import HTTPConnection
from starlette.types import ASGIApp, Receive, Scope, Send

from zigroute.location import Location, reset_ambient_location, set_ambient_location


def location_from_scope(scope: Scope) -> Location:
    """Build a Location from an ASGI http/websocket scope."""
    url = HTTPConnection(scope).url
    return Location(
        host=url.netloc,
        pathname=url.path,
        search=f"?{url.query}" if url.query else "",
    )


class LocationMiddleware:
    """ASGI middleware exposing the request location to the ambient provider."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        token = set_ambient_location(location_from_scope(scope))
        try:
            await self.app(scope, receive, send)
        finally:
            reset_ambient_location(token)
