"""
ZIGROUTE Location Sources

A location is the host/path/query triple of the URL currently being viewed.
The router never reads it from a global; it asks a location provider.

The default provider (AmbientLocationProvider) reads a context-local value
that web adapters bind for the duration of each request:

    from zigroute.location import Location, bind_location

    with bind_location(Location.from_url("https://example.com/posts/4?page=2")):
        router.current()
"""

import contextlib
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator, Optional, Protocol
from urllib.parse import urlsplit


@dataclass(frozen=True)
class Location:
    """
    The observed URL split into the parts the router uses.

    Attributes left as None are "unknown" and can be filled in by another
    source (see Location.merged_over).
    """

    host: Optional[str] = None
    pathname: Optional[str] = None
    search: Optional[str] = None

    @classmethod
    def from_url(cls, url: str) -> "Location":
        """
        Build a location from a URL string.

        Example:
            Location.from_url("https://www.example.com/test?q=1")
            # Location(host="www.example.com", pathname="/test", search="?q=1")
        """
        parts = urlsplit(url)
        return cls(
            host=parts.netloc,
            pathname=parts.path,
            search=f"?{parts.query}" if parts.query else "",
        )

    def merged_over(self, base: Optional["Location"]) -> "Location":
        """Return a location using this one's known fields and base's for the rest."""
        if base is None:
            return self
        return Location(
            host=self.host if self.host is not None else base.host,
            pathname=self.pathname if self.pathname is not None else base.pathname,
            search=self.search if self.search is not None else base.search,
        )


class LocationProvider(Protocol):
    """Anything that can report the current location (None when it cannot)."""

    def get_location(self) -> Optional[Location]:
        ...


class StaticLocationProvider:
    """Always reports the same location. Handy for scripts and tests."""

    def __init__(self, location: Location):
        self.location = location

    def get_location(self) -> Optional[Location]:
        return self.location


_current_location: ContextVar[Optional[Location]] = ContextVar("zigroute_location", default=None)


def get_ambient_location() -> Optional[Location]:
    """Location bound to the current context, if any."""
    return _current_location.get()


def set_ambient_location(location: Optional[Location]):
    """Bind a location to the current context and return the reset token."""
    return _current_location.set(location)


def reset_ambient_location(token) -> None:
    _current_location.reset(token)


@contextlib.contextmanager
def bind_location(location: Optional[Location]) -> Iterator[Optional[Location]]:
    """Bind a location for the duration of a with-block."""
    token = set_ambient_location(location)
    try:
        yield location
    finally:
        reset_ambient_location(token)


class AmbientLocationProvider:
    """Default provider: whatever location is bound to the current context."""

    def get_location(self) -> Optional[Location]:
        return get_ambient_location()
