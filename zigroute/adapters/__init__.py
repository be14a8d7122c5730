"""
ZIGROUTE Adapters

Web framework integrations (Flask, FastAPI/Starlette).

Adapters are loaded lazily to avoid requiring all frameworks to be installed.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from zigroute.adapters.fastapi import LocationMiddleware
    from zigroute.adapters.flask import ZigrouteFlask


def __getattr__(name: str):
    """Lazy import adapters only when accessed."""
    if name == "ZigrouteFlask":
        try:
            from zigroute.adapters.flask import ZigrouteFlask
            return ZigrouteFlask
        except ImportError as e:
            raise ImportError(
                "Flask is not installed. Install it with: pip install zigroute[flask]"
            ) from e

    if name == "LocationMiddleware":
        try:
            from zigroute.adapters.fastapi import LocationMiddleware
            return LocationMiddleware
        except ImportError as e:
            raise ImportError(
                "FastAPI is not installed. Install it with: pip install zigroute[fastapi]"
            ) from e

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["ZigrouteFlask", "LocationMiddleware"]
