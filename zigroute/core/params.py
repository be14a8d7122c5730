"""
Route Parameter Shapes

Route parameters can be passed in several loosely-typed shapes, following
Laravel's conventions:

    route("posts.show", 4)                           # a single scalar
    route("events.venue", [4, 12])                   # positional values
    route("events.venue", {"event": 4, "venue": 12}) # keyed values
    route("posts.show", {"id": 4, "slug": "hello"})  # the model itself

classify_params() resolves an input into exactly one of the shapes below.
Route turns the shape into a canonical name -> value mapping.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple, Union


@dataclass(frozen=True)
class EmptyParams:
    """No parameters were given."""


@dataclass(frozen=True)
class ScalarParams:
    """A single string or number, treated as a one-element positional list."""

    value: Any

    @property
    def values(self) -> Tuple[Any, ...]:
        return (self.value,)


@dataclass(frozen=True)
class ListParams:
    """Positional values, zipped against segments in template order."""

    values: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class MappingParams:
    """Keyed values (or a model object to infer a single segment from)."""

    values: Dict[str, Any] = field(default_factory=dict)


RouteParams = Union[EmptyParams, ScalarParams, ListParams, MappingParams]

_SHAPES = (EmptyParams, ScalarParams, ListParams, MappingParams)


def classify_params(params: Any) -> RouteParams:
    """
    Resolve raw route parameters into one of the known shapes.

    Args:
        params: None, a scalar, a list/tuple, a mapping, or an already
            classified shape

    Returns:
        The matching RouteParams shape

    Raises:
        TypeError: If the value has none of the supported shapes
    """
    if params is None:
        return EmptyParams()
    if isinstance(params, _SHAPES):
        return params
    if isinstance(params, (str, int, float)):
        return ScalarParams(params)
    if isinstance(params, (list, tuple)):
        return ListParams(tuple(params))
    if isinstance(params, Mapping):
        return MappingParams(dict(params))

    raise TypeError(
        f"Route parameters must be a scalar, a list or a mapping, got {type(params).__name__}"
    )
