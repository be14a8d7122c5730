"""
Route Module

A single named route: its template, parameter segments, matching pattern,
parameter normalization and URL compilation.
"""

import re
from typing import Any, Dict, List, Mapping, Optional, Sequence
from urllib.parse import unquote

from zigroute.config import RouteDefinition, RouterConfig
from zigroute.core.params import (
    EmptyParams,
    MappingParams,
    classify_params,
)
from zigroute.core.template import (
    Literal,
    ParameterSegment,
    Token,
    build_pattern,
    parameter_segments,
    strip_scheme,
    strip_trailing_slashes,
    tokenize,
)
from zigroute.errors import MissingBindingKey, MissingRequiredParameter
from zigroute.query import encode_uri_component, stringify, to_string


class Route:
    """
    One named route definition bound to the router configuration.

    Everything derived from the definition (origin, template, segments,
    pattern) is computed on demand; a Route holds no mutable state.

    Example:
        route = Route("posts.show", RouteDefinition(uri="posts/{post}", methods=["GET"]), config)
        route.compile({"post": {"id": 4}})   # "/posts/4"
        route.matches_url("/posts/4?page=2") # True
    """

    def __init__(self, name: str, definition: RouteDefinition, config: RouterConfig):
        self._name = name
        self.definition = definition
        self.config = config

    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"Route({self._name!r}, uri={self.definition.uri!r})"

    def origin(self, absolute: Optional[bool] = None) -> str:
        """
        Scheme, host and port prefix for generated URLs.

        Empty unless absolute URLs are requested. A route-level domain
        replaces the configured base domain.
        """
        if absolute is None:
            absolute = self.config.absolute

        if not absolute:
            return ""

        if self.definition.domain:
            port = f":{self.config.base_port}" if self.config.base_port else ""
            return f"{self.config.base_protocol}://{self.definition.domain}{port}"

        return self.config.base_url

    def template_for(self, absolute: Optional[bool] = None) -> str:
        return strip_trailing_slashes(f"{self.origin(absolute)}/{self.definition.uri}")

    @property
    def template(self) -> str:
        """
        A 'template' of the complete URL for this route.

        Example:
            https://{team}.example.com/user/{user}
        """
        return self.template_for()

    @property
    def parameter_segments(self) -> List[ParameterSegment]:
        """
        Parameters this route accepts, in order of appearance.

        Example:
            [ParameterSegment("team", True), ParameterSegment("user", False)]
        """
        return parameter_segments(tokenize(self.template))

    @property
    def pattern(self) -> str:
        """Regular expression fragment matching hydrated URLs of this route."""
        return build_pattern(self.template)

    def _match(self, url: str) -> Optional["re.Match"]:
        path = strip_trailing_slashes(url).split("?", 1)[0]
        return re.fullmatch(self.pattern, strip_scheme(path))

    def matches_url(self, url: str) -> bool:
        """
        Check whether ``url`` could have been generated from this route.

        Only routes accepting GET can match. Trailing slashes are stripped
        first, then everything from the first ``?`` is dropped, so a slash
        right before the query string is kept and fails to match.
        """
        if not self.definition.accepts_get:
            return False

        return self._match(url) is not None

    def extract_params(self, url: str) -> Dict[str, Optional[str]]:
        """
        Decode the segment values from a URL matching this route.

        Absent optional segments map to None. Returns an empty dict when the
        URL does not match.
        """
        match = self._match(url)
        if match is None:
            return {}

        segments = parameter_segments(tokenize(strip_scheme(self.template)))
        params: Dict[str, Optional[str]] = {}
        for segment, value in zip(segments, match.groups()):
            params[segment.name] = unquote(value.lstrip("/")) if value is not None else None
        return params

    def compile(self, params: Any = None, absolute: Optional[bool] = None) -> str:
        """
        Generate a URL for this route.

        Args:
            params: Route parameters in any supported shape (see zigroute.core.params)
            absolute: Generate an absolute URL (defaults to the config setting)

        Returns:
            The URL, with non-segment parameters in the query string. Routes
            without parameter segments always return the bare template.

        Raises:
            MissingRequiredParameter: If a required segment has no value
            MissingBindingKey: If a model object lacks its binding key and 'id'
        """
        template = self.template_for(absolute)
        tokens = tokenize(template)
        segments = parameter_segments(tokens)
        if not segments:
            return template

        names = {segment.name for segment in segments}

        normalized = self._parse_params(params, segments)

        path_params = {key: value for key, value in normalized.items() if key in names}
        query_params = {
            key: int(value) if isinstance(value, bool) else value
            for key, value in normalized.items()
            if key not in names
        }

        base_url = strip_trailing_slashes(self._substitute(tokens, path_params))

        query_string = stringify(query_params)
        if not query_string:
            return base_url

        return f"{base_url}?{query_string}"

    def _substitute(self, tokens: Sequence[Token], values: Mapping[str, Any]) -> str:
        parts = []

        for token in tokens:
            if isinstance(token, Literal):
                parts.append(token.text)
                continue

            value = values.get(token.name)
            if value is None:
                if token.required:
                    raise MissingRequiredParameter(token.name, self.name())
                continue

            value = to_string(value)
            if not value and not token.required:
                continue

            prefix = "/" if token.leading_slash else ""
            parts.append(prefix + encode_uri_component(value))

        return "".join(parts)

    def _has_default(self, name: str) -> bool:
        return self.config.default_parameters.get(name) is not None

    def _defaults(self, segments: Sequence[ParameterSegment]) -> Dict[str, Any]:
        return {
            segment.name: self.config.default_parameters[segment.name]
            for segment in segments
            if self._has_default(segment.name)
        }

    def _parse_params(self, params: Any, segments: Sequence[ParameterSegment]) -> Dict[str, Any]:
        """
        Parse Laravel-style route parameters of any shape into a mapping.

        Example (segments 'event' and 'venue'):
            _parse_params(1)                            # {"event": 1}
            _parse_params({"event": 2, "venue": 3})     # {"event": 2, "venue": 3}
            _parse_params(["Taylor", "Matt"])           # {"event": "Taylor", "venue": "Matt"}
            _parse_params([4, {"id": 56789}])           # {"event": 4, "venue": 56789}
        """
        shape = classify_params(params)

        # Segments with a default take it and are skipped when zipping
        positional = [segment for segment in segments if not self._has_default(segment.name)]

        if isinstance(shape, EmptyParams):
            object_params: Dict[str, Any] = {}
        elif isinstance(shape, MappingParams):
            object_params = dict(shape.values)
            if len(positional) == 1:
                object_params = self._infer_single_segment(object_params, positional[0].name)
        else:
            object_params = {}
            for index, value in enumerate(shape.values):
                if index < len(positional):
                    object_params[positional[index].name] = value
                else:
                    # Extra positional values end up as bare query flags
                    object_params[to_string(value)] = ""

        return {
            **self._defaults(segments),
            **self.substitute_bindings(object_params, segments),
        }

    def _infer_single_segment(self, object_params: Dict[str, Any], segment_name: str) -> Dict[str, Any]:
        # With one segment, a mapping is ambiguous: it may hold the parameter
        # by name, or be the parameter value itself (a model). A model carries
        # its binding key or an 'id'.
        binding = self.definition.bindings.get(segment_name)
        looks_like_model = (binding is not None and binding in object_params) or "id" in object_params

        if segment_name not in object_params and looks_like_model:
            return {segment_name: object_params}

        return object_params

    def substitute_bindings(
        self,
        params: Mapping[str, Any],
        segments: Optional[Sequence[ParameterSegment]] = None
    ) -> Dict[str, Any]:
        """
        Substitute route model bindings in the given parameters.

        Mappings passed for a segment are replaced by the value of the bound
        key (from the route's bindings), falling back to 'id'.

        Example:
            # bindings = {"post": "slug"}
            substitute_bindings({"post": {"id": 4, "slug": "hello-world"}})
            # {"post": "hello-world"}

        Raises:
            MissingBindingKey: If neither the bound key nor 'id' is present
        """
        if segments is None:
            segments = self.parameter_segments
        names = {segment.name for segment in segments}

        result: Dict[str, Any] = {}
        for key, value in params.items():
            if not isinstance(value, Mapping) or key not in names:
                result[key] = value
                continue

            binding = self.definition.bindings.get(key)
            if binding is not None and binding in value:
                result[key] = value[binding]
            elif "id" in value:
                result[key] = value["id"]
            else:
                raise MissingBindingKey(key, binding)

        return result
