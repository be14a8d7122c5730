"""
ZIGROUTE Configuration

Route definitions and router settings, validated with Pydantic.

Options are accepted in snake_case or in the camelCase names used by the
JavaScript client (``baseUrl``, ``defaultParameters``...). A Ziggy JSON
payload (``{"url": ..., "port": ..., "defaults": ..., "routes": ...}``) can
be loaded as-is.

Usage:
    from zigroute.config import RouterConfig, load_config

    config = RouterConfig(
        base_url="https://www.example.com",
        routes={"posts.show": {"uri": "posts/{post}", "methods": ["GET", "HEAD"]}},
    )
    config = load_config("routes.json")
    config = RouterConfig.load_from_env()  # ZIGROUTE_* variables
"""

import json
import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from zigroute.location import Location

logger = logging.getLogger(__name__)


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    HEAD = "HEAD"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


class RouteDefinition(BaseModel):
    """
    One named route as declared on the server.

    Attributes:
        uri: Template using ``{name}`` / ``{name?}`` tokens, e.g. ``posts/{post}``
        domain: Optional domain template overriding the base domain
        methods: Accepted HTTP methods (at least one)
        bindings: Segment name -> object key used for model binding
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    uri: str
    domain: Optional[str] = None
    methods: Tuple[HttpMethod, ...] = Field(min_length=1)
    bindings: Dict[str, str] = Field(default_factory=dict)

    @field_validator("uri")
    @classmethod
    def _strip_leading_slashes(cls, value: str) -> str:
        return value.lstrip("/")

    @field_validator("methods", mode="before")
    @classmethod
    def _normalize_methods(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = [value]
        return tuple(
            method.upper() if isinstance(method, str) else method
            for method in value
        )

    @model_validator(mode="after")
    def _check_unique_segments(self) -> "RouteDefinition":
        from zigroute.core.template import segment_names

        names = segment_names(self.domain or "") + segment_names(self.uri)
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Route template repeats parameter(s): {', '.join(duplicates)}")
        return self

    @property
    def accepts_get(self) -> bool:
        return HttpMethod.GET in self.methods


class RouterConfig(BaseModel):
    """
    Process-wide router settings plus the full route list.

    ``base_domain`` and ``base_protocol`` default to the parts of
    ``base_url``. ``location`` overrides the ambient location field by field.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    base_url: str
    base_domain: str = ""
    base_protocol: str = ""
    base_port: Optional[Union[int, str]] = None
    default_parameters: Dict[str, Any] = Field(default_factory=dict)
    routes: Dict[str, RouteDefinition] = Field(default_factory=dict)
    absolute: bool = False
    location: Optional[Location] = None

    @model_validator(mode="before")
    @classmethod
    def _derive_base_parts(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data

        data = dict(data)
        base_url = data.get("base_url", data.get("baseUrl"))
        if not base_url:
            return data

        parts = urlsplit(str(base_url))
        if not (data.get("base_domain") or data.get("baseDomain")):
            data["base_domain"] = parts.hostname or ""
        if not (data.get("base_protocol") or data.get("baseProtocol")):
            data["base_protocol"] = parts.scheme
        return data

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("default_parameters", mode="before")
    @classmethod
    def _empty_defaults(cls, value: Any) -> Any:
        # The JS client accepts an empty array here
        if value is None or (isinstance(value, (list, tuple)) and not value):
            return {}
        return value

    @field_validator("location", mode="before")
    @classmethod
    def _location_from_url(cls, value: Any) -> Any:
        if isinstance(value, str):
            return Location.from_url(value)
        return value

    @classmethod
    def from_ziggy(cls, payload: Mapping[str, Any], **overrides: Any) -> "RouterConfig":
        """
        Build a config from the JSON emitted by Laravel Ziggy.

        Args:
            payload: Mapping with ``url``, ``port``, ``defaults`` and ``routes``
            **overrides: Extra RouterConfig fields (``absolute``, ``location``...)
        """
        values = {
            "base_url": payload["url"],
            "base_port": payload.get("port"),
            "default_parameters": payload.get("defaults") or {},
            "routes": payload.get("routes") or {},
        }
        for key in ("absolute", "location"):
            if key in payload:
                values[key] = payload[key]
        values.update(overrides)
        return cls.model_validate(values)

    @classmethod
    def load_from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **overrides: Any
    ) -> "RouterConfig":
        """
        Load configuration from ZIGROUTE_* environment variables.

        ``ZIGROUTE_CONFIG`` points at a JSON file (see load_config) providing
        the base settings and routes; the remaining variables override it.

        Example environment:
            ZIGROUTE_CONFIG=./routes.json
            ZIGROUTE_BASE_URL=https://staging.example.com
            ZIGROUTE_BASE_PORT=8080
            ZIGROUTE_ABSOLUTE=true

        Args:
            environ: Mapping to read instead of os.environ
            **overrides: Values applied last, after file and environment
        """
        environ = os.environ if environ is None else environ
        values: Dict[str, Any] = {}

        config_file = environ.get(f"{ENV_PREFIX}CONFIG")
        if config_file:
            values = load_config(config_file).model_dump()
            logger.debug(f"Loaded routes from: {config_file}")

        from_env: Dict[str, Any] = {}
        for env_key, env_value in environ.items():
            if not env_key.startswith(ENV_PREFIX) or env_key == f"{ENV_PREFIX}CONFIG":
                continue

            attr_name = env_key[len(ENV_PREFIX):].lower()
            if attr_name not in ENV_SETTINGS:
                logger.warning(f"Ignoring unknown setting: {env_key}")
                continue

            from_env[attr_name] = _auto_detect(env_value)
            logger.debug(f"Auto-set {attr_name} = {from_env[attr_name]} (from {env_key})")

        # A new base URL invalidates the domain/protocol derived from the old one
        if "base_url" in from_env:
            for derived in ("base_domain", "base_protocol"):
                if derived not in from_env:
                    values.pop(derived, None)

        values.update(from_env)
        values.update(overrides)
        return cls.model_validate(values)


ENV_PREFIX = "ZIGROUTE_"
ENV_SETTINGS = {"base_url", "base_domain", "base_protocol", "base_port", "absolute"}


def _auto_detect(env_value: str) -> Any:
    """Auto-detect the type of an environment value."""
    if env_value.lower() in ('null', 'none', '~', ''):
        return None

    if env_value.lower() in ('true', 'false', 'yes', 'no', 'on', 'off'):
        return env_value.lower() in ('true', 'yes', 'on')

    if env_value.lstrip('-').isdigit():
        return int(env_value)

    return env_value


def load_config(path: Union[str, Path], **overrides: Any) -> RouterConfig:
    """
    Load a RouterConfig from a JSON file.

    Both a Ziggy payload (``url``/``routes``) and a RouterConfig document
    (``baseUrl``/``base_url`` + ``routes``) are understood.

    Args:
        path: Path to the JSON file
        **overrides: Extra RouterConfig fields

    Raises:
        FileNotFoundError: If the file does not exist
        pydantic.ValidationError: If the document is not a valid config
    """
    path = Path(path)
    payload = json.loads(path.read_text(encoding="utf-8"))

    if "url" in payload and not ({"base_url", "baseUrl"} & set(payload)):
        return RouterConfig.from_ziggy(payload, **overrides)

    config = RouterConfig.model_validate(payload)
    if overrides:
        config = RouterConfig.model_validate({**config.model_dump(), **overrides})
    return config
