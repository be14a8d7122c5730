"""
ZIGROUTE CLI - Shared Helper Functions

Utility functions used across CLI commands.
"""

import os
from typing import Any, Dict, List, Optional, Sequence, Union

import click
import questionary

from zigroute.config import ENV_PREFIX, RouterConfig
from zigroute.core.route import Route
from zigroute.core.router import Router


def load_router(config_path: Optional[str]) -> Router:
    """
    Build a Router from a JSON route list plus ZIGROUTE_* overrides.

    Raises:
        click.UsageError: If no route list was given
    """
    environ = dict(os.environ)
    if config_path:
        environ[f"{ENV_PREFIX}CONFIG"] = config_path

    if not environ.get(f"{ENV_PREFIX}CONFIG"):
        raise click.UsageError(
            f"No route list given. Use --config or set {ENV_PREFIX}CONFIG."
        )

    return Router(RouterConfig.load_from_env(environ=environ))


def parse_param_options(options: Sequence[str]) -> Union[None, List[str], Dict[str, Any]]:
    """
    Turn repeated --param options into route parameters.

    Examples:
        ()                          -> None
        ("4", "12")                 -> ["4", "12"]
        ("post=4", "page=2")        -> {"post": "4", "page": "2"}
        ("tags=a", "tags=b")        -> {"tags": ["a", "b"]}

    Raises:
        click.BadParameter: If positional and KEY=VALUE options are mixed
    """
    if not options:
        return None

    keyed = ["=" in option for option in options]
    if all(keyed):
        params: Dict[str, Any] = {}
        for option in options:
            key, _, value = option.partition("=")
            if key in params:
                existing = params[key]
                params[key] = existing + [value] if isinstance(existing, list) else [existing, value]
            else:
                params[key] = value
        return params

    if any(keyed):
        raise click.BadParameter(
            "use either positional values or KEY=VALUE pairs, not both",
            param_hint="--param",
        )

    return list(options)


def prompt_missing_params(route: Route, params: Union[None, List[str], Dict[str, Any]]):
    """
    Ask for every required segment the given parameters leave empty.

    Positional parameters are returned unchanged.

    Raises:
        click.Abort: If a prompt is cancelled
    """
    if isinstance(params, list):
        return params

    params = dict(params or {})
    defaults = route.config.default_parameters

    for segment in route.parameter_segments:
        if not segment.required or segment.name in params or defaults.get(segment.name) is not None:
            continue

        answer = questionary.text(
            f"Value for '{segment.name}' ({route.name()}):",
            validate=lambda text: bool(text.strip()) or "A value is required",
        ).ask()

        if answer is None:
            raise click.Abort()

        params[segment.name] = answer.strip()

    return params
