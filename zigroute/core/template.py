"""
URI Template Tokenizer

Splits a route template such as ``https://{team}.example.com/users/{user?}``
into literal text and parameter tokens. Everything else in the engine
(parameter segments, matching patterns, URL substitution) is built from the
token sequence.
"""

import re
from dataclasses import dataclass
from typing import List, Sequence, Union

SEGMENT_REGEX = re.compile(r'\{([^}?]+)(\??)\}')
SCHEME_REGEX = re.compile(r'^\w+://')

# Matchers for parameter values: one path component, never empty
VALUE_PATTERN = r'[^/?]+'


@dataclass(frozen=True)
class ParameterSegment:
    """A named placeholder in a template, e.g. ``{user?}`` -> ('user', False)."""

    name: str
    required: bool = True


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class Parameter:
    """
    A parameter token.

    ``leading_slash`` is set for optional parameters directly preceded by
    ``/``. The slash then belongs to the parameter, so both disappear
    together when no value is given (``pages/{subPage?}`` -> ``pages``).
    """

    name: str
    required: bool = True
    leading_slash: bool = False


Token = Union[Literal, Parameter]


def strip_trailing_slashes(value: str) -> str:
    """Strip trailing slashes, keeping a lone ``/`` for the root path."""
    # Differs from the JS client, whose root route compiles to ""
    stripped = value.rstrip("/")
    if not stripped and value.startswith("/"):
        return "/"
    return stripped


def strip_scheme(value: str) -> str:
    """Remove a leading ``scheme://`` prefix."""
    return SCHEME_REGEX.sub("", value, count=1)


def tokenize(template: str) -> List[Token]:
    """
    Split a template into literal and parameter tokens.

    Example:
        tokenize("pages/{page}/{section?}")
        # [Literal("pages/"), Parameter("page"), Parameter("section", False, True)]
    """
    tokens: List[Token] = []
    position = 0

    for match in SEGMENT_REGEX.finditer(template):
        literal = template[position:match.start()]
        required = not match.group(2)
        leading_slash = not required and literal.endswith("/")

        if leading_slash:
            literal = literal[:-1]
        if literal:
            tokens.append(Literal(literal))

        tokens.append(Parameter(match.group(1), required, leading_slash))
        position = match.end()

    if position < len(template):
        tokens.append(Literal(template[position:]))

    return tokens


def parameter_segments(tokens: Sequence[Token]) -> List[ParameterSegment]:
    """Parameter segments in order of appearance."""
    return [
        ParameterSegment(token.name, token.required)
        for token in tokens
        if isinstance(token, Parameter)
    ]


def segment_names(template: str) -> List[str]:
    """Names of every ``{name}`` / ``{name?}`` token, duplicates included."""
    return [match.group(1) for match in SEGMENT_REGEX.finditer(template)]


def _token_pattern(token: Token) -> str:
    if isinstance(token, Literal):
        return re.escape(token.text)
    if token.required:
        return f"({VALUE_PATTERN})"
    if token.leading_slash:
        return f"(/{VALUE_PATTERN})?"
    return f"({VALUE_PATTERN})?"


def build_pattern(template: str) -> str:
    """
    Regular expression matching URLs generated from ``template``.

    The scheme is dropped because matching is done on host + path (absolute
    mode) or path alone (relative mode). Each parameter becomes one
    capturing group, in order of appearance.

    Example:
        build_pattern("/pages/{page}/{section?}")
        # r"/pages/([^/?]+)(/[^/?]+)?"
    """
    return "".join(_token_pattern(token) for token in tokenize(strip_scheme(template)))
