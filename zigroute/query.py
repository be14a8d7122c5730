"""
ZIGROUTE Query-String Codec

Encodes and decodes the query part of generated URLs.

Encoding rules (they mirror what the server side expects):
- key order is preserved as given, never sorted
- None values are skipped entirely, including inside lists
- lists use explicit indices: ``arr[0]=1&arr[1]=2``
- mappings use bracketed keys: ``filter[status]=open``
- keys and values are percent-encoded strictly; brackets stay literal

Usage:
    from zigroute.query import stringify, parse

    stringify({"q": "a b", "arr": [1, 2]})   # "q=a%20b&arr[0]=1&arr[1]=2"
    parse("?q=a%20b&arr[0]=1&arr[1]=2")      # {"q": "a b", "arr": ["1", "2"]}
"""

import re
from typing import Any, Dict, List, Mapping
from urllib.parse import quote, unquote_plus

_INDEXED_KEY = re.compile(r'^(?P<name>[^\[\]]+)\[(?P<index>\d+)\]$')
_NESTED_KEY = re.compile(r'^(?P<name>[^\[\]]+)\[(?P<sub>[^\[\]]+)\]$')


def encode(value: str) -> str:
    """Percent-encode a key or value, including ``!'()*``."""
    return quote(value, safe="")


def encode_uri_component(value: str) -> str:
    """Percent-encode a path segment value, leaving ``!~*'()`` readable."""
    return quote(value, safe="!~*'()")


def to_string(value: Any) -> str:
    """
    Render a scalar the way URLs expect it.

    Booleans become ``true``/``false`` and integral floats lose their
    fractional part, so ``4.0`` renders as ``4``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _encode_pairs(prefix: str, value: Any) -> List[str]:
    if value is None:
        return []

    if isinstance(value, (list, tuple)):
        pairs = []
        index = 0
        for item in value:
            if item is None:
                continue
            pairs.extend(_encode_pairs(f"{prefix}[{index}]", item))
            index += 1
        return pairs

    if isinstance(value, Mapping):
        pairs = []
        for key, item in value.items():
            pairs.extend(_encode_pairs(f"{prefix}[{encode(str(key))}]", item))
        return pairs

    return [f"{prefix}={encode(to_string(value))}"]


def stringify(params: Mapping[str, Any]) -> str:
    """
    Encode a mapping into a query string (without the leading ``?``).

    Args:
        params: Mapping of query keys to scalars, lists or mappings

    Returns:
        The encoded query string, empty when every value was skipped
    """
    pairs: List[str] = []
    for key, value in params.items():
        pairs.extend(_encode_pairs(encode(str(key)), value))
    return "&".join(pairs)


def parse(search: str) -> Dict[str, Any]:
    """
    Decode a query string produced by stringify().

    A leading ``?`` is ignored. Indexed keys are rebuilt as lists ordered by
    index, bracketed keys as dicts. All values decode to strings; a key
    without ``=`` decodes to an empty string. Repeated plain keys keep the
    last value.

    Args:
        search: Query string, with or without the leading ``?``

    Returns:
        Decoded parameters in order of first appearance
    """
    result: Dict[str, Any] = {}
    indexed: Dict[str, Dict[int, str]] = {}

    for pair in search.lstrip("?").split("&"):
        if not pair:
            continue

        raw_key, _, raw_value = pair.partition("=")
        key = unquote_plus(raw_key)
        value = unquote_plus(raw_value)

        match = _INDEXED_KEY.match(key)
        if match:
            name = match.group("name")
            indexed.setdefault(name, {})[int(match.group("index"))] = value
            result.setdefault(name, [])
            continue

        match = _NESTED_KEY.match(key)
        if match:
            nested = result.get(match.group("name"))
            if not isinstance(nested, dict):
                nested = result[match.group("name")] = {}
            nested[match.group("sub")] = value
            continue

        result[key] = value

    for name, items in indexed.items():
        result[name] = [items[index] for index in sorted(items)]

    return result
