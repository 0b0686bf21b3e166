"""PageSearch Query Parameters - Bracket-Style Query String Codec.

Request parameters use bracketed keys for nested values, so
``filter[category][]=shoes`` carries a list of selected values per facet.
``parse_query`` decodes such a query string into nested dicts and lists and
``build_query`` encodes them back with explicit list indexes
(``filter%5Bcategory%5D%5B0%5D=shoes``). Links for facet navigation are
derived from the rebuilt form, which is why removal links can locate a
single selection by key and index.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Tuple
from urllib.parse import parse_qsl, quote_plus

_KEY_PATTERN = re.compile(r"^([^\[\]]+)((?:\[[^\[\]]*\])*)$")
_SEGMENT_PATTERN = re.compile(r"\[([^\[\]]*)\]")


def _assign(container: Dict[str, Any], key: str, path: List[str], value: str) -> None:
    if not path:
        container[key] = value
        return

    head, rest = path[0], path[1:]
    child = container.get(key)

    # Lists only occur at the leaf; inner numeric segments act as dict keys.
    if not rest and (head == "" or head.isdigit()):
        if not isinstance(child, list):
            child = []
            container[key] = child
        child.append(value)
        return

    if not isinstance(child, dict):
        child = {}
        container[key] = child
    _assign(child, head, rest, value)


def parse_query(query_string: str) -> Dict[str, Any]:
    """Decode a query string into nested parameters.

    Args:
        query_string: Raw query string, without the leading ``?``

    Returns:
        Ordered mapping; bracketed keys become nested dicts and lists
    """
    params: Dict[str, Any] = {}
    for key, value in parse_qsl(query_string or "", keep_blank_values=True):
        match = _KEY_PATTERN.match(key)
        if not match or not match.group(2):
            params[key] = value
            continue
        path = _SEGMENT_PATTERN.findall(match.group(2))
        _assign(params, match.group(1), path, value)
    return params


def _flatten(prefix: str, value: Any, pairs: List[Tuple[str, str]]) -> None:
    if value is None:
        return
    if isinstance(value, dict):
        for key, item in value.items():
            _flatten(f"{prefix}[{key}]", item, pairs)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _flatten(f"{prefix}[{index}]", item, pairs)
    elif isinstance(value, bool):
        pairs.append((prefix, "1" if value else "0"))
    else:
        pairs.append((prefix, str(value)))


def encode_pair(key: str, value: str) -> str:
    """Encode a single ``key=value`` pair the way ``build_query`` does."""
    return f"{quote_plus(key)}={quote_plus(value)}"


def build_query(params: Dict[str, Any]) -> str:
    """Encode nested parameters, indexing list entries explicitly."""
    pairs: List[Tuple[str, str]] = []
    for key, value in params.items():
        _flatten(key, value, pairs)
    return "&".join(encode_pair(key, value) for key, value in pairs)


def canonical_query(query_string: str) -> str:
    """Rebuild a query string into its canonical encoded form."""
    return build_query(parse_query(query_string))


__all__ = ["parse_query", "build_query", "canonical_query", "encode_pair"]
