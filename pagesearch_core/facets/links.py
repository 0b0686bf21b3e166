"""PageSearch Facet Links - Query String Surgery for Facet Navigation.

Add-filter links append a bracketed ``filter[facet][]=value`` pair to the
current query string. Removal works on the canonical query string, where
each selection is encoded as ``filter%5Bfacet%5D%5Bi%5D=value``, and drops
exactly that pair so every other parameter keeps its position.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations
from typing import Union
from urllib.parse import quote_plus

from pagesearch_core.query.params import encode_pair


def quoted(value: str) -> str:
    return f'"{value}"'


def add_filter(query_string: str, filter_param: str, facet: str, value: str) -> str:
    """Append a facet selection to a query string.

    Args:
        query_string: Current query string
        filter_param: Parameter holding facet selections
        facet: Facet name
        value: Selected value

    Returns:
        Query string with the selection appended
    """
    pair = f"{filter_param}[{facet}][]={quote_plus(value)}"
    return f"{query_string}&{pair}" if query_string else pair


def remove_filter(
    query_string: str,
    filter_param: str,
    facet: str,
    index: Union[int, str, None],
    value: str,
) -> str:
    """Remove one facet selection from a canonical query string.

    Args:
        query_string: Canonical query string
        filter_param: Parameter holding facet selections
        facet: Facet name
        index: Key the value was sent under; None for ``filter[facet]=value``
        value: Selected value

    Returns:
        Query string without that selection; unchanged if it is absent
    """
    key = f"{filter_param}[{facet}]" if index is None else f"{filter_param}[{facet}][{index}]"
    target = encode_pair(key, value)
    parts = query_string.split("&") if query_string else []
    if target in parts:
        parts.remove(target)
    return "&".join(parts)


def link(base: str, query_string: str) -> str:
    """Join a page link and a query string."""
    if not base:
        return query_string
    return f"{base}?{query_string}" if query_string else base


__all__ = ["add_filter", "remove_filter", "quoted", "link"]
