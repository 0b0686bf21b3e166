"""PageSearch Search Request - Per-Call Request Parameters.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Tuple, Union
from urllib.parse import urlsplit

from pagesearch_core.errors import QueryStringError
from pagesearch_core.query.params import parse_query

if TYPE_CHECKING:
    from pagesearch_core.config.page import SearchConfiguration

logger = logging.getLogger(__name__)

MATCH_ALL = "*"

# Position or name of a value within a bracketed parameter.
ParamKey = Union[int, str, None]


def _scalar(value: Any) -> Optional[str]:
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    elif isinstance(value, Mapping):
        value = next(iter(value.values()), None)
    if value is None:
        return None
    return str(value)


def _offset(name: str, value: Any) -> Optional[int]:
    raw = _scalar(value)
    if raw is None or raw == "":
        return None
    try:
        number = int(raw)
    except ValueError:
        logger.debug(f"Ignoring non-numeric {name}={raw!r}")
        return None
    return max(number, 0)


def _keyed_values(value: Any) -> Tuple[Tuple[str, ...], Tuple[ParamKey, ...]]:
    """Non-empty values with the parameter key each was sent under.

    List entries keep their position, named entries their name, and a
    single unbracketed value gets the key None.
    """
    if value is None:
        return (), ()
    if isinstance(value, Mapping):
        items = [(str(k), v) for k, v in value.items()]
    elif isinstance(value, (list, tuple)):
        items = list(enumerate(value))
    else:
        items = [(None, value)]

    kept = [(key, str(v)) for key, v in items if v is not None and str(v) != ""]
    return tuple(v for _, v in kept), tuple(key for key, _ in kept)


def _values(value: Any) -> Tuple[str, ...]:
    return _keyed_values(value)[0]


@dataclass(frozen=True)
class SearchRequest:
    """Parameters of a single search call.

    Attributes:
        search: Free-text term (``Search``)
        sort_by: Sort field override (``SortBy``)
        sort_dir: ``Ascending`` or ``Descending`` (``SortDir``)
        search_type: Single type override (``SearchType``)
        start: Pagination offset (``start``)
        limit: Page size (``limit``)
        filters: Active facet selections, facet name to ordered values
        filter_keys: Parameter key of each selected value, parallel to ``filters``
        field_filters: Requested whitelist filter names (``FieldFilter[]``)
        query_string: Raw query string the request came from
        request_uri: Path and query of the current request
    """

    search: Optional[str] = None
    sort_by: Optional[str] = None
    sort_dir: Optional[str] = None
    search_type: Optional[str] = None
    start: Optional[int] = None
    limit: Optional[int] = None
    filters: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    filter_keys: Mapping[str, Tuple[ParamKey, ...]] = field(default_factory=dict)
    field_filters: Tuple[str, ...] = ()
    query_string: str = ""
    request_uri: str = ""

    def __post_init__(self):
        filters = {str(name): tuple(values) for name, values in self.filters.items()}
        keys = {}
        for name, values in filters.items():
            given = tuple(self.filter_keys.get(name, ()))
            keys[name] = given if len(given) == len(values) else tuple(range(len(values)))
        object.__setattr__(self, "filters", MappingProxyType(filters))
        object.__setattr__(self, "filter_keys", MappingProxyType(keys))
        object.__setattr__(self, "field_filters", tuple(self.field_filters))

    @property
    def active_facets(self) -> Dict[str, List[str]]:
        return {name: list(values) for name, values in self.filters.items()}

    def selections(self) -> List[Tuple[str, str]]:
        """Active ``(facet, value)`` pairs in request order."""
        return [(name, value) for name, values in self.filters.items() for value in values]

    def selection_keys(self) -> Dict[str, List[ParamKey]]:
        """Parameter key of every active selection, facet name to keys."""
        return {name: list(keys) for name, keys in self.filter_keys.items()}

    @classmethod
    def from_params(
        cls,
        params: Mapping[str, Any],
        query_string: str = "",
        request_uri: str = "",
        filter_param: str = "filter",
    ) -> "SearchRequest":
        """Build a request from decoded parameters.

        Args:
            params: Parameters as produced by ``parse_query``
            query_string: Raw query string, kept for link construction
            request_uri: Path and query of the current request
            filter_param: Parameter holding facet selections
        """
        filters: Dict[str, Tuple[str, ...]] = {}
        filter_keys: Dict[str, Tuple[ParamKey, ...]] = {}
        selected = params.get(filter_param)
        if isinstance(selected, Mapping):
            for name, values in selected.items():
                values, keys = _keyed_values(values)
                if values:
                    filters[str(name)] = values
                    filter_keys[str(name)] = keys

        return cls(
            search=_scalar(params.get("Search")),
            sort_by=_scalar(params.get("SortBy")) or None,
            sort_dir=_scalar(params.get("SortDir")) or None,
            search_type=_scalar(params.get("SearchType")) or None,
            start=_offset("start", params.get("start")),
            limit=_offset("limit", params.get("limit")),
            filters=filters,
            filter_keys=filter_keys,
            field_filters=_values(params.get("FieldFilter")),
            query_string=query_string,
            request_uri=request_uri,
        )

    @classmethod
    def from_query_string(
        cls,
        query_string: str,
        path: str = "",
        filter_param: str = "filter",
    ) -> "SearchRequest":
        query_string = (query_string or "").lstrip("?")
        uri = f"{path}?{query_string}" if query_string else path
        return cls.from_params(
            parse_query(query_string),
            query_string=query_string,
            request_uri=uri,
            filter_param=filter_param,
        )

    @classmethod
    def from_uri(cls, uri: str, filter_param: str = "filter") -> "SearchRequest":
        """Build a request from a request URI.

        Raises:
            QueryStringError: If the URI cannot be parsed
        """
        try:
            parts = urlsplit(uri)
        except ValueError as e:
            raise QueryStringError(uri, e) from e
        return cls.from_params(
            parse_query(parts.query),
            query_string=parts.query,
            request_uri=uri,
            filter_param=filter_param,
        )

    def as_listing(self, config: "SearchConfiguration") -> "SearchRequest":
        """Match-all variant used for an initial listing."""
        sort_dir = self.sort_dir
        if sort_dir is None and config.sort_dir is not None:
            sort_dir = config.sort_dir.value
        return replace(
            self,
            search=MATCH_ALL,
            sort_by=self.sort_by or config.sort_by,
            sort_dir=sort_dir,
        )


__all__ = ["SearchRequest", "MATCH_ALL"]
