"""PageSearch Page Configuration - Typed Search Page Settings.

A search page stores its settings as loosely typed multi-value fields.
``SearchConfiguration.from_record`` normalizes such a record into ordered
tuples and name/value mappings once, at load time, so nothing downstream
has to second-guess the shape of a value.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from pagesearch_core.errors import ConfigurationError

logger = logging.getLogger(__name__)


class SortDirection(Enum):
    """Sort direction as stored on the page and sent in requests."""

    ASCENDING = "Ascending"
    DESCENDING = "Descending"

    @property
    def backend(self) -> str:
        return "asc" if self is SortDirection.ASCENDING else "desc"

    @classmethod
    def parse(cls, value: Any) -> Optional["SortDirection"]:
        """Parse a stored or requested direction; unknown values yield None."""
        if isinstance(value, cls):
            return value
        for member in cls:
            if value == member.value:
                return member
        return None


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair."""

    lat: float
    lon: float

    def lat_lon(self) -> str:
        return f"{self.lat:g},{self.lon:g}"

    @classmethod
    def parse(cls, value: Any) -> Optional["GeoPoint"]:
        """Parse ``"lat,lon"``, a pair, or a mapping.

        Raises:
            ConfigurationError: If the value is present but not a valid point
        """
        if value is None or value == "":
            return None
        if isinstance(value, GeoPoint):
            return value
        if isinstance(value, str):
            parts = [p.strip() for p in value.split(",")]
        elif isinstance(value, Mapping):
            lat = value.get("lat", value.get("Latitude"))
            lon = value.get("lon", value.get("Longitude"))
            if lat is None and lon is None:
                return None
            parts = [lat, lon]
        elif isinstance(value, (list, tuple)):
            parts = list(value)
        else:
            raise ConfigurationError("GeoCentre", f"unsupported value {value!r}")

        if len(parts) != 2:
            raise ConfigurationError("GeoCentre", f"expected lat,lon but got {value!r}")
        try:
            lat, lon = float(parts[0]), float(parts[1])
        except (TypeError, ValueError) as e:
            raise ConfigurationError("GeoCentre", f"invalid coordinates {value!r}") from e
        if not -90 <= lat <= 90 or not -180 <= lon <= 180:
            raise ConfigurationError("GeoCentre", f"coordinates out of range {value!r}")
        return cls(lat=lat, lon=lon)


def _as_tuple(name: str, value: Any) -> Tuple[str, ...]:
    if value is None or value == "":
        return ()
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, Mapping):
        items = list(value.values())
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = list(value)
    else:
        raise ConfigurationError(name, f"expected a list of values, got {type(value).__name__}")

    result = []
    for item in items:
        item = str(item).strip()
        if item and item not in result:
            result.append(item)
    return tuple(result)


def _as_mapping(name: str, value: Any) -> Dict[str, Any]:
    if value is None or value == "":
        return {}
    if isinstance(value, Mapping):
        pairs = value.items()
    elif isinstance(value, (list, tuple)):
        try:
            pairs = [(k, v) for k, v in value]
        except (TypeError, ValueError) as e:
            raise ConfigurationError(name, "expected key/value pairs") from e
    else:
        raise ConfigurationError(name, f"expected a mapping, got {type(value).__name__}")

    result: Dict[str, Any] = {}
    for key, item in pairs:
        key = str(key).strip()
        if key:
            result[key] = item
    return result


def _as_weights(name: str, value: Any) -> Dict[str, float]:
    weights = {}
    for key, weight in _as_mapping(name, value).items():
        try:
            weights[key] = float(weight)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(name, f"invalid weight {weight!r} for {key}") from e
    return weights


def _as_labels(name: str, value: Any) -> Dict[str, str]:
    return {key: str(label) for key, label in _as_mapping(name, value).items()}


def _as_int(name: str, value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(name, f"expected an integer, got {value!r}") from e
    if number < 0:
        raise ConfigurationError(name, f"must not be negative, got {number}")
    return number


def _as_float(name: str, value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(name, f"expected a number, got {value!r}") from e


def _as_distance_sort(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    direction = str(value).strip().lower()
    if direction not in ("asc", "desc"):
        raise ConfigurationError("DistanceSort", f"expected asc or desc, got {value!r}")
    return direction


@dataclass(frozen=True)
class SearchConfiguration:
    """Search settings of a single search page.

    Attributes:
        title: Page title shown with results
        results_per_page: Page size, None to use the default
        sort_by: Default logical sort field
        sort_dir: Default sort direction
        query_type: Name of the query builder strategy
        start_with_listing: Show a match-all listing before any search
        search_types: Content types the page searches within
        search_on_fields: Logical fields the free-text term targets
        boost_fields: Logical field to relevance weight
        boost_match_fields: Raw ``field:value`` expression to weight
        facet_fields: Logical fields to facet on
        facet_mapping: Logical facet field to display title
        facet_queries: Display label to backend facet query expression
        min_facet_count: Minimum count for a facet term to be returned
        filter_fields: Whitelisted filter name to backend filter clause
        geo_restriction_field: Logical geo point field to restrict on
        geo_centre: Centre of the geo restriction
        geo_radius: Radius of the geo restriction
        distance_sort: Sort by distance from the centre, asc or desc
        search_trees: Container ids results are restricted to
    """

    title: str = ""
    results_per_page: Optional[int] = None
    sort_by: Optional[str] = None
    sort_dir: Optional[SortDirection] = None
    query_type: str = ""
    start_with_listing: bool = False
    search_types: Tuple[str, ...] = ()
    search_on_fields: Tuple[str, ...] = ()
    boost_fields: Dict[str, float] = field(default_factory=dict)
    boost_match_fields: Dict[str, float] = field(default_factory=dict)
    facet_fields: Tuple[str, ...] = ()
    facet_mapping: Dict[str, str] = field(default_factory=dict)
    facet_queries: Dict[str, str] = field(default_factory=dict)
    min_facet_count: Optional[int] = None
    filter_fields: Dict[str, str] = field(default_factory=dict)
    geo_restriction_field: Optional[str] = None
    geo_centre: Optional[GeoPoint] = None
    geo_radius: Optional[float] = None
    distance_sort: Optional[str] = None
    search_trees: Tuple[str, ...] = ()

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "SearchConfiguration":
        """Build a configuration from a stored page record.

        Keys use the stored field names (``SearchType``, ``BoostFields``...).

        Raises:
            ConfigurationError: If a value cannot be normalized
        """
        get = record.get
        config = cls(
            title=str(get("Title") or ""),
            results_per_page=_as_int("ResultsPerPage", get("ResultsPerPage")),
            sort_by=str(get("SortBy")) if get("SortBy") else None,
            sort_dir=SortDirection.parse(get("SortDir")),
            query_type=str(get("QueryType") or ""),
            start_with_listing=bool(get("StartWithListing")),
            search_types=_as_tuple("SearchType", get("SearchType")),
            search_on_fields=_as_tuple("SearchOnFields", get("SearchOnFields")),
            boost_fields=_as_weights("BoostFields", get("BoostFields")),
            boost_match_fields=_as_weights("BoostMatchFields", get("BoostMatchFields")),
            facet_fields=_as_tuple("FacetFields", get("FacetFields")),
            facet_mapping=_as_labels("FacetMapping", get("FacetMapping")),
            facet_queries=_as_labels("FacetQueries", get("FacetQueries")),
            min_facet_count=_as_int("MinFacetCount", get("MinFacetCount")),
            filter_fields=_as_labels("FilterFields", get("FilterFields")),
            geo_restriction_field=str(get("GeoRestrictionField")) if get("GeoRestrictionField") else None,
            geo_centre=GeoPoint.parse(get("GeoCentre")),
            geo_radius=_as_float("GeoRadius", get("GeoRadius")),
            distance_sort=_as_distance_sort(get("DistanceSort")),
            search_trees=_as_tuple("SearchTrees", get("SearchTrees")),
        )
        logger.debug(f"Loaded search configuration: {config.title or '(untitled)'}")
        return config


__all__ = ["SearchConfiguration", "SortDirection", "GeoPoint"]
