"""PageSearch Geo Search - Pluggable Geo Restriction.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from pagesearch_core.query.builder import QueryBuilder


class GeoSearchStrategy(ABC):
    """Decides how to geo-restrict a query when no centre point is configured.

    An implementation may derive a centre from the term (a postcode, a
    place name) and call ``builder.restrict_near_point``.
    """

    @abstractmethod
    def update_geo_search(
        self,
        builder: "QueryBuilder",
        term: Optional[str],
        mapped_field: Optional[str],
        radius: float,
    ) -> None:
        pass


class NoopGeoSearch(GeoSearchStrategy):
    """Leaves the query unrestricted."""

    def update_geo_search(self, builder, term, mapped_field, radius) -> None:
        return None


__all__ = ["GeoSearchStrategy", "NoopGeoSearch"]
