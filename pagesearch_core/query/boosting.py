"""PageSearch Boosting - Relevance Boost Composition.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations
import logging
from typing import Callable, Dict, Mapping, Optional, Tuple

from pagesearch_core.query.model import format_number

logger = logging.getLogger(__name__)


class FieldBooster:
    """Field-based relevance boosts.

    Only strictly positive weights are kept; a weight of zero or less
    removes the field's boost instead.
    """

    def __init__(self, field_boosts: Mapping[str, float] = None):
        self.field_boosts: Dict[str, float] = {}
        for field, boost in (field_boosts or {}).items():
            self.set_boost(field, boost)

    def get_boost(self, field: str) -> float:
        return self.field_boosts.get(field, 1.0)

    def set_boost(self, field: str, boost: float) -> bool:
        if boost <= 0:
            self.field_boosts.pop(field, None)
            return False
        self.field_boosts[field] = boost
        return True

    def apply(self, field: str) -> str:
        """Render ``field^boost``, or the bare field when unboosted."""
        if field in self.field_boosts:
            return f"{field}^{format_number(self.field_boosts[field])}"
        return field

    def items(self) -> Tuple[Tuple[str, float], ...]:
        return tuple(self.field_boosts.items())

    @classmethod
    def compose(
        cls,
        weights: Mapping[str, float],
        resolve: Callable[[str], Optional[str]],
    ) -> "FieldBooster":
        """Build boosts from logical weights.

        Args:
            weights: Logical field name to weight
            resolve: Maps a logical name to a backend name, or None

        Returns:
            Booster holding positive weights of resolvable fields
        """
        booster = cls()
        for field, weight in weights.items():
            if weight <= 0:
                logger.debug(f"Dropping non-positive boost {field}={weight}")
                continue
            physical = resolve(field)
            if physical is None:
                logger.debug(f"Dropping boost on unresolvable field {field}")
                continue
            booster.set_boost(physical, weight)
        return booster


__all__ = ["FieldBooster"]
