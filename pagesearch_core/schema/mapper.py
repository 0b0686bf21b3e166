"""PageSearch Field Name Mapper - Logical to Backend Field Resolution.

Resolves the logical field names used in page configuration into the
physical field names of the backend schema. Physical names follow the
dynamic-field suffix convention, where the suffix encodes the declared
field type (``Title`` declared as ``Varchar`` is indexed as ``Title_t``).

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from pagesearch_core.schema.registry import SchemaRegistry

logger = logging.getLogger(__name__)

SCORE_FIELD = "score"
GEO_POINT_TYPE = "GeoPoint"

# Fields every indexed content type carries.
SYSTEM_FIELDS: Dict[str, str] = {
    "ID": "Int",
    "Created": "Datetime",
    "LastEdited": "Datetime",
}

TYPE_SUFFIXES: Dict[str, str] = {
    "Varchar": "_t",
    "Text": "_t",
    "HTMLText": "_t",
    "HTMLVarchar": "_t",
    "Enum": "_s",
    "Int": "_i",
    "Float": "_f",
    "Double": "_f",
    "Decimal": "_f",
    "Currency": "_f",
    "Boolean": "_b",
    "Date": "_dt",
    "Datetime": "_dt",
    "MultiValueField": "_ms",
    GEO_POINT_TYPE: "_p",
}

DEFAULT_SUFFIX = "_t"
TEXT_SUFFIX = "_t"
SORTABLE_TEXT_SUFFIX = "_s"


@dataclass(frozen=True)
class FieldSpec:
    """A logical field resolved against a type set."""

    name: str
    physical_name: str
    field_type: str
    is_geo: bool = False


class FieldNameMapper:
    """Maps logical field names to backend field names.

    Field availability depends on the set of content types being searched,
    so every lookup takes the type set. Unresolvable names come back as
    ``None`` and callers skip them.
    """

    def __init__(
        self,
        registry: SchemaRegistry,
        geo_types: Optional[Iterable[str]] = None,
        cache_enabled: bool = True,
    ):
        """Initialize mapper.

        Args:
            registry: Schema source for declared fields
            geo_types: Additional field type names treated as geo points
            cache_enabled: Cache resolved field specs per ordered type list
        """
        self.registry = registry
        self.geo_types = {GEO_POINT_TYPE, *(geo_types or ())}
        self.cache_enabled = cache_enabled
        self._cache: Dict[Tuple[str, ...], List[FieldSpec]] = {}
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0

    def is_geo_type(self, field_type: str) -> bool:
        return field_type in self.geo_types

    def field_type(self, name: str, types: Sequence[str]) -> Optional[str]:
        """Declared type of a field in the first type that declares it."""
        for type_name in types:
            declared = self.registry.fields_of(type_name)
            if name in declared:
                return declared[name]
        return SYSTEM_FIELDS.get(name)

    def physical_name(self, name: str, field_type: str) -> str:
        return name + TYPE_SUFFIXES.get(field_type, DEFAULT_SUFFIX)

    def resolve(self, name: str, types: Sequence[str]) -> Optional[str]:
        """Resolve a logical field name for a type set.

        Args:
            name: Logical field name
            types: Content types being searched

        Returns:
            Backend field name, or None if no type declares the field
        """
        if not name:
            return None
        if name == SCORE_FIELD:
            return SCORE_FIELD
        field_type = self.field_type(name, types)
        if field_type is None:
            logger.debug(f"Field {name} not declared by {list(types)}")
            return None
        return self.physical_name(name, field_type)

    def sort_field_name(self, name: str, types: Sequence[str]) -> Optional[str]:
        """Resolve a field name usable for sorting.

        Tokenized text cannot be sorted on, so text fields map to their
        untokenized string copy.
        """
        physical = self.resolve(name, types)
        if physical is None or physical == SCORE_FIELD:
            return physical
        field_type = self.field_type(name, types)
        if self.is_geo_type(field_type):
            return None
        if physical.endswith(TEXT_SUFFIX):
            return physical[: -len(TEXT_SUFFIX)] + SORTABLE_TEXT_SUFFIX
        return physical

    def field_specs(self, types: Sequence[str]) -> List[FieldSpec]:
        """All fields declared across a type set, ordered by name.

        The first type declaring a field decides its physical name, so specs
        are cached per ordered type list.
        """
        key = tuple(types)
        with self._lock:
            if self.cache_enabled and key in self._cache:
                self._hits += 1
                return list(self._cache[key])
            self._misses += 1

        declared: Dict[str, str] = dict(SYSTEM_FIELDS)
        geo_names = set()
        for type_name in types:
            for name, field_type in self.registry.fields_of(type_name).items():
                declared.setdefault(name, field_type)
                if self.is_geo_type(field_type):
                    geo_names.add(name)

        specs = [
            FieldSpec(
                name=name,
                physical_name=self.physical_name(name, field_type),
                field_type=field_type,
                is_geo=name in geo_names,
            )
            for name, field_type in sorted(declared.items())
        ]

        if self.cache_enabled:
            with self._lock:
                self._cache[key] = specs
        return list(specs)

    def selectable_fields(
        self,
        types: Sequence[str],
        exclude_geo: bool = True,
    ) -> Dict[str, str]:
        """Fields that can be chosen for sorting and searching.

        Args:
            types: Content types being searched
            exclude_geo: Drop geo point fields, which cannot be searched on

        Returns:
            Ordered mapping of logical name to logical name
        """
        fields = {
            spec.name: spec.name
            for spec in self.field_specs(types)
            if not (exclude_geo and spec.is_geo)
        }
        fields[SCORE_FIELD] = SCORE_FIELD
        return dict(sorted(fields.items()))

    def geo_selectable_fields(self, types: Sequence[str]) -> Dict[str, str]:
        """Geo point fields declared across a type set."""
        return {spec.name: spec.name for spec in self.field_specs(types) if spec.is_geo}

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    def cache_stats(self) -> Dict[str, int]:
        return {"entries": len(self._cache), "hits": self._hits, "misses": self._misses}


__all__ = [
    "FieldNameMapper",
    "FieldSpec",
    "SCORE_FIELD",
    "GEO_POINT_TYPE",
    "SYSTEM_FIELDS",
    "TYPE_SUFFIXES",
]
