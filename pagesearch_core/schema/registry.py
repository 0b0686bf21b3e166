"""PageSearch Schema Registry - Content Type Field Introspection.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Dict, List, Mapping, Optional


class SchemaRegistry(ABC):
    """Abstract content-type schema source."""

    @abstractmethod
    def fields_of(self, type_name: str) -> Dict[str, str]:
        """Return the declared ``{field_name: field_type}`` of a type.

        Unknown types yield an empty mapping.
        """
        pass

    def has_type(self, type_name: str) -> bool:
        return bool(self.fields_of(type_name))

    def type_names(self) -> List[str]:
        return []


class InMemorySchemaRegistry(SchemaRegistry):
    """In-memory schema registry."""

    def __init__(self, types: Optional[Mapping[str, Mapping[str, str]]] = None):
        self._types: Dict[str, Dict[str, str]] = {}
        for name, fields in (types or {}).items():
            self.register(name, fields)

    def register(self, type_name: str, fields: Mapping[str, str]) -> None:
        self._types[type_name] = dict(fields)

    def fields_of(self, type_name: str) -> Dict[str, str]:
        return dict(self._types.get(type_name, {}))

    def has_type(self, type_name: str) -> bool:
        return type_name in self._types

    def type_names(self) -> List[str]:
        return sorted(self._types)


__all__ = ["SchemaRegistry", "InMemorySchemaRegistry"]
