# erc7730_kg/core/graph/schema.py
"""
Schema resolution strategies.

``MintingSchemaStrategy`` creates every property and type afresh on each
publish, so repeated publishes leave duplicate schema nodes in the space.
``ExistingSchemaStrategy`` reuses ids already known for the target space
and only mints what is missing.
"""
from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional, Protocol, runtime_checkable

from erc7730_kg.contracts.graph import CreateResult, DataType
from erc7730_kg.core.graph import ops

logger = logging.getLogger(__name__)


@runtime_checkable
class SchemaStrategy(Protocol):
    def resolve_property(self, name: str, data_type: DataType) -> CreateResult: ...

    def resolve_type(self, name: str, properties: Iterable[str]) -> CreateResult: ...


class MintingSchemaStrategy:
    def resolve_property(self, name: str, data_type: DataType) -> CreateResult:
        return ops.create_property(name, data_type)

    def resolve_type(self, name: str, properties: Iterable[str]) -> CreateResult:
        return ops.create_type(name, properties)


class ExistingSchemaStrategy:
    """Resolve by name against ``known`` (name -> id), else mint."""

    def __init__(
        self,
        known: Optional[Mapping[str, str]] = None,
        fallback: Optional[SchemaStrategy] = None,
    ) -> None:
        self._known = dict(known or {})
        self._fallback = fallback or MintingSchemaStrategy()

    def resolve_property(self, name: str, data_type: DataType) -> CreateResult:
        if name in self._known:
            return CreateResult(id=self._known[name])
        created = self._fallback.resolve_property(name, data_type)
        self._known[name] = created.id
        return created

    def resolve_type(self, name: str, properties: Iterable[str]) -> CreateResult:
        if name in self._known:
            return CreateResult(id=self._known[name])
        created = self._fallback.resolve_type(name, properties)
        self._known[name] = created.id
        return created
