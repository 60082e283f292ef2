"""Knowledge-graph operation building."""

from erc7730_kg.core.graph.builder import EntityGraphBuilder
from erc7730_kg.core.graph.schema import (
    ExistingSchemaStrategy,
    MintingSchemaStrategy,
    SchemaStrategy,
)

__all__ = [
    "EntityGraphBuilder",
    "ExistingSchemaStrategy",
    "MintingSchemaStrategy",
    "SchemaStrategy",
]
