# erc7730_kg/core/graph/builder.py
"""
Entity graph builder.

Turns a contract identity plus its generated descriptor into the ops for
one "Smart Contract Metadata" entity::

    properties (4, TEXT) -> type -> entity
"""
from __future__ import annotations

import json
import logging
from typing import Any, Optional

from erc7730_kg.contracts.graph import DataType, EntityGraph, GraphOp, MetadataEntity, PropertyValue
from erc7730_kg.contracts.identity import ContractIdentity
from erc7730_kg.core.graph import ops
from erc7730_kg.core.graph.schema import MintingSchemaStrategy, SchemaStrategy
from erc7730_kg.core.resolver.resolver import require_identity

logger = logging.getLogger(__name__)

TYPE_NAME = "Smart Contract Metadata"

CONTRACT_ADDRESS = "Contract Address"
CHAIN_ID = "Chain ID"
CONTRACT_NAME = "Contract Name"
ERC7730_JSON = "ERC-7730 JSON"

PROPERTY_NAMES: tuple[str, ...] = (CONTRACT_ADDRESS, CHAIN_ID, CONTRACT_NAME, ERC7730_JSON)


def entity_name(identity: ContractIdentity) -> str:
    return f"{identity.contract_name} ({identity.chain_id}:{identity.contract_address})"


def entity_description(identity: ContractIdentity) -> str:
    return (
        f"ERC-7730 metadata for {identity.contract_name} contract "
        f"on chain {identity.chain_id}"
    )


def serialize_descriptor(descriptor: Any) -> str:
    return json.dumps(descriptor, indent=2)


class EntityGraphBuilder:
    def __init__(self, schema: Optional[SchemaStrategy] = None) -> None:
        self._schema = schema or MintingSchemaStrategy()

    def build(self, identity: ContractIdentity, descriptor: Any) -> EntityGraph:
        require_identity(identity)
        graph_ops: list[GraphOp] = []

        property_ids: dict[str, str] = {}
        for name in PROPERTY_NAMES:
            created = self._schema.resolve_property(name, DataType.TEXT)
            property_ids[name] = created.id
            graph_ops.extend(created.ops)

        type_result = self._schema.resolve_type(
            TYPE_NAME, [property_ids[n] for n in PROPERTY_NAMES]
        )
        graph_ops.extend(type_result.ops)

        values = [
            PropertyValue(property_ids[CONTRACT_ADDRESS], identity.contract_address),
            PropertyValue(property_ids[CHAIN_ID], identity.chain_id),
            PropertyValue(property_ids[CONTRACT_NAME], identity.contract_name),
            PropertyValue(property_ids[ERC7730_JSON], serialize_descriptor(descriptor)),
        ]
        name = entity_name(identity)
        description = entity_description(identity)
        created = ops.create_entity(
            name, description=description, types=[type_result.id], values=values
        )
        graph_ops.extend(created.ops)
        logger.info("Created entity %s (%d ops)", created.id, len(graph_ops))

        return EntityGraph(
            ops=graph_ops,
            entity=MetadataEntity(
                id=created.id,
                name=name,
                description=description,
                types=[type_result.id],
                values=values,
            ),
            type_id=type_result.id,
            property_ids=property_ids,
        )
