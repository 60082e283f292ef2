# erc7730_kg/core/graph/ops.py
"""
Graph operation builders.

Each ``create_*`` mints a fresh id and returns the ops needed to write the
node and its relations::

    UPDATE_ENTITY    {"entity": {"id", "values": [{"property", "value"}]}}
    CREATE_RELATION  {"relation": {"id", "type", "fromEntity", "toEntity"}}
"""
from __future__ import annotations

from typing import Iterable, Optional

from erc7730_kg.contracts.graph import CreateResult, DataType, GraphOp, PropertyValue
from erc7730_kg.core.graph import ids


def update_entity(entity_id: str, values: Iterable[PropertyValue]) -> GraphOp:
    return {
        "type": "UPDATE_ENTITY",
        "entity": {
            "id": entity_id,
            "values": [{"property": v.property, "value": v.value} for v in values],
        },
    }


def create_relation(*, from_entity: str, to_entity: str, relation_type: str) -> GraphOp:
    return {
        "type": "CREATE_RELATION",
        "relation": {
            "id": ids.generate_id(),
            "type": relation_type,
            "fromEntity": from_entity,
            "toEntity": to_entity,
        },
    }


def _header_values(name: str, description: Optional[str]) -> list[PropertyValue]:
    values = [PropertyValue(ids.NAME_PROPERTY, name)]
    if description:
        values.append(PropertyValue(ids.DESCRIPTION_PROPERTY, description))
    return values


def create_property(
    name: str,
    data_type: DataType = DataType.TEXT,
    *,
    description: Optional[str] = None,
) -> CreateResult:
    property_id = ids.generate_id()
    return CreateResult(
        id=property_id,
        ops=[
            update_entity(property_id, _header_values(name, description)),
            create_relation(
                from_entity=property_id,
                to_entity=ids.PROPERTY,
                relation_type=ids.TYPES_PROPERTY,
            ),
            create_relation(
                from_entity=property_id,
                to_entity=ids.VALUE_TYPES[data_type],
                relation_type=ids.VALUE_TYPE_PROPERTY,
            ),
        ],
    )


def create_type(
    name: str,
    properties: Iterable[str] = (),
    *,
    description: Optional[str] = None,
) -> CreateResult:
    type_id = ids.generate_id()
    ops = [
        update_entity(type_id, _header_values(name, description)),
        create_relation(
            from_entity=type_id,
            to_entity=ids.SCHEMA_TYPE,
            relation_type=ids.TYPES_PROPERTY,
        ),
    ]
    ops.extend(
        create_relation(
            from_entity=type_id, to_entity=prop, relation_type=ids.PROPERTIES
        )
        for prop in properties
    )
    return CreateResult(id=type_id, ops=ops)


def create_entity(
    name: str,
    *,
    description: Optional[str] = None,
    types: Iterable[str] = (),
    values: Iterable[PropertyValue] = (),
) -> CreateResult:
    entity_id = ids.generate_id()
    ops = [update_entity(entity_id, [*_header_values(name, description), *values])]
    ops.extend(
        create_relation(
            from_entity=entity_id, to_entity=type_id, relation_type=ids.TYPES_PROPERTY
        )
        for type_id in types
    )
    return CreateResult(id=entity_id, ops=ops)
