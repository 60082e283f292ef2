# erc7730_kg/contracts/graph.py
"""
Knowledge-graph data model.

Ops are kept as plain dicts in the shape the remote API expects; the
pipeline never inspects them beyond collecting and serializing.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

GraphOp = dict[str, Any]


class Network(str, Enum):
    MAINNET = "MAINNET"
    TESTNET = "TESTNET"

    @classmethod
    def from_flag(cls, testnet: bool) -> Network:
        return cls.TESTNET if testnet else cls.MAINNET


class DataType(str, Enum):
    TEXT = "TEXT"
    NUMBER = "NUMBER"
    CHECKBOX = "CHECKBOX"
    URL = "URL"
    TIME = "TIME"
    POINT = "POINT"
    RELATION = "RELATION"


@dataclass(frozen=True)
class CreateResult:
    id: str
    ops: list[GraphOp] = field(default_factory=list)


@dataclass(frozen=True)
class PropertyValue:
    property: str
    value: str


@dataclass(frozen=True)
class MetadataEntity:
    id: str
    name: str
    description: str
    types: list[str]
    values: list[PropertyValue]


@dataclass(frozen=True)
class EntityGraph:
    """Ordered ops for one publish plus the ids minted along the way."""

    ops: list[GraphOp]
    entity: MetadataEntity
    type_id: str
    property_ids: dict[str, str]

    @property
    def entity_id(self) -> str:
        return self.entity.id


@dataclass(frozen=True)
class Calldata:
    to: str
    data: str


@dataclass(frozen=True)
class PublishResult:
    space_id: str
    entity_id: str
    content_id: str
    transaction_hash: str

    def to_dict(self) -> dict[str, str]:
        return {
            "spaceId": self.space_id,
            "entityId": self.entity_id,
            "cid": self.content_id,
            "txHash": self.transaction_hash,
        }


class LookupStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    NOT_SEARCHED = "not_searched"


@dataclass(frozen=True)
class LookupResult:
    status: LookupStatus
    contract_address: str
    chain_id: str
    space_id: str = ""
    entity_id: str = ""
    name: str = ""
    contract_name: str = ""
    descriptor: Optional[Any] = None

    @property
    def found(self) -> bool:
        return self.status is LookupStatus.FOUND

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.entity_id,
            "name": self.name,
            "contractAddress": self.contract_address,
            "chainId": self.chain_id,
            "contractName": self.contract_name,
            "erc7730Json": self.descriptor,
            "spaceId": self.space_id,
            "found": self.found,
            "status": self.status.value,
        }
