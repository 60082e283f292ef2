# erc7730_kg/core/lookup.py
"""
Lookup of previously published contract metadata.

Fetches a space's entity list and scans it for an entity whose
"Contract Address" and "Chain ID" values equal the query exactly. There is
no cross-space search: without a space id nothing is queried.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional

import httpx

from erc7730_kg.contracts.errors import ValidationFailure
from erc7730_kg.contracts.graph import LookupResult, LookupStatus
from erc7730_kg.core.graph.builder import CHAIN_ID, CONTRACT_ADDRESS, CONTRACT_NAME, ERC7730_JSON
from erc7730_kg.core.publish.space import SpaceApiClient

logger = logging.getLogger(__name__)


def _property_keys(label: str, property_ids: Optional[Mapping[str, str]]) -> set[str]:
    keys = {label}
    if property_ids and label in property_ids:
        keys.add(property_ids[label])
    return keys


def _values(entity: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    return [v for v in entity.get("values") or [] if isinstance(v, Mapping)]


def find_value(
    entity: Mapping[str, Any],
    label: str,
    property_ids: Optional[Mapping[str, str]] = None,
) -> Optional[str]:
    """First value of the property named ``label`` (or its known id) on ``entity``."""
    keys = _property_keys(label, property_ids)
    for value in _values(entity):
        if value.get("property") in keys:
            return value.get("value")
    return None


def has_value(
    entity: Mapping[str, Any],
    label: str,
    expected: str,
    property_ids: Optional[Mapping[str, str]] = None,
) -> bool:
    """True when any value recorded under ``label`` equals ``expected``."""
    keys = _property_keys(label, property_ids)
    return any(
        value.get("property") in keys and value.get("value") == expected
        for value in _values(entity)
    )


def parse_descriptor(raw: Optional[str]) -> Any:
    if not raw:
        return None
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        return raw


class LookupClient:
    def __init__(
        self,
        spaces: SpaceApiClient,
        *,
        property_ids: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._spaces = spaces
        self._property_ids = dict(property_ids or {})

    async def lookup(
        self,
        space_id: Optional[str],
        chain_id: str,
        contract_address: str,
    ) -> LookupResult:
        if not contract_address or not contract_address.strip():
            raise ValidationFailure("Contract address is required", missing=["contract_address"])
        if not chain_id or not chain_id.strip():
            raise ValidationFailure("Chain ID is required", missing=["chain_id"])

        if not space_id:
            logger.warning(
                "No space id given; searching across spaces is not supported. "
                "Use the space id printed by a previous publish."
            )
            return LookupResult(
                status=LookupStatus.NOT_SEARCHED,
                contract_address=contract_address,
                chain_id=chain_id,
            )

        not_found = LookupResult(
            status=LookupStatus.NOT_FOUND,
            contract_address=contract_address,
            chain_id=chain_id,
            space_id=space_id,
        )

        logger.info("Querying space %s for %s on chain %s", space_id, contract_address, chain_id)
        try:
            space = await self._spaces.get_space(space_id)
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Could not access space %s: %s", space_id, exc.response.status_code
            )
            return not_found
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Space query failed: %s", exc)
            return not_found

        for entity in space.get("entities") or []:
            if not isinstance(entity, Mapping):
                continue
            if not has_value(entity, CONTRACT_ADDRESS, contract_address, self._property_ids):
                continue
            if not has_value(entity, CHAIN_ID, chain_id, self._property_ids):
                continue

            logger.info("Found entity %s", entity.get("id"))
            return LookupResult(
                status=LookupStatus.FOUND,
                contract_address=contract_address,
                chain_id=chain_id,
                space_id=space_id,
                entity_id=entity.get("id") or "",
                name=entity.get("name") or "",
                contract_name=find_value(entity, CONTRACT_NAME, self._property_ids) or "",
                descriptor=parse_descriptor(
                    find_value(entity, ERC7730_JSON, self._property_ids)
                ),
            )

        logger.info("No matching entity in space %s", space_id)
        return not_found
