# erc7730_kg/core/publish/publisher.py
"""
Knowledge-graph publisher.

Steps run strictly in order, each consuming the previous result:

1. upload the serialized ops to content-addressed storage -> cid
2. request edit calldata for the space                   -> {to, data}
3. sign and send the transaction                          -> tx hash

There is no retry and no rollback: a failure after step 1 leaves an
unreferenced upload behind.
"""
from __future__ import annotations

import logging
from typing import Any, Awaitable, Optional, TypeVar

from erc7730_kg.contracts.errors import KgError, PublishFailure
from erc7730_kg.contracts.graph import GraphOp, PublishResult
from erc7730_kg.contracts.identity import ContractIdentity
from erc7730_kg.core.graph.builder import TYPE_NAME, EntityGraphBuilder
from erc7730_kg.core.publish.ipfs import ContentStore
from erc7730_kg.core.publish.space import SpaceApiClient
from erc7730_kg.core.publish.wallet import Wallet
from erc7730_kg.core.resolver.resolver import require_identity

logger = logging.getLogger(__name__)

SPACE_NAME = TYPE_NAME

T = TypeVar("T")


async def _step(step: str, awaitable: Awaitable[T]) -> T:
    try:
        return await awaitable
    except KgError:
        raise
    except Exception as exc:
        logger.error("Publish step '%s' failed: %s", step, exc)
        raise PublishFailure(str(exc), step=step) from exc


class KnowledgeGraphPublisher:
    def __init__(
        self,
        *,
        store: ContentStore,
        spaces: SpaceApiClient,
        wallet: Wallet,
    ) -> None:
        self._store = store
        self._spaces = spaces
        self._wallet = wallet

    @property
    def author(self) -> str:
        return self._wallet.address

    async def ensure_space(self, space_id: Optional[str] = None) -> str:
        """Return ``space_id`` or deploy a new space edited by the wallet."""
        if space_id:
            logger.info("Using existing space: %s", space_id)
            return space_id

        logger.info("Creating new space for %s...", SPACE_NAME)
        created = await _step(
            "create-space",
            self._spaces.create_space(editor_address=self.author, name=SPACE_NAME),
        )
        logger.info("Created space: %s", created)
        return created

    async def publish(
        self,
        ops: list[GraphOp],
        *,
        space_id: str,
        edit_name: str,
    ) -> tuple[str, str]:
        """Publish ``ops`` to ``space_id``. Returns ``(cid, tx_hash)``."""
        cid = await _step(
            "upload",
            self._store.publish_edit(name=edit_name, ops=ops, author=self.author),
        )
        calldata = await _step("calldata", self._spaces.edit_calldata(space_id, cid))
        logger.info("Transaction target: %s", calldata.to)

        tx_hash = await _step(
            "transaction",
            self._wallet.send_transaction(to=calldata.to, data=calldata.data, value=0),
        )
        return cid, tx_hash


def edit_name_for(identity: ContractIdentity) -> str:
    return f"{SPACE_NAME}: {identity.contract_name}"


async def publish_descriptor(
    *,
    identity: ContractIdentity,
    descriptor: Any,
    publisher: KnowledgeGraphPublisher,
    builder: Optional[EntityGraphBuilder] = None,
    space_id: Optional[str] = None,
) -> PublishResult:
    """Validate, ensure the space, build the entity graph and publish it."""
    require_identity(identity)
    builder = builder or EntityGraphBuilder()

    target_space = await publisher.ensure_space(space_id)
    graph = builder.build(identity, descriptor)
    cid, tx_hash = await publisher.publish(
        graph.ops, space_id=target_space, edit_name=edit_name_for(identity)
    )

    result = PublishResult(
        space_id=target_space,
        entity_id=graph.entity_id,
        content_id=cid,
        transaction_hash=tx_hash,
    )
    logger.info(
        "Published %s: space=%s entity=%s cid=%s tx=%s",
        identity.contract_name,
        result.space_id,
        result.entity_id,
        result.content_id,
        result.transaction_hash,
    )
    return result
