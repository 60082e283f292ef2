# erc7730_kg/core/publish/ipfs.py
"""
Content-addressed storage for edits.

Contract::

    POST {api_origin}/ipfs/upload-edit
    multipart: file=<serialized edit>
    -> { cid: str }
"""
from __future__ import annotations

import json
import logging
from typing import Iterable, Optional, Protocol, runtime_checkable

import httpx

from erc7730_kg.contracts.graph import GraphOp, Network
from erc7730_kg.core.graph.ids import generate_id

logger = logging.getLogger(__name__)


def serialize_edit(
    *, name: str, ops: Iterable[GraphOp], author: str, network: Network
) -> bytes:
    edit = {
        "id": generate_id(),
        "name": name,
        "ops": list(ops),
        "authors": [author],
        "network": network.value,
    }
    return json.dumps(edit, separators=(",", ":")).encode("utf-8")


@runtime_checkable
class ContentStore(Protocol):
    async def publish_edit(
        self, *, name: str, ops: list[GraphOp], author: str
    ) -> str: ...


class HypergraphIpfsStore:
    def __init__(
        self,
        *,
        api_origin: str,
        network: Network,
        timeout: Optional[float] = None,
    ) -> None:
        self._base = api_origin.rstrip("/")
        self._network = network
        self._timeout = timeout

    async def publish_edit(self, *, name: str, ops: list[GraphOp], author: str) -> str:
        payload = serialize_edit(name=name, ops=ops, author=author, network=self._network)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            resp = await client.post(
                f"{self._base}/ipfs/upload-edit",
                files={"file": ("edit.json", payload, "application/json")},
            )
            resp.raise_for_status()
            body = resp.json()

        cid = body.get("cid") if isinstance(body, dict) else None
        if not cid:
            raise ValueError(f"Upload response has no cid: {body!r}")
        logger.info("Uploaded edit '%s' (%d ops) as %s", name, len(ops), cid)
        return cid
