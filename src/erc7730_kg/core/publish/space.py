# erc7730_kg/core/publish/space.py
"""
Thin async client for the knowledge-graph space API.

Contract::

    POST /deploy                         {initialEditorAddress, spaceName} -> {spaceId}
    POST /space/{spaceId}/edit/calldata  {cid}                             -> {to, data}
    GET  /space/{spaceId}                                                  -> {entities: [...]}
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from erc7730_kg.contracts.graph import Calldata

logger = logging.getLogger(__name__)


class SpaceApiClient:
    def __init__(self, *, api_origin: str, timeout: Optional[float] = None) -> None:
        self._base = api_origin.rstrip("/")
        self._timeout = timeout

    @property
    def api_origin(self) -> str:
        return self._base

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            try:
                resp = await client.request(method, f"{self._base}{path}", **kwargs)
                resp.raise_for_status()
            except httpx.HTTPStatusError as ex:
                logger.warning(
                    "Request failed status=%s reason=%s",
                    ex.response.status_code,
                    ex.response.text,
                )
                raise
            return resp.json()

    async def create_space(self, *, editor_address: str, name: str) -> str:
        body = await self._request(
            "POST",
            "/deploy",
            json={"initialEditorAddress": editor_address, "spaceName": name},
        )
        space_id = body.get("spaceId") if isinstance(body, dict) else None
        if not space_id:
            raise ValueError(f"Space deployment response has no spaceId: {body!r}")
        return space_id

    async def edit_calldata(self, space_id: str, cid: str) -> Calldata:
        body = await self._request(
            "POST", f"/space/{space_id}/edit/calldata", json={"cid": cid}
        )
        try:
            return Calldata(to=body["to"], data=body["data"])
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Calldata response missing to/data: {body!r}") from exc

    async def get_space(self, space_id: str) -> dict[str, Any]:
        body = await self._request("GET", f"/space/{space_id}")
        return body if isinstance(body, dict) else {}
