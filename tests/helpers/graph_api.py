# tests/helpers/graph_api.py
"""In-memory stand-in for the knowledge-graph HTTP API."""
from __future__ import annotations

import json
from typing import Any

import httpx

from erc7730_kg.core.graph import ids


def _edit_from_multipart(body: bytes) -> dict[str, Any]:
    start, end = body.index(b"{"), body.rindex(b"}")
    return json.loads(body[start : end + 1])


class FakeGraphApi:
    """Records uploads and serves published entities back per space.

    Entity values are reported with property labels, the way the lookup
    endpoint presents them.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []
        self.edits: dict[str, dict[str, Any]] = {}
        self.spaces: dict[str, list[str]] = {}
        self.fail: dict[str, int] = {}
        self._spaces_created = 0

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.calls.append((request.method, path))

        if path in self.fail:
            return httpx.Response(self.fail[path], json={"error": "nope"})

        if request.method == "POST" and path == "/deploy":
            self._spaces_created += 1
            space_id = f"space-{self._spaces_created}"
            self.spaces[space_id] = []
            return httpx.Response(200, json={"spaceId": space_id})

        if request.method == "POST" and path == "/ipfs/upload-edit":
            edit = _edit_from_multipart(request.content)
            cid = f"ipfs://cid-{len(self.edits) + 1}"
            self.edits[cid] = edit
            return httpx.Response(200, json={"cid": cid})

        parts = path.strip("/").split("/")
        if request.method == "POST" and parts[0] == "space" and parts[2:] == ["edit", "calldata"]:
            cid = json.loads(request.content)["cid"]
            self.spaces.setdefault(parts[1], []).append(cid)
            return httpx.Response(200, json={"to": "0x" + "ab" * 20, "data": "0xdeadbeef"})

        if request.method == "GET" and parts[0] == "space" and len(parts) == 2:
            if parts[1] not in self.spaces:
                return httpx.Response(404, json={"error": "unknown space"})
            return httpx.Response(200, json={"entities": self.entities(parts[1])})

        return httpx.Response(404)

    def entities(self, space_id: str) -> list[dict[str, Any]]:
        names: dict[str, str] = {}
        updates: list[dict[str, Any]] = []
        for cid in self.spaces.get(space_id, []):
            for op in self.edits[cid]["ops"]:
                if op["type"] != "UPDATE_ENTITY":
                    continue
                updates.append(op["entity"])
                for value in op["entity"]["values"]:
                    if value["property"] == ids.NAME_PROPERTY:
                        names[op["entity"]["id"]] = value["value"]

        out = []
        for entity in updates:
            values = [
                {"property": names.get(v["property"], v["property"]), "value": v["value"]}
                for v in entity["values"]
                if v["property"] not in (ids.NAME_PROPERTY, ids.DESCRIPTION_PROPERTY)
            ]
            if values:
                out.append(
                    {"id": entity["id"], "name": names.get(entity["id"], ""), "values": values}
                )
        return out
