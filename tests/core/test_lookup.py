from __future__ import annotations

import json

import httpx
import pytest

from erc7730_kg.contracts.errors import ValidationFailure
from erc7730_kg.contracts.graph import LookupStatus
from erc7730_kg.core.lookup import LookupClient, find_value, has_value, parse_descriptor
from erc7730_kg.core.publish.space import SpaceApiClient

ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"


def _entity(entity_id, address, chain, descriptor='{"a": 1}', name="Token"):
    return {
        "id": entity_id,
        "name": f"{name} ({chain}:{address})",
        "values": [
            {"property": "Contract Address", "value": address},
            {"property": "Chain ID", "value": chain},
            {"property": "Contract Name", "value": name},
            {"property": "ERC-7730 JSON", "value": descriptor},
        ],
    }


@pytest.fixture
def client() -> LookupClient:
    return LookupClient(SpaceApiClient(api_origin="http://graph.test"))


def _serve(mock_http, entities, status=200):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/space/s1"
        return httpx.Response(status, json={"entities": entities})

    mock_http(handler)


class TestLookupClient:
    @pytest.mark.asyncio
    async def test_no_space_is_not_searched(self, mock_http, client):
        def handler(request):
            raise AssertionError("no request expected")

        mock_http(handler)

        result = await client.lookup(None, "1", ADDRESS)

        assert result.status is LookupStatus.NOT_SEARCHED
        assert not result.found
        assert result.to_dict()["found"] is False

    @pytest.mark.asyncio
    async def test_finds_matching_entity(self, mock_http, client):
        _serve(
            mock_http,
            [
                _entity("e0", ADDRESS, "1"),
                _entity("e1", ADDRESS, "11155111", descriptor=json.dumps({"x": [1, 2]})),
                _entity("e2", ADDRESS, "11155111"),
            ],
        )

        result = await client.lookup("s1", "11155111", ADDRESS)

        assert result.status is LookupStatus.FOUND
        assert result.entity_id == "e1"
        assert result.contract_name == "Token"
        assert result.descriptor == {"x": [1, 2]}
        assert result.space_id == "s1"

    @pytest.mark.asyncio
    async def test_address_match_is_exact(self, mock_http, client):
        _serve(mock_http, [_entity("e0", ADDRESS.lower(), "1")])

        result = await client.lookup("s1", "1", ADDRESS)

        assert result.status is LookupStatus.NOT_FOUND

    @pytest.mark.asyncio
    async def test_matches_any_repeated_value(self, mock_http, client):
        entity = _entity("e3", "0x" + "11" * 20, "1")
        entity["values"].append({"property": "Contract Address", "value": ADDRESS})
        entity["values"].append({"property": "Chain ID", "value": "10"})
        _serve(mock_http, [entity])

        result = await client.lookup("s1", "10", ADDRESS)

        assert result.status is LookupStatus.FOUND
        assert result.entity_id == "e3"

    @pytest.mark.asyncio
    async def test_raw_descriptor_fallback(self, mock_http, client):
        _serve(mock_http, [_entity("e0", ADDRESS, "1", descriptor="not json")])

        result = await client.lookup("s1", "1", ADDRESS)

        assert result.descriptor == "not json"

    @pytest.mark.asyncio
    async def test_matches_known_property_ids(self, mock_http):
        entity = {
            "id": "e9",
            "values": [
                {"property": "pa", "value": ADDRESS},
                {"property": "pc", "value": "1"},
            ],
        }
        _serve(mock_http, [entity])
        client = LookupClient(
            SpaceApiClient(api_origin="http://graph.test"),
            property_ids={"Contract Address": "pa", "Chain ID": "pc"},
        )

        result = await client.lookup("s1", "1", ADDRESS)

        assert result.entity_id == "e9"
        assert result.descriptor is None

    @pytest.mark.asyncio
    async def test_http_error_is_not_found(self, mock_http, client):
        _serve(mock_http, [], status=404)

        result = await client.lookup("s1", "1", ADDRESS)

        assert result.status is LookupStatus.NOT_FOUND

    @pytest.mark.asyncio
    async def test_requires_address_and_chain(self, client):
        with pytest.raises(ValidationFailure, match="Contract address"):
            await client.lookup("s1", "1", " ")
        with pytest.raises(ValidationFailure, match="Chain ID"):
            await client.lookup("s1", "", ADDRESS)


@pytest.mark.parametrize(
    "raw, expected",
    [(None, None), ("", None), ('{"a": 1}', {"a": 1}), ("[1", "[1")],
)
def test_parse_descriptor(raw, expected):
    assert parse_descriptor(raw) == expected


def test_has_value_checks_every_pair():
    entity = {
        "values": [
            {"property": "Chain ID", "value": "1"},
            {"property": "Chain ID", "value": "10"},
            {"property": "Contract Name", "value": "10"},
        ]
    }

    assert has_value(entity, "Chain ID", "10")
    assert not has_value(entity, "Chain ID", "5")
    assert find_value(entity, "Chain ID") == "1"
