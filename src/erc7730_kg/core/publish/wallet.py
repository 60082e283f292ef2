# erc7730_kg/core/publish/wallet.py
"""
Transaction signing and submission.

``RpcWallet`` signs legacy transactions locally with ``eth-account`` and
submits them through the network's JSON-RPC endpoint.
"""
from __future__ import annotations

import itertools
import logging
import re
from typing import Any, Optional, Protocol, runtime_checkable

import httpx
from eth_account import Account
from eth_utils import to_checksum_address

from erc7730_kg.contracts.errors import ValidationFailure

logger = logging.getLogger(__name__)

PRIVATE_KEY_PATTERN = re.compile(r"^0x[a-fA-F0-9]{64}$")


class RpcError(Exception):
    def __init__(self, method: str, error: Any) -> None:
        super().__init__(f"{method} failed: {error}")
        self.method = method
        self.error = error


def normalize_private_key(key: Optional[str]) -> str:
    """Return the key with a ``0x`` prefix.

    Raises:
        ValidationFailure: key missing or not 32 hex bytes
    """
    if not key:
        raise ValidationFailure(
            "Private key required. Provide via --private-key or PRIVATE_KEY environment variable.",
            missing=["private_key"],
        )
    key = key.strip()
    formatted = key if key.startswith("0x") else f"0x{key}"
    if not PRIVATE_KEY_PATTERN.match(formatted):
        raise ValidationFailure("Invalid private key format. Must be a 64-character hex string.")
    return formatted


@runtime_checkable
class Wallet(Protocol):
    @property
    def address(self) -> str: ...

    async def send_transaction(self, *, to: str, data: str, value: int = 0) -> str: ...


class RpcWallet:
    def __init__(
        self,
        *,
        private_key: str,
        rpc_url: str,
        timeout: Optional[float] = None,
    ) -> None:
        self._account = Account.from_key(normalize_private_key(private_key))
        self._rpc_url = rpc_url
        self._timeout = timeout
        self._ids = itertools.count(1)

    @property
    def address(self) -> str:
        return self._account.address

    async def _call(self, client: httpx.AsyncClient, method: str, *params: Any) -> Any:
        resp = await client.post(
            self._rpc_url,
            json={
                "jsonrpc": "2.0",
                "id": next(self._ids),
                "method": method,
                "params": list(params),
            },
        )
        resp.raise_for_status()
        body = resp.json()
        if body.get("error"):
            raise RpcError(method, body["error"])
        return body.get("result")

    async def send_transaction(self, *, to: str, data: str, value: int = 0) -> str:
        to = to_checksum_address(to)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            chain_id = int(await self._call(client, "eth_chainId"), 16)
            nonce = int(
                await self._call(client, "eth_getTransactionCount", self.address, "pending"),
                16,
            )
            gas_price = int(await self._call(client, "eth_gasPrice"), 16)
            gas = int(
                await self._call(
                    client,
                    "eth_estimateGas",
                    {"from": self.address, "to": to, "data": data, "value": hex(value)},
                ),
                16,
            )

            signed = self._account.sign_transaction(
                {
                    "chainId": chain_id,
                    "nonce": nonce,
                    "to": to,
                    "value": value,
                    "data": data,
                    "gas": gas,
                    "gasPrice": gas_price,
                }
            )
            raw = signed.raw_transaction.hex()
            if not raw.startswith("0x"):
                raw = f"0x{raw}"

            tx_hash = await self._call(client, "eth_sendRawTransaction", raw)

        logger.info("Sent transaction %s to %s (chain %s, nonce %s)", tx_hash, to, chain_id, nonce)
        return tx_hash
