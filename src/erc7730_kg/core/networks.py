# erc7730_kg/core/networks.py
"""
Network endpoint configuration.

Expected YAML::

    networks:
      mainnet:
        api_origin: "${KG_MAINNET_API:-https://hypergraph-v2.up.railway.app}"
        rpc_url: "${KG_MAINNET_RPC:-https://rpc-geo-genesis-h0q2s21xx8.t.conduit.xyz}"
      testnet:
        api_origin: "https://hypergraph-v2-testnet.up.railway.app"
        rpc_url: "https://sepolia.base.org"

Later files override earlier ones per network. Networks absent from every
file fall back to the built-in defaults.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from erc7730_kg.contracts.graph import Network
from erc7730_kg.core.loader import load_yaml_files, substitute_env_vars

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NetworkSpec:
    network: Network
    api_origin: str
    rpc_url: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "api_origin", self.api_origin.rstrip("/"))


DEFAULT_NETWORKS: dict[Network, NetworkSpec] = {
    Network.MAINNET: NetworkSpec(
        network=Network.MAINNET,
        api_origin="https://hypergraph-v2.up.railway.app",
        rpc_url="https://rpc-geo-genesis-h0q2s21xx8.t.conduit.xyz",
    ),
    Network.TESTNET: NetworkSpec(
        network=Network.TESTNET,
        api_origin="https://hypergraph-v2-testnet.up.railway.app",
        rpc_url="https://sepolia.base.org",
    ),
}


@dataclass(frozen=True)
class NetworksConfig:
    networks: dict[Network, NetworkSpec] = field(
        default_factory=lambda: dict(DEFAULT_NETWORKS)
    )

    def get(self, network: Network) -> NetworkSpec:
        return self.networks[network]


def load_networks_config(patterns: Iterable[str]) -> NetworksConfig:
    """
    Load network endpoints from YAML files, merged over the defaults.

    Raises:
        ValueError: On unknown network names, missing fields or unset env vars
    """
    raw: dict[str, dict[str, Any]] = {}
    for data in load_yaml_files(patterns):
        for name, spec in (data.get("networks") or {}).items():
            raw.setdefault(name.lower(), {}).update(spec or {})

    networks = dict(DEFAULT_NETWORKS)
    for name, spec in raw.items():
        try:
            network = Network(name.upper())
        except ValueError as exc:
            raise ValueError(f"Unknown network '{name}'") from exc

        try:
            spec = substitute_env_vars(spec)
        except ValueError as exc:
            raise ValueError(f"Network '{name}' config error: {exc}") from exc

        default = DEFAULT_NETWORKS[network]
        networks[network] = NetworkSpec(
            network=network,
            api_origin=spec.get("api_origin") or default.api_origin,
            rpc_url=spec.get("rpc_url") or default.rpc_url,
        )

    logger.debug(
        "Network endpoints: %s",
        {n.value: s.api_origin for n, s in networks.items()},
    )
    return NetworksConfig(networks=networks)
