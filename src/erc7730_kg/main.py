# erc7730_kg/main.py
"""
Command-line entry point.

Subcommands::

    erc7730-kg resolve   [--deployment-id ID] [--chain-id N]
    erc7730-kg generate  [--deployment-id ID] [--output PATH]
    erc7730-kg publish   [--deployment-id ID] [--erc7730-file PATH] [--space-id ID] [--testnet]
    erc7730-kg fetch     --contract ADDR --chain-id N [--space-id ID] [--testnet]
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Optional, Sequence

from erc7730_kg.contracts.errors import KgError
from erc7730_kg.contracts.graph import Network
from erc7730_kg.contracts.identity import Resolution
from erc7730_kg.core.config import Settings, settings as default_settings
from erc7730_kg.core.generator.invoker import create_invoker, load_descriptor, output_path_for
from erc7730_kg.core.logging import configure_logging
from erc7730_kg.core.lookup import LookupClient
from erc7730_kg.core.networks import NetworkSpec, load_networks_config
from erc7730_kg.core.publish.ipfs import HypergraphIpfsStore
from erc7730_kg.core.publish.publisher import KnowledgeGraphPublisher, publish_descriptor
from erc7730_kg.core.publish.space import SpaceApiClient
from erc7730_kg.core.publish.wallet import RpcWallet
from erc7730_kg.core.resolver.resolver import IdentityResolver, require_identity

logger = logging.getLogger(__name__)


# -- Parser --------------------------------------------------------------------


def _add_identity_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--deployment-id", default=None, help="Ignition deployment id")
    parser.add_argument("--chain-id", default=None, help="Chain id (overrides detection)")
    parser.add_argument("--contract", default=None, help="Deployed contract address")
    parser.add_argument("--contract-name", default=None, help="Contract name")


def _add_network_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--space-id", default=None, help="Knowledge-graph space id")
    parser.add_argument(
        "--testnet", action="store_true", help="Use testnet instead of mainnet"
    )
    parser.add_argument("--json", action="store_true", help="Output results as JSON")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="erc7730-kg")
    parser.add_argument("--log-level", default=None, help="Override KG_LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve_parser = subparsers.add_parser("resolve", help="Resolve contract identity")
    _add_identity_options(resolve_parser)
    resolve_parser.add_argument("--json", action="store_true", help="Output results as JSON")

    generate_parser = subparsers.add_parser(
        "generate", help="Generate the ERC-7730 descriptor"
    )
    _add_identity_options(generate_parser)
    generate_parser.add_argument("--output", default=None, help="Descriptor output path")

    publish_parser = subparsers.add_parser(
        "publish", help="Publish contract metadata to the knowledge graph"
    )
    _add_identity_options(publish_parser)
    _add_network_options(publish_parser)
    publish_parser.add_argument(
        "--erc7730-file",
        default=None,
        help="ERC-7730 JSON file (default: the generated descriptor location)",
    )
    publish_parser.add_argument(
        "--private-key",
        default=None,
        help="Wallet private key (can also be set via PRIVATE_KEY env var)",
    )

    fetch_parser = subparsers.add_parser(
        "fetch", help="Fetch contract metadata from the knowledge graph"
    )
    fetch_parser.add_argument("--contract", required=True, help="Contract address")
    fetch_parser.add_argument("--chain-id", required=True, help="Chain id")
    _add_network_options(fetch_parser)

    return parser


# -- Wiring --------------------------------------------------------------------


def _resolver(cfg: Settings) -> IdentityResolver:
    return IdentityResolver(
        deployments_dir=cfg.deployments_dir,
        artifacts_dir=cfg.artifacts_dir,
        default_chain_id=cfg.default_chain_id,
    )


def _network(cfg: Settings, testnet: bool) -> NetworkSpec:
    return load_networks_config(cfg.networks_config_paths).get(Network.from_flag(testnet))


async def _resolve(args: argparse.Namespace, cfg: Settings) -> Resolution:
    return await _resolver(cfg).resolve(
        args.deployment_id,
        chain_id=args.chain_id,
        contract_address=args.contract,
        contract_name=args.contract_name,
    )


def _emit(payload: dict[str, Any], as_json: bool) -> None:
    if as_json:
        print(json.dumps(payload, indent=2))
        return
    for key, value in payload.items():
        if isinstance(value, (dict, list)):
            value = json.dumps(value, indent=2)
        print(f"{key}: {value}")


# -- Handlers ------------------------------------------------------------------


async def _handle_resolve(args: argparse.Namespace, cfg: Settings) -> int:
    resolution = await _resolve(args, cfg)
    payload = asdict(resolution.identity)
    payload["diagnostics"] = [str(d) for d in resolution.diagnostics]
    _emit(payload, args.json)
    return 0


async def _handle_generate(args: argparse.Namespace, cfg: Settings) -> int:
    resolution = await _resolve(args, cfg)
    identity = require_identity(resolution.identity)
    invoker = create_invoker(
        adapter_path=cfg.generator_adapter,
        command=cfg.generator_command,
        deployments_dir=cfg.deployments_dir,
    )
    target = Path(args.output) if args.output else invoker.output_path(identity)
    output = await invoker.generate(identity, target)
    if output.stdout:
        print(output.stdout, end="" if output.stdout.endswith("\n") else "\n")
    print(f"descriptor: {target}")
    return 0


async def _handle_publish(args: argparse.Namespace, cfg: Settings) -> int:
    resolution = await _resolve(args, cfg)
    identity = require_identity(resolution.identity)

    descriptor_path = (
        Path(args.erc7730_file)
        if args.erc7730_file
        else output_path_for(identity, deployments_dir=cfg.deployments_dir)
    )
    descriptor = load_descriptor(descriptor_path)

    network = _network(cfg, args.testnet)
    logger.info(
        "Publishing %s (%s on chain %s) to %s",
        identity.contract_name,
        identity.contract_address,
        identity.chain_id,
        network.network.value,
    )

    wallet = RpcWallet(
        private_key=args.private_key or cfg.private_key,
        rpc_url=network.rpc_url,
        timeout=cfg.http_timeout,
    )
    logger.info("Wallet address: %s", wallet.address)
    publisher = KnowledgeGraphPublisher(
        store=HypergraphIpfsStore(
            api_origin=network.api_origin,
            network=network.network,
            timeout=cfg.http_timeout,
        ),
        spaces=SpaceApiClient(api_origin=network.api_origin, timeout=cfg.http_timeout),
        wallet=wallet,
    )

    result = await publish_descriptor(
        identity=identity,
        descriptor=descriptor,
        publisher=publisher,
        space_id=args.space_id,
    )
    _emit(result.to_dict(), args.json)
    return 0


async def _handle_fetch(args: argparse.Namespace, cfg: Settings) -> int:
    network = _network(cfg, args.testnet)
    client = LookupClient(
        SpaceApiClient(api_origin=network.api_origin, timeout=cfg.http_timeout)
    )
    result = await client.lookup(args.space_id, args.chain_id, args.contract)
    _emit(result.to_dict(), args.json)
    return 0


HANDLERS = {
    "resolve": _handle_resolve,
    "generate": _handle_generate,
    "publish": _handle_publish,
    "fetch": _handle_fetch,
}


def main(argv: Optional[Sequence[str]] = None, *, cfg: Optional[Settings] = None) -> int:
    cfg = cfg or default_settings
    args = _build_parser().parse_args(argv)
    configure_logging(args.log_level or cfg.log_level, json=cfg.log_json)

    try:
        return asyncio.run(HANDLERS[args.command](args, cfg))
    except KgError as exc:
        logger.error("%s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
