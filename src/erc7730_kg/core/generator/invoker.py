# erc7730_kg/core/generator/invoker.py
"""
Generator invoker.

Validates the identity, fixes the output location and runs the configured
``GeneratorAdapter``. The adapter (not the invoker) writes the descriptor.
"""
from __future__ import annotations

import inspect
import json
import logging
from pathlib import Path
from typing import Any, Optional, Sequence

from erc7730_kg.contracts.errors import GeneratorFailure, ValidationFailure
from erc7730_kg.contracts.generator import GeneratorAdapter, GeneratorConfig, GeneratorOutput
from erc7730_kg.contracts.identity import ContractIdentity
from erc7730_kg.core.loader import import_attr
from erc7730_kg.core.resolver.deployment import ARTIFACTS_DIR, DESCRIPTOR_SUFFIX
from erc7730_kg.core.resolver.resolver import require_identity

logger = logging.getLogger(__name__)

FALLBACK_NAME = "contract"


def descriptor_filename(contract_name: str) -> str:
    return f"{contract_name or FALLBACK_NAME}{DESCRIPTOR_SUFFIX}"


def output_path_for(
    identity: ContractIdentity,
    *,
    deployments_dir: Path | str,
    cwd: Optional[Path | str] = None,
) -> Path:
    """Deterministic descriptor location.

    ``<deployments_dir>/<id>/artifacts/<Name>-erc7730.json`` when the
    deployment directory exists, otherwise ``<cwd>/<Name>-erc7730.json``.
    """
    filename = descriptor_filename(identity.contract_name)
    if identity.deployment_id:
        deployment = Path(deployments_dir) / identity.deployment_id
        if deployment.is_dir():
            return deployment / ARTIFACTS_DIR / filename
    return Path(cwd or Path.cwd()) / filename


def load_descriptor(path: Path | str) -> Any:
    """Read a generated descriptor file."""
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as fh:
            return json.load(fh)
    except FileNotFoundError as exc:
        raise ValidationFailure(f"Descriptor file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ValidationFailure(f"Descriptor file {path} is not valid JSON: {exc}") from exc


class GeneratorInvoker:
    def __init__(
        self,
        adapter: GeneratorAdapter,
        *,
        deployments_dir: Path | str,
        cwd: Optional[Path | str] = None,
    ) -> None:
        self._adapter = adapter
        self._deployments_dir = Path(deployments_dir)
        self._cwd = cwd

    def output_path(self, identity: ContractIdentity) -> Path:
        return output_path_for(
            identity, deployments_dir=self._deployments_dir, cwd=self._cwd
        )

    async def generate(
        self,
        identity: ContractIdentity,
        output_path: Optional[Path | str] = None,
    ) -> GeneratorOutput:
        """Run the generator and return its output.

        Raises:
            ValidationFailure: chain id, address or name missing
            GeneratorFailure: the tool could not start or exited non-zero
        """
        require_identity(identity)
        target = Path(output_path) if output_path else self.output_path(identity)
        target.parent.mkdir(parents=True, exist_ok=True)

        config = GeneratorConfig(
            chain_id=identity.chain_id,
            contract_address=identity.contract_address,
            contract_name=identity.contract_name,
            output_path=target,
            artifact_path=identity.artifact_path,
            source_path=identity.source_path,
        )

        output = await self._adapter.run(config)
        if not output.ok:
            logger.error(
                "Generator exited with %s: %s", output.returncode, output.stderr.strip()
            )
            raise GeneratorFailure(
                f"Generator exited with code {output.returncode}: {output.stderr.strip()}",
                returncode=output.returncode,
                stderr=output.stderr,
            )

        if not target.exists():
            logger.warning("Generator finished but %s was not written", target)
        else:
            logger.info("Descriptor written to %s", target)
        return output


def create_invoker(
    *,
    adapter_path: str,
    command: Sequence[str],
    deployments_dir: Path | str,
    cwd: Optional[Path | str] = None,
) -> GeneratorInvoker:
    """Build an invoker around the configured adapter.

    If the adapter constructor accepts ``command``, the configured command
    line is injected.
    """
    cls = import_attr(adapter_path)
    kwargs: dict[str, Any] = {}
    if "command" in inspect.signature(cls.__init__).parameters:
        kwargs["command"] = list(command)
    adapter = cls(**kwargs)
    if not isinstance(adapter, GeneratorAdapter):
        raise TypeError(f"{adapter_path} does not implement GeneratorAdapter")
    return GeneratorInvoker(adapter, deployments_dir=deployments_dir, cwd=cwd)
