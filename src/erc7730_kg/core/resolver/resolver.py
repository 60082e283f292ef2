# erc7730_kg/core/resolver/resolver.py
"""
Identity resolver.

Layers, in order:

1. Deployment record under ``<deployments_dir>/<deployment_id>`` when a
   deployment id is given and the directory exists.
2. Artifact scan of ``<artifacts_dir>`` when the deployment yielded
   neither an address nor an artifact.
3. Chain id precedence (see ``chain.resolve_chain_id``).

No layer raises. Each returns a ``LayerResult`` and the resolver folds the
warnings into ``Resolution.diagnostics``.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from erc7730_kg.contracts.deployment import DeploymentRecord
from erc7730_kg.contracts.errors import ValidationFailure
from erc7730_kg.contracts.identity import (
    REQUIRED_FIELDS,
    ContractIdentity,
    PartialIdentity,
    Resolution,
    ResolutionWarning,
)
from erc7730_kg.core.resolver.artifacts import ArtifactScanner
from erc7730_kg.core.resolver.chain import resolve_chain_id
from erc7730_kg.core.resolver.deployment import DeploymentRecordReader

logger = logging.getLogger(__name__)

SOURCE = "resolver"


class IdentityResolver:
    def __init__(
        self,
        *,
        deployments_dir: Path | str,
        artifacts_dir: Path | str,
        default_chain_id: str = "31337",
        reader: Optional[DeploymentRecordReader] = None,
        scanner: Optional[ArtifactScanner] = None,
    ) -> None:
        self.deployments_dir = Path(deployments_dir)
        self.artifacts_dir = Path(artifacts_dir)
        self.default_chain_id = default_chain_id
        self._reader = reader or DeploymentRecordReader()
        self._scanner = scanner or ArtifactScanner()

    def deployment_path(self, deployment_id: str) -> Path:
        return self.deployments_dir / deployment_id

    async def resolve(
        self,
        deployment_id: Optional[str] = None,
        *,
        chain_id: Optional[str] = None,
        contract_address: Optional[str] = None,
        contract_name: Optional[str] = None,
    ) -> Resolution:
        diagnostics: list[ResolutionWarning] = []
        partial = PartialIdentity(
            contract_address=contract_address or None,
            contract_name=contract_name or None,
        )
        record: Optional[DeploymentRecord] = None
        usable = False

        if deployment_id:
            path = self.deployment_path(deployment_id)
            if path.is_dir():
                warnings: list[ResolutionWarning] = []
                record = self._reader.load(path, warnings)
                result = self._reader.extract(record, warnings)
                diagnostics.extend(result.warnings)
                if result.identity is not None:
                    usable = bool(
                        result.identity.contract_address or result.identity.artifact_path
                    )
                    partial = partial.merge(result.identity)
            else:
                self._warn(diagnostics, f"deployment directory {path} not found")

        if not usable:
            logger.info("No usable deployment record, scanning %s", self.artifacts_dir)
            result = self._scanner.scan(self.artifacts_dir)
            diagnostics.extend(result.warnings)
            if result.identity is not None:
                partial = partial.merge(result.identity)

        resolved_chain, origin = resolve_chain_id(
            explicit=chain_id,
            deployment_id=deployment_id,
            record=record,
            default=self.default_chain_id,
        )
        if origin == "default":
            self._warn(
                diagnostics,
                f"chain id not found, using local default {resolved_chain}",
            )
        partial = partial.merge(PartialIdentity(chain_id=resolved_chain))

        identity = ContractIdentity.from_partial(partial, deployment_id=deployment_id)
        for name in identity.missing():
            self._warn(diagnostics, f"could not resolve {name}")

        logger.info(
            "Resolved identity: name=%s address=%s chain=%s (chain from %s)",
            identity.contract_name or "-",
            identity.contract_address or "-",
            identity.chain_id,
            origin,
        )
        return Resolution(identity=identity, diagnostics=diagnostics)

    @staticmethod
    def _warn(diagnostics: list[ResolutionWarning], message: str) -> None:
        logger.warning("%s", message)
        diagnostics.append(ResolutionWarning(SOURCE, message))


def require_identity(
    identity: ContractIdentity, fields: Iterable[str] = REQUIRED_FIELDS
) -> ContractIdentity:
    """Raise ``ValidationFailure`` listing every empty required field."""
    missing = identity.missing(*fields)
    if missing:
        raise ValidationFailure(
            f"Missing contract identity field(s): {', '.join(missing)}",
            missing=missing,
        )
    return identity
