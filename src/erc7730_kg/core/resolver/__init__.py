"""Contract identity resolution."""

from erc7730_kg.core.resolver.artifacts import ArtifactScanner
from erc7730_kg.core.resolver.chain import chain_id_from_deployment_id, resolve_chain_id
from erc7730_kg.core.resolver.deployment import DeploymentRecordReader
from erc7730_kg.core.resolver.resolver import IdentityResolver, require_identity

__all__ = [
    "ArtifactScanner",
    "DeploymentRecordReader",
    "IdentityResolver",
    "chain_id_from_deployment_id",
    "require_identity",
    "resolve_chain_id",
]
