from __future__ import annotations

import re
from typing import Optional

from erc7730_kg.contracts.deployment import DeploymentRecord

CHAIN_TOKEN = re.compile(r"chain-(\d+)")


def chain_id_from_deployment_id(deployment_id: Optional[str]) -> Optional[str]:
    """``"chain-11155111"`` or ``"Module#Token-chain-11155111"`` -> ``"11155111"``."""
    if not deployment_id:
        return None
    match = CHAIN_TOKEN.search(deployment_id)
    return match.group(1) if match else None


def resolve_chain_id(
    *,
    explicit: Optional[str],
    deployment_id: Optional[str],
    record: Optional[DeploymentRecord],
    default: str,
) -> tuple[str, str]:
    """Return ``(chain_id, origin)`` following the precedence
    explicit > deployment id token > journal > default."""
    if explicit:
        return explicit, "explicit"

    from_id = chain_id_from_deployment_id(deployment_id)
    if from_id:
        return from_id, "deployment-id"

    if record is not None:
        from_journal = record.chain_id_from_journal()
        if from_journal:
            return from_journal, "journal"

    return default, "default"
