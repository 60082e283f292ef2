from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional


@dataclass(frozen=True)
class DeploymentRecord:
    """Read-only view of an Ignition deployment directory.

    Layout::

        <deployment>/
            deployed_addresses.json   {"<module>#<Contract>": "<address>"}
            journal.jsonl             one JSON event per line
            artifacts/                compiled contract JSON files
    """

    deployment_id: str
    path: Path
    journal_entries: list[dict[str, Any]] = field(default_factory=list)
    address_map: dict[str, str] = field(default_factory=dict)
    artifact_files: list[Path] = field(default_factory=list)

    @property
    def artifacts_dir(self) -> Path:
        return self.path / "artifacts"

    def first_deployment(self) -> Optional[tuple[str, str]]:
        """Return ``(key, address)`` of the first address-map entry."""
        for key, address in self.address_map.items():
            return key, address
        return None

    def chain_id_from_journal(self) -> Optional[str]:
        """Chain id recorded on the second journal line, if any."""
        if len(self.journal_entries) < 2:
            return None
        value = self.journal_entries[1].get("chainId")
        if value is None or value == "":
            return None
        return str(value)
