# erc7730_kg/core/resolver/deployment.py
"""
Deployment record reader.

Reads an Ignition deployment directory into a ``DeploymentRecord`` and
extracts whatever identity fields it can. Missing files and malformed JSON
are reported as warnings; the reader never raises.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from erc7730_kg.contracts.deployment import DeploymentRecord
from erc7730_kg.contracts.identity import LayerResult, PartialIdentity, ResolutionWarning

logger = logging.getLogger(__name__)

SOURCE = "deployment"

ADDRESSES_FILE = "deployed_addresses.json"
JOURNAL_FILE = "journal.jsonl"
ARTIFACTS_DIR = "artifacts"

DEBUG_SUFFIX = ".dbg.json"
DESCRIPTOR_SUFFIX = "-erc7730.json"


def is_contract_artifact(path: Path) -> bool:
    """True for compiled contract JSON, excluding debug and generated files."""
    name = path.name
    return (
        name.endswith(".json")
        and not name.endswith(DEBUG_SUFFIX)
        and not name.endswith(DESCRIPTOR_SUFFIX)
    )


def contract_name_from_key(key: str) -> str:
    """``"CounterModule#ComplexCounter"`` -> ``"ComplexCounter"``."""
    return key.rsplit("#", 1)[-1]


class DeploymentRecordReader:
    """Reads ``<deployments_dir>/<deployment_id>`` directories."""

    def load(
        self, deployment_path: Path, warnings: list[ResolutionWarning]
    ) -> DeploymentRecord:
        deployment_path = Path(deployment_path)
        return DeploymentRecord(
            deployment_id=deployment_path.name,
            path=deployment_path,
            journal_entries=self._read_journal(deployment_path / JOURNAL_FILE, warnings),
            address_map=self._read_addresses(deployment_path / ADDRESSES_FILE, warnings),
            artifact_files=self._list_artifacts(deployment_path / ARTIFACTS_DIR, warnings),
        )

    def read(self, deployment_path: Path) -> LayerResult:
        warnings: list[ResolutionWarning] = []
        record = self.load(deployment_path, warnings)
        return self.extract(record, warnings)

    def extract(
        self, record: DeploymentRecord, warnings: list[ResolutionWarning]
    ) -> LayerResult:
        address: Optional[str] = None
        name: Optional[str] = None
        key: Optional[str] = None

        first = record.first_deployment()
        if first is not None:
            key, address = first
            name = contract_name_from_key(key)
            logger.info("Deployment '%s': %s at %s", record.deployment_id, key, address)
        else:
            self._warn(warnings, f"no deployed addresses in {record.path / ADDRESSES_FILE}")

        partial = PartialIdentity(contract_address=address, contract_name=name)

        artifact = self._pick_artifact(record.artifact_files, key)
        if artifact is None:
            self._warn(warnings, f"no contract artifact in {record.artifacts_dir}")
        else:
            partial = partial.merge(read_artifact_identity(artifact, warnings, SOURCE))

        return LayerResult(identity=partial, warnings=warnings)

    # -- Helpers --------------------------------------------------------------

    @staticmethod
    def _pick_artifact(files: list[Path], key: Optional[str]) -> Optional[Path]:
        candidates = [f for f in files if is_contract_artifact(f)]
        if key:
            # Ignition names artifacts after the future id
            for f in candidates:
                if f.stem == key:
                    return f
        return candidates[0] if candidates else None

    def _read_addresses(
        self, path: Path, warnings: list[ResolutionWarning]
    ) -> dict[str, str]:
        data = _read_json(path, warnings, SOURCE)
        if data is None:
            return {}
        if not isinstance(data, dict):
            self._warn(warnings, f"{path} is not a JSON object")
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _read_journal(
        self, path: Path, warnings: list[ResolutionWarning]
    ) -> list[dict[str, Any]]:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            self._warn(warnings, f"cannot read journal {path}: {exc}")
            return []

        entries: list[dict[str, Any]] = []
        for lineno, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                entry = json.loads(line)
            except json.JSONDecodeError as exc:
                self._warn(warnings, f"{path}:{lineno}: malformed journal line ({exc})")
                entry = {}
            entries.append(entry if isinstance(entry, dict) else {})
        return entries

    def _list_artifacts(
        self, path: Path, warnings: list[ResolutionWarning]
    ) -> list[Path]:
        try:
            return sorted(p for p in path.iterdir() if p.is_file())
        except OSError as exc:
            self._warn(warnings, f"cannot list artifacts in {path}: {exc}")
            return []

    @staticmethod
    def _warn(warnings: list[ResolutionWarning], message: str) -> None:
        logger.warning("%s", message)
        warnings.append(ResolutionWarning(SOURCE, message))


def _read_json(
    path: Path, warnings: list[ResolutionWarning], source: str
) -> Optional[Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            return json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        message = f"cannot read {path}: {exc}"
        logger.warning("%s", message)
        warnings.append(ResolutionWarning(source, message))
        return None


def read_artifact_identity(
    path: Path, warnings: list[ResolutionWarning], source: str
) -> PartialIdentity:
    """Identity fields carried by a compiled artifact (Hardhat format)."""
    data = _read_json(path, warnings, source)
    if not isinstance(data, dict):
        return PartialIdentity(artifact_path=str(path))

    return PartialIdentity(
        contract_name=data.get("contractName") or None,
        source_path=data.get("sourceName") or None,
        artifact_path=str(path),
    )
