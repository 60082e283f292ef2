# erc7730_kg/core/resolver/artifacts.py
"""
Artifact scanner.

Best-guess primary contract from a Hardhat build tree when no deployment
record is available::

    artifacts/contracts/Token.sol/Token.json
    artifacts/contracts/Token.sol/Token.dbg.json
    artifacts/contracts/Token.t.sol/TokenTest.json   (test source, skipped)

Directories and files are visited in lexicographic order so the choice does
not depend on filesystem enumeration order.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from erc7730_kg.contracts.identity import LayerResult, PartialIdentity, ResolutionWarning
from erc7730_kg.core.resolver.deployment import DEBUG_SUFFIX, read_artifact_identity

logger = logging.getLogger(__name__)

SOURCE = "artifacts"

SOURCE_SUFFIXES: tuple[str, ...] = (".sol", ".vy")


def is_test_source(name: str) -> bool:
    """``Token.t.sol`` (Foundry) and ``TokenTest.sol`` are test sources."""
    for suffix in SOURCE_SUFFIXES:
        if name.endswith(f".t{suffix}"):
            return True
        if name.endswith(suffix) and name[: -len(suffix)].endswith("Test"):
            return True
    return False


def source_stem(name: str) -> str:
    for suffix in SOURCE_SUFFIXES:
        if name.endswith(suffix):
            return name[: -len(suffix)]
    return name


class ArtifactScanner:
    def __init__(self, source_suffixes: Iterable[str] = SOURCE_SUFFIXES) -> None:
        self._suffixes = tuple(source_suffixes)

    def eligible_dirs(self, artifacts_root: Path) -> list[Path]:
        contracts = Path(artifacts_root) / "contracts"
        try:
            dirs = sorted(p for p in contracts.iterdir() if p.is_dir())
        except OSError:
            return []
        return [
            d
            for d in dirs
            if d.name.endswith(self._suffixes) and not is_test_source(d.name)
        ]

    def find_artifact(self, artifacts_root: Path) -> Optional[Path]:
        """Pick the primary artifact, or None."""
        fallback: Optional[Path] = None

        for directory in self.eligible_dirs(artifacts_root):
            files = _json_files(directory)
            primary = directory / f"{source_stem(directory.name)}.json"
            if primary in files:
                return primary
            if fallback is None and files:
                fallback = files[0]

        return fallback

    def scan(self, artifacts_root: Path) -> LayerResult:
        artifacts_root = Path(artifacts_root)
        warnings: list[ResolutionWarning] = []

        if not artifacts_root.is_dir():
            self._warn(warnings, f"artifacts directory {artifacts_root} does not exist")
            return LayerResult(warnings=warnings)

        artifact = self.find_artifact(artifacts_root)
        if artifact is None:
            self._warn(warnings, f"no non-test contract artifact under {artifacts_root}")
            return LayerResult(warnings=warnings)

        logger.info("Using artifact %s", artifact)
        partial = read_artifact_identity(artifact, warnings, SOURCE)
        if not partial.contract_name:
            partial = partial.merge(PartialIdentity(contract_name=artifact.stem))
        return LayerResult(identity=partial, warnings=warnings)

    @staticmethod
    def _warn(warnings: list[ResolutionWarning], message: str) -> None:
        logger.warning("%s", message)
        warnings.append(ResolutionWarning(SOURCE, message))


def _json_files(directory: Path) -> list[Path]:
    try:
        return sorted(
            p
            for p in directory.iterdir()
            if p.is_file() and p.name.endswith(".json") and not p.name.endswith(DEBUG_SUFFIX)
        )
    except OSError:
        return []
