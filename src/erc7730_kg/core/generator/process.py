# erc7730_kg/core/generator/process.py
"""
Subprocess-backed generator adapter.

The external tool receives the contract identity through its own
environment (never the parent's ``os.environ``) and the output path as its
last argument. Both output streams are drained concurrently and buffered
in full; no timeout is applied.
"""
from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Mapping, Optional, Sequence

from erc7730_kg.contracts.errors import GeneratorFailure
from erc7730_kg.contracts.generator import GeneratorConfig, GeneratorOutput

logger = logging.getLogger(__name__)

# kernel limit for a single environment string is 128 KiB
ARTIFACT_JSON_LIMIT = 64 * 1024


def build_env(
    config: GeneratorConfig, base: Optional[Mapping[str, str]] = None
) -> dict[str, str]:
    """Child environment for one generator run."""
    env = dict(os.environ if base is None else base)
    env.update(
        {
            "CHAIN_ID": config.chain_id,
            "CONTRACT_ADDRESS": config.contract_address,
            "CONTRACT_NAME": config.contract_name,
            "OUTPUT_PATH": str(config.output_path),
        }
    )
    if config.source_path:
        env["SOURCE_PATH"] = config.source_path
    if config.artifact_path:
        env["ARTIFACT_PATH"] = config.artifact_path
        try:
            artifact = Path(config.artifact_path)
            size = artifact.stat().st_size
            if size > ARTIFACT_JSON_LIMIT:
                logger.warning(
                    "Artifact %s is %d bytes; passing ARTIFACT_PATH only",
                    config.artifact_path,
                    size,
                )
            else:
                env["ARTIFACT_JSON"] = artifact.read_text(encoding="utf-8")
        except OSError as exc:
            logger.warning("Cannot inline artifact %s: %s", config.artifact_path, exc)
    return env


class SubprocessGenerator:
    def __init__(
        self,
        command: Sequence[str] = ("erc7730-generate",),
        *,
        cwd: Optional[Path | str] = None,
        base_env: Optional[Mapping[str, str]] = None,
    ) -> None:
        if not command:
            raise ValueError("Generator command must not be empty")
        self._command = list(command)
        self._cwd = cwd
        self._base_env = base_env

    async def run(self, config: GeneratorConfig) -> GeneratorOutput:
        argv = [*self._command, str(config.output_path)]
        logger.info("Running generator: %s", " ".join(argv))

        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=build_env(config, self._base_env),
                cwd=self._cwd,
            )
        except OSError as exc:
            raise GeneratorFailure(
                f"Cannot start generator '{argv[0]}': {exc}", stderr=str(exc)
            ) from exc

        stdout, stderr = await proc.communicate()
        returncode = proc.returncode if proc.returncode is not None else -1

        descriptor: Optional[bytes] = None
        if returncode == 0:
            try:
                descriptor = Path(config.output_path).read_bytes()
            except OSError:
                descriptor = None

        return GeneratorOutput(
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
            returncode=returncode,
            descriptor=descriptor,
        )
