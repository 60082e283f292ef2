# erc7730_kg/contracts/generator.py
"""
Descriptor generator contract.

The generator is an external tool. The pipeline hands it a typed
``GeneratorConfig`` scoped to one invocation and expects a
``GeneratorOutput`` back; how the adapter talks to the tool (subprocess,
in-process, mock) is its own business.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class GeneratorConfig:
    chain_id: str
    contract_address: str
    contract_name: str
    output_path: Path
    artifact_path: Optional[str] = None
    source_path: Optional[str] = None


@dataclass(frozen=True)
class GeneratorOutput:
    stdout: str
    stderr: str
    returncode: int
    descriptor: Optional[bytes] = None

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@runtime_checkable
class GeneratorAdapter(Protocol):
    """Runs the descriptor generator for one contract.

    Implementations must not raise on a non-zero exit; they report it via
    ``GeneratorOutput.returncode``. Failing to start the tool at all is
    signalled with ``GeneratorFailure``.
    """

    async def run(self, config: GeneratorConfig) -> GeneratorOutput: ...
