# erc7730_kg/contracts/identity.py
"""
Contract identity as produced by the resolver.

A ``ContractIdentity`` is built once per invocation. Each resolution layer
contributes a ``PartialIdentity``; layers are merged in precedence order so
that a field set by an earlier layer is never overwritten by a later one.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Optional

REQUIRED_FIELDS: tuple[str, ...] = ("chain_id", "contract_address", "contract_name")


@dataclass(frozen=True)
class ResolutionWarning:
    """Non-fatal diagnostic emitted by a resolution layer."""

    source: str
    message: str

    def __str__(self) -> str:
        return f"[{self.source}] {self.message}"


@dataclass(frozen=True)
class PartialIdentity:
    chain_id: Optional[str] = None
    contract_address: Optional[str] = None
    contract_name: Optional[str] = None
    artifact_path: Optional[str] = None
    source_path: Optional[str] = None

    def merge(self, other: PartialIdentity) -> PartialIdentity:
        """Fill fields that are still empty from ``other``."""
        updates = {
            f.name: getattr(other, f.name)
            for f in fields(self)
            if not getattr(self, f.name) and getattr(other, f.name)
        }
        return replace(self, **updates) if updates else self

    def is_empty(self) -> bool:
        return not any(getattr(self, f.name) for f in fields(self))


@dataclass(frozen=True)
class ContractIdentity:
    """Resolved identity of a deployed contract.

    Empty strings mark fields no layer could determine; every such field
    has a matching ``ResolutionWarning`` in the owning ``Resolution``.
    """

    chain_id: str = ""
    contract_address: str = ""
    contract_name: str = ""
    artifact_path: Optional[str] = None
    source_path: Optional[str] = None
    deployment_id: Optional[str] = None

    @classmethod
    def from_partial(
        cls, partial: PartialIdentity, *, deployment_id: Optional[str] = None
    ) -> ContractIdentity:
        return cls(
            chain_id=partial.chain_id or "",
            contract_address=partial.contract_address or "",
            contract_name=partial.contract_name or "",
            artifact_path=partial.artifact_path,
            source_path=partial.source_path,
            deployment_id=deployment_id,
        )

    def missing(self, *names: str) -> list[str]:
        return [n for n in (names or REQUIRED_FIELDS) if not getattr(self, n)]


@dataclass(frozen=True)
class LayerResult:
    """Outcome of a single resolution layer. ``identity`` is None when the
    layer found nothing usable."""

    identity: Optional[PartialIdentity] = None
    warnings: list[ResolutionWarning] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.identity is not None and not self.identity.is_empty()


@dataclass(frozen=True)
class Resolution:
    identity: ContractIdentity
    diagnostics: list[ResolutionWarning] = field(default_factory=list)
