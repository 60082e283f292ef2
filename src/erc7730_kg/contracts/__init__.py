"""Public contracts for the ERC-7730 knowledge-graph pipeline."""
from erc7730_kg.contracts.deployment import DeploymentRecord
from erc7730_kg.contracts.errors import (
    GeneratorFailure,
    KgError,
    PublishFailure,
    ValidationFailure,
)
from erc7730_kg.contracts.generator import (
    GeneratorAdapter,
    GeneratorConfig,
    GeneratorOutput,
)
from erc7730_kg.contracts.graph import (
    Calldata,
    CreateResult,
    DataType,
    EntityGraph,
    GraphOp,
    LookupResult,
    LookupStatus,
    MetadataEntity,
    Network,
    PropertyValue,
    PublishResult,
)
from erc7730_kg.contracts.identity import (
    ContractIdentity,
    LayerResult,
    PartialIdentity,
    Resolution,
    ResolutionWarning,
)

__all__ = [
    "DeploymentRecord",
    "KgError", "ValidationFailure", "GeneratorFailure", "PublishFailure",
    "GeneratorAdapter", "GeneratorConfig", "GeneratorOutput",
    "Calldata", "CreateResult", "DataType", "EntityGraph", "GraphOp",
    "LookupResult", "LookupStatus", "MetadataEntity", "Network",
    "PropertyValue", "PublishResult",
    "ContractIdentity", "LayerResult", "PartialIdentity", "Resolution",
    "ResolutionWarning",
]
