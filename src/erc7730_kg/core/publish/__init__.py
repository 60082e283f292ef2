"""Publishing to the knowledge graph."""

from erc7730_kg.core.publish.ipfs import ContentStore, HypergraphIpfsStore
from erc7730_kg.core.publish.publisher import KnowledgeGraphPublisher, publish_descriptor
from erc7730_kg.core.publish.space import SpaceApiClient
from erc7730_kg.core.publish.wallet import RpcWallet, Wallet, normalize_private_key

__all__ = [
    "ContentStore",
    "HypergraphIpfsStore",
    "KnowledgeGraphPublisher",
    "RpcWallet",
    "SpaceApiClient",
    "Wallet",
    "normalize_private_key",
    "publish_descriptor",
]
