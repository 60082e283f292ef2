"""Resolve, generate and publish ERC-7730 contract metadata to a knowledge graph."""

__version__ = "0.1.0"
