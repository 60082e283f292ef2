"""Descriptor generation."""

from erc7730_kg.core.generator.invoker import (
    GeneratorInvoker,
    create_invoker,
    load_descriptor,
    output_path_for,
)
from erc7730_kg.core.generator.process import SubprocessGenerator

__all__ = [
    "GeneratorInvoker",
    "SubprocessGenerator",
    "create_invoker",
    "load_descriptor",
    "output_path_for",
]
