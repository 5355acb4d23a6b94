"""REST spec to Code Generator

A Python package for generating REST client code from declarative endpoint
and request body descriptors. Supports Python and Swift code generation
with a registry that deduplicates and conflict-checks every definition.
"""

__version__ = "1.0.0"

from .pipeline import (
    AssemblyRegistry,
    AtomicWriter,
    CodeGeneratorConfig,
    GenerationError,
    GenerationMode,
    OutputConfig,
    PipelineGenerator,
    load_documents,
)

__all__ = [
    "PipelineGenerator",
    "CodeGeneratorConfig",
    "GenerationMode",
    "OutputConfig",
    "AssemblyRegistry",
    "AtomicWriter",
    "GenerationError",
    "load_documents",
]
