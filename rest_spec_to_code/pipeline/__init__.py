"""
Pipeline - descriptor-driven REST client code generator.

This module provides a multi-phase architecture for generating request
builders and request body types from REST API descriptors:

1. Phase 1 (Parser): Parse JSON descriptors into descriptor nodes
2. Phase 2 (Interpreter): Resolve parameters and build definitions
3. Phase 3 (Backend): Render definitions with language templates
4. Phase 4 (Registry): Deduplicate and conflict-check rendered definitions
5. Phase 5 (Writer): Validate and atomically write one file per definition
"""

from __future__ import annotations

from .config import CodeGeneratorConfig, GenerationMode, OutputConfig
from .errors import (
    GenerationError,
    NameConflictError,
    OutputValidationError,
    SchemaValidationError,
    UnresolvedParameterError,
)
from .generator import PipelineGenerator
from .loader import load_documents
from .registry import AssemblyRegistry
from .writer import AtomicWriter

__all__ = [
    "PipelineGenerator",
    "CodeGeneratorConfig",
    "GenerationMode",
    "OutputConfig",
    "AssemblyRegistry",
    "AtomicWriter",
    "load_documents",
    "GenerationError",
    "SchemaValidationError",
    "UnresolvedParameterError",
    "NameConflictError",
    "OutputValidationError",
]
