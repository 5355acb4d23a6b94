"""
Error types raised by the generation pipeline.

None of these are recovered inside the pipeline: any of them aborts the
whole run and is reported once by the command line entry point.
"""

from __future__ import annotations


class GenerationError(Exception):
    """Base class for all fatal generation errors."""

    pass


class SchemaValidationError(GenerationError):
    """Raised when a descriptor is missing a required field or is malformed.

    This covers:
    - Missing or wrongly typed required keys
    - Unknown kind tokens
    - Structurally invalid combinations (e.g. both one_of and any_of)
    """

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)


class UnresolvedParameterError(GenerationError):
    """Raised when a parameter reference has no matching entry in scope."""

    def __init__(self, name: str, path: str | None = None):
        self.name = name
        self.path = path
        location = f"{path}: " if path else ""
        super().__init__(f"{location}unresolved parameter reference '{name}'")


class NameConflictError(GenerationError):
    """Raised when two different definitions are registered under one name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Duplicate definition name ({name}) with different content detected")


class OutputValidationError(GenerationError):
    """Raised when generated source fails the pre-write sanity checks."""

    pass
