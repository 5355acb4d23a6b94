"""
Code generation backends.

Contains language-specific code generators.
"""

from __future__ import annotations

from ..config import CodeGeneratorConfig
from ..errors import GenerationError
from .base import CodeBackend
from .python_backend import PythonBackend
from .swift_backend import SwiftBackend

BACKENDS: dict[str, type[CodeBackend]] = {
    "python": PythonBackend,
    "swift": SwiftBackend,
}


def get_backend(language: str, config: CodeGeneratorConfig, generation_comment: str = "") -> CodeBackend:
    """Instantiate the backend for a target language."""
    try:
        backend_class = BACKENDS[language]
    except KeyError:
        raise GenerationError(f"Unsupported language: {language}") from None
    return backend_class(config, generation_comment)


__all__ = [
    "BACKENDS",
    "CodeBackend",
    "PythonBackend",
    "SwiftBackend",
    "get_backend",
]
