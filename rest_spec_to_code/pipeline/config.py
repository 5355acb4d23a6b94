"""
Configuration for the code generator pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class GenerationMode(str, Enum):
    """Which kind of descriptor documents a run consumes."""

    API = "api"  # Endpoint descriptors -> request builders
    REQUEST = "request"  # Body descriptors -> value types


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        validate_before_write: Whether to sanity check code before writing
        atomic_write: Whether to write through a temporary file and rename
    """

    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Type the request builders are attached to / construct
    receiver_type: str = "Request"

    # Type of a strongly typed request body
    body_type: str = "ElasticsearchBody"

    # Field type of a one_of child slot when the alternatives share no parent
    polymorphic_type: str = "QueryItem"

    # Raw value type of enums without a parent
    default_raw_type: str = "String"

    # Python module the generated code imports the support types from
    runtime_module: str = ".runtime"

    # Literal path segments that mark irregular endpoints
    skip_segments: list[str] = field(default_factory=lambda: ["_aliases", "_warmers", "_mappings", "hotthreads"])

    # Deprecated URL templates, matched against the built path (see built_path)
    skip_path_prefixes: list[str] = field(default_factory=lambda: ["/_cluster/nodes", "/_update_by_query"])
    skip_path_suffixes: list[str] = field(default_factory=lambda: [r"/\(type)/_mapping"])

    # Add generation comment at top of each file
    add_generation_comment: bool = True

    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if k == "output" and isinstance(v, dict):
                config.output = OutputConfig(**{ok: ov for ok, ov in v.items() if hasattr(config.output, ok)})
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "receiver_type": self.receiver_type,
            "body_type": self.body_type,
            "polymorphic_type": self.polymorphic_type,
            "default_raw_type": self.default_raw_type,
            "runtime_module": self.runtime_module,
            "skip_segments": self.skip_segments,
            "skip_path_prefixes": self.skip_path_prefixes,
            "skip_path_suffixes": self.skip_path_suffixes,
            "add_generation_comment": self.add_generation_comment,
            "output": {
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }
