"""
Pipeline generator.

Wires the phases of one run together:

1. Phase 1 (Parser): Parse descriptor documents into descriptor nodes
2. Phase 2 (Interpreter): Resolve parameters and build definitions
3. Phase 3 (Backend): Render each definition and register it
4. Phase 4 (Writer): Write one file per registered definition
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .. import __version__
from .analyzer.body_interpreter import BodySchemaInterpreter
from .analyzer.endpoint_interpreter import EndpointSchemaInterpreter
from .backends import get_backend
from .config import CodeGeneratorConfig, GenerationMode
from .registry import AssemblyRegistry
from .schema_ast.parser import BodySchemaParser, EndpointParser
from .writer import AtomicWriter

logger = logging.getLogger(__name__)


class PipelineGenerator:
    """Generates source files from merged descriptor documents."""

    def __init__(
        self,
        documents: Mapping[str, Any],
        config: CodeGeneratorConfig | None = None,
        language: str = "python",
        mode: GenerationMode | str = GenerationMode.API,
        command_line: str = "rest_spec_to_code",
    ):
        """
        Initialize the generator.

        Args:
            documents: Merged top-level namespace of the input documents
            config: Code generation configuration
            language: Target language ("python" or "swift")
            mode: Which descriptor grammar the documents follow
            command_line: Command line recorded in the generation comment
        """
        self.documents = documents
        self.config = config or CodeGeneratorConfig()
        self.language = language
        self.mode = GenerationMode(mode)
        self.backend = get_backend(language, self.config, f"Generated by rest_spec_to_code v{__version__} : {command_line}")
        self.registry = AssemblyRegistry()
        self._generated = False

    def generate(self) -> dict[str, str]:
        """
        Interpret every descriptor and return the rendered definitions.

        Returns:
            Mapping of definition name to rendered source

        Raises:
            GenerationError: On the first malformed, unresolved or
                conflicting definition
        """
        if not self._generated:
            if self.mode == GenerationMode.API:
                self._generate_api()
            else:
                self._generate_request()
            self._generated = True
        return self.registry.render()

    def _generate_api(self) -> None:
        interpreter = EndpointSchemaInterpreter(self.registry, self.backend, self.config)
        for descriptor in EndpointParser().parse(self.documents):
            interpreter.interpret_group(descriptor)

    def _generate_request(self) -> None:
        parser = BodySchemaParser()
        interpreter = BodySchemaInterpreter(self.registry, self.backend, self.config, parser)
        interpreter.interpret_all(parser.parse(self.documents))

    def write(self, output_dir: Path, writer: AtomicWriter | None = None) -> list[Path]:
        """
        Generate and write one file per definition.

        Args:
            output_dir: Directory receiving the files (created if missing)
            writer: Writer to use, a default AtomicWriter otherwise

        Returns:
            The written paths, sorted by name
        """
        writer = writer or AtomicWriter()
        output_dir = Path(output_dir)
        written = []
        for name, content in sorted(self.generate().items()):
            path = output_dir / self.backend.file_name(name)
            writer.write(
                path,
                content,
                self.language,
                validate=self.config.output.validate_before_write,
                atomic=self.config.output.atomic_write,
            )
            logger.info("Wrote %s", path)
            written.append(path)
        return written
