"""
Atomic file writer for generated sources.

Ensures that file writes are atomic to prevent half-written sources
from interrupted operations.
"""

from __future__ import annotations

import ast
import logging
import tempfile
from collections.abc import Callable
from pathlib import Path

from ..errors import OutputValidationError

logger = logging.getLogger(__name__)

_OPENING = {"{": "}", "(": ")", "[": "]"}
_CLOSING = {v: k for k, v in _OPENING.items()}


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file

    This ensures that an interrupted write operation never leaves
    the target file in an incomplete state.
    """

    def __init__(
        self,
        validate_python: Callable[[str], None] | None = None,
        validate_swift: Callable[[str], None] | None = None,
    ):
        """Initialize the atomic writer.

        Args:
            validate_python: Optional validation function for Python code
            validate_swift: Optional validation function for Swift code
        """
        self._validate_python = validate_python or self._default_validate_python
        self._validate_swift = validate_swift or self._default_validate_swift

    def write(
        self,
        path: Path,
        content: str,
        language: str,
        validate: bool = True,
        atomic: bool = True,
    ) -> None:
        """Write content to file, replacing any previous content.

        Args:
            path: Target file path
            content: Content to write
            language: Language for validation ("python" or "swift")
            validate: Whether to validate before finalizing
            atomic: Whether to go through a temporary file and rename

        Raises:
            OutputValidationError: If validation fails
            OSError: If file operations fail
        """
        if validate:
            self._validate_content(content, language, path)

        path.parent.mkdir(parents=True, exist_ok=True)
        if not atomic:
            path.write_text(content, encoding="utf-8")
            return

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
            temp_path.replace(path)
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise
        logger.debug("Wrote %s", path)

    def _validate_content(self, content: str, language: str, path: Path) -> None:
        """Validate content based on language.

        Raises:
            OutputValidationError: If validation fails
        """
        try:
            if language == "python":
                self._validate_python(content)
            elif language == "swift":
                self._validate_swift(content)
        except OutputValidationError as e:
            raise OutputValidationError(f"{path.name}: {e}") from e

    def _default_validate_python(self, content: str) -> None:
        try:
            ast.parse(content)
        except SyntaxError as e:
            raise OutputValidationError(f"Generated Python code is not valid: {e}") from e

    def _default_validate_swift(self, content: str) -> None:
        """Check that brackets outside string literals and comments are balanced."""
        stack: list[str] = []
        in_comment = False
        for line in content.splitlines():
            in_string = False
            escaped = False
            index = 0
            while index < len(line):
                char = line[index]
                if in_comment:
                    if line.startswith("*/", index):
                        in_comment = False
                        index += 1
                elif in_string:
                    if escaped:
                        escaped = False
                    elif char == "\\":
                        escaped = True
                    elif char == '"':
                        in_string = False
                elif line.startswith("//", index):
                    break
                elif line.startswith("/*", index):
                    in_comment = True
                    index += 1
                elif char == '"':
                    in_string = True
                elif char in _OPENING:
                    stack.append(char)
                elif char in _CLOSING:
                    if not stack or stack.pop() != _CLOSING[char]:
                        raise OutputValidationError(f"Generated Swift code has an unexpected '{char}'")
                index += 1
            if in_string:
                raise OutputValidationError("Generated Swift code has an unterminated string literal")
        if stack:
            raise OutputValidationError(f"Generated Swift code has {len(stack)} unclosed bracket(s)")
