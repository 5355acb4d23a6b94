"""Tests for the atomic writer."""

from __future__ import annotations

import re

import pytest

from rest_spec_to_code.pipeline import OutputValidationError
from rest_spec_to_code.pipeline.writer import AtomicWriter


def test_write_creates_directories(tmp_path):
    target = tmp_path / "nested" / "out" / "Cat.py"
    AtomicWriter().write(target, "x = 1\n", "python")
    assert target.read_text(encoding="utf-8") == "x = 1\n"


def test_write_replaces_existing_file(tmp_path):
    target = tmp_path / "Cat.py"
    target.write_text("old = True\n")
    AtomicWriter().write(target, "new = True\n", "python")
    assert target.read_text() == "new = True\n"


def test_no_temporary_files_left(tmp_path):
    AtomicWriter().write(tmp_path / "a.swift", "struct A {}\n", "swift")
    assert [p.name for p in tmp_path.iterdir()] == ["a.swift"]


def test_invalid_python_is_not_written(tmp_path):
    target = tmp_path / "Broken.py"
    with pytest.raises(OutputValidationError, match="Broken.py: Generated Python code is not valid"):
        AtomicWriter().write(target, "def broken(:\n", "python")
    assert not target.exists()
    assert list(tmp_path.iterdir()) == []


def test_validation_can_be_disabled(tmp_path):
    target = tmp_path / "Broken.py"
    AtomicWriter().write(target, "def broken(:\n", "python", validate=False)
    assert target.exists()


def test_non_atomic_write(tmp_path):
    target = tmp_path / "Plain.py"
    AtomicWriter().write(target, "x = 1\n", "python", atomic=False)
    assert target.read_text() == "x = 1\n"


@pytest.mark.parametrize(
    "content",
    [
        "public struct A {\n    let url = \"/{index}/_doc/{id\"\n}\n",
        "extension Request {\n    /**\n     * Uses { and ( freely\n     */\n    static func a() {}\n}\n",
        "let url = \"/\\(index.joined(separator: \",\"))/_search\"\n",
        "// trailing comment with }\nstruct A {}\n",
    ],
)
def test_swift_validation_accepts(content):
    AtomicWriter()._default_validate_swift(content)


@pytest.mark.parametrize(
    "content,message",
    [
        ("public struct A {\n", "unclosed"),
        ("public struct A }\n", "unexpected '}'"),
        ("let a = [1, 2)\n", "unexpected ')'"),
        ("let a = \"open\n", "unterminated string"),
    ],
)
def test_swift_validation_rejects(content, message):
    with pytest.raises(OutputValidationError, match=re.escape(message)):
        AtomicWriter()._default_validate_swift(content)


def test_custom_validator(tmp_path):
    calls = []
    writer = AtomicWriter(validate_swift=calls.append)
    writer.write(tmp_path / "A.swift", "anything {", "swift")
    assert calls == ["anything {"]
