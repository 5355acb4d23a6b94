"""Tests for descriptor document loading."""

from __future__ import annotations

import json

import pytest

from rest_spec_to_code.pipeline import GenerationError, SchemaValidationError, load_documents


def write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")


def test_documents_are_merged(tmp_path):
    write_json(tmp_path / "a.json", {"search": {"v": 1}})
    write_json(tmp_path / "b.json", {"bulk": {"v": 2}})
    assert load_documents(tmp_path) == {"search": {"v": 1}, "bulk": {"v": 2}}


def test_later_files_win(tmp_path):
    write_json(tmp_path / "b.json", {"search": {"v": "b"}})
    write_json(tmp_path / "a.json", {"search": {"v": "a"}})
    assert load_documents(tmp_path) == {"search": {"v": "b"}}


def test_comment_keys_are_ignored(tmp_path):
    write_json(tmp_path / "a.json", {"_comment": "ignored", "_comment_2": "ignored", "ping": {}})
    assert load_documents(tmp_path) == {"ping": {}}


def test_other_files_are_ignored(tmp_path):
    write_json(tmp_path / "a.json", {"ping": {}})
    (tmp_path / "README.md").write_text("not json")
    assert list(load_documents(tmp_path)) == ["ping"]


def test_empty_directory(tmp_path):
    with pytest.raises(GenerationError, match="No descriptor documents"):
        load_documents(tmp_path)


def test_malformed_json(tmp_path):
    (tmp_path / "broken.json").write_text("{not json")
    with pytest.raises(SchemaValidationError, match="broken.json: invalid JSON"):
        load_documents(tmp_path)


def test_top_level_must_be_an_object(tmp_path):
    write_json(tmp_path / "list.json", [1, 2])
    with pytest.raises(SchemaValidationError, match="expected a top-level object, got list"):
        load_documents(tmp_path)


def test_invalid_utf8(tmp_path):
    (tmp_path / "latin1.json").write_bytes(b'{"x": "\xff"}')
    with pytest.raises(SchemaValidationError, match="latin1.json: not valid UTF-8"):
        load_documents(tmp_path)
