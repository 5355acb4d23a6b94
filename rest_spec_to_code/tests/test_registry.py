"""Tests for the assembly registry."""

import threading

import pytest

from rest_spec_to_code.pipeline import AssemblyRegistry, NameConflictError


def test_register_new_entry():
    registry = AssemblyRegistry()
    assert registry.register("Cat", "struct Cat {}") is True
    assert "Cat" in registry
    assert registry.get("Cat") == "struct Cat {}"
    assert len(registry) == 1


def test_identical_registration_is_a_no_op():
    registry = AssemblyRegistry()
    registry.register("Cat", "struct Cat {}")
    assert registry.register("Cat", "struct Cat {}") is False
    assert registry.render() == {"Cat": "struct Cat {}"}


def test_different_content_conflicts():
    registry = AssemblyRegistry()
    registry.register("Cat", "struct Cat {}")
    with pytest.raises(NameConflictError) as exc_info:
        registry.register("Cat", "struct Cat { let name: String }")
    assert exc_info.value.name == "Cat"
    assert "Duplicate definition name (Cat)" in str(exc_info.value)
    # The first registration wins
    assert registry.get("Cat") == "struct Cat {}"


def test_render_returns_a_snapshot():
    registry = AssemblyRegistry()
    registry.register("A", "a")
    snapshot = registry.render()
    registry.register("B", "b")
    assert snapshot == {"A": "a"}
    assert registry.render() == {"A": "a", "B": "b"}


def test_concurrent_identical_registrations():
    registry = AssemblyRegistry()
    results = []

    def register():
        results.append(registry.register("Shared", "content"))

    threads = [threading.Thread(target=register) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results.count(True) == 1
    assert results.count(False) == 7
