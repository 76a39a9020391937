"""Tests for the raw entry store and the container's store operations."""

from __future__ import annotations

import pytest

from entrywire.container import Container
from entrywire.exceptions import EntryWireInvalidArgumentError, EntryWireNotFoundError
from entrywire.registry import EntryRegistry


class _Service:
    def bar(self) -> None:
        pass


class TestEntryRegistry:
    def test_new_registry_is_empty(self) -> None:
        registry = EntryRegistry()

        assert len(registry) == 0
        assert list(registry) == []

    def test_contains_is_false_for_unregistered_identifier(self) -> None:
        assert EntryRegistry().contains("unregistered") is False

    def test_fetch_raises_for_unregistered_identifier(self) -> None:
        with pytest.raises(EntryWireNotFoundError) as exc_info:
            EntryRegistry().fetch("unregistered")

        assert exc_info.value.identifier == "unregistered"

    def test_register_overwrites_previous_entry(self) -> None:
        registry = EntryRegistry()

        registry.register("foo", "bar")
        registry.register("foo", "baz")

        assert registry.fetch("foo") == "baz"
        assert len(registry) == 1

    def test_remove_is_noop_for_unregistered_identifier(self) -> None:
        registry = EntryRegistry()

        registry.remove("unregistered")

        assert "unregistered" not in registry

    def test_iteration_yields_identifiers_in_registration_order(self) -> None:
        registry = EntryRegistry()
        registry.register("b", 1)
        registry.register("a", 2)

        assert list(registry) == ["b", "a"]


def test_contains_is_false_for_unregistered_identifier(container: Container) -> None:
    assert container.contains("unregistered") is False
    assert "unregistered" not in container


def test_fetch_raw_raises_for_unregistered_identifier(container: Container) -> None:
    with pytest.raises(EntryWireNotFoundError):
        container.fetch_raw("unregistered")


def test_register_then_contains_and_fetch_raw(container: Container) -> None:
    container.register("foo", "bar")

    assert container.contains("foo") is True
    assert "foo" in container
    assert container.fetch_raw("foo") == "bar"


def test_fetch_raw_returns_callable_entry_verbatim(container: Container) -> None:
    def entry() -> str:
        return "bar"

    container.register("foo", entry)

    assert container.fetch_raw("foo") is entry
    assert container.fetch_raw("foo")() == "bar"


def test_fetch_raw_returns_object_entry_verbatim(container: Container) -> None:
    service = _Service()

    container.register("foo", service)

    assert container.fetch_raw("foo") is service


def test_unregister_removes_entry(container: Container) -> None:
    container.register("foo", "bar")

    container.unregister("foo")

    assert container.contains("foo") is False
    with pytest.raises(EntryWireNotFoundError):
        container.fetch_raw("foo")


def test_class_identifier_is_normalized_to_its_name(container: Container) -> None:
    container.register(_Service, "entry")

    assert container.contains(f"{_Service.__module__}.{_Service.__qualname__}")
    assert _Service in container


@pytest.mark.parametrize("identifier", [123, "", None, b"foo", ["foo"]])
def test_register_rejects_malformed_identifier(container: Container, identifier: object) -> None:
    with pytest.raises(EntryWireInvalidArgumentError):
        container.register(identifier, "bar")  # type: ignore[arg-type]


def test_malformed_identifier_is_a_type_error(container: Container) -> None:
    with pytest.raises(TypeError):
        container.fetch_raw(123)  # type: ignore[arg-type]


def test_in_operator_is_false_for_malformed_identifier(container: Container) -> None:
    assert 123 not in container
    assert "" not in container
