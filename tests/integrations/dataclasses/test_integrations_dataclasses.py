"""Tests for dataclass and NamedTuple construction."""

from dataclasses import dataclass, field
from typing import NamedTuple

import pytest

from entrywire.container import Container
from entrywire.exceptions import EntryWireNotFoundError
from entrywire.types_index import type_identifier


class DepService:
    pass


@dataclass
class DataclassModelWithDep:
    dep: DepService


@dataclass
class NestedDataclassModel:
    model: DataclassModelWithDep


@dataclass
class DataclassModelWithDefault:
    dep: DepService
    name: str = "default"


@dataclass(frozen=True)
class TaggedModel:
    name: str
    tags: list[str] = field(default_factory=list)


class Point(NamedTuple):
    x: int
    y: int = 0


class TestDataclassConstruction:
    def test_dataclass_dependency_is_autowired(self, autowiring_container: Container) -> None:
        """Dataclass fields typed with classes are autowired."""
        result = autowiring_container.make(DataclassModelWithDep)

        assert isinstance(result, DataclassModelWithDep)
        assert isinstance(result.dep, DepService)

    def test_nested_dataclasses_are_autowired(self, autowiring_container: Container) -> None:
        """Dataclasses depending on dataclasses are built recursively."""
        result = autowiring_container.make(NestedDataclassModel)

        assert isinstance(result.model.dep, DepService)

    def test_dataclass_default_is_kept(self, autowiring_container: Container) -> None:
        """Fields with defaults keep them."""
        result = autowiring_container.make(DataclassModelWithDefault)

        assert result.name == "default"

    def test_dataclass_field_override(self, container: Container) -> None:
        """Fields can be overridden by name."""
        dep = DepService()

        result = container.call(DataclassModelWithDefault, {"dep": dep, "$name": "custom"})

        assert result.dep is dep
        assert result.name == "custom"

    def test_default_factory_runs_when_not_overridden(self, container: Container) -> None:
        """Fields with a default factory get a fresh value."""
        first = container.call(TaggedModel, {"name": "first"})
        second = container.call(TaggedModel, {"name": "second"})

        assert first.tags == []
        assert first.tags is not second.tags

    def test_unresolvable_field_raises(self, container: Container) -> None:
        """A required field without a registration is not found."""
        with pytest.raises(EntryWireNotFoundError) as exc_info:
            container.call(DataclassModelWithDep)

        assert exc_info.value.identifier == type_identifier(DepService)


class TestNamedTupleConstruction:
    def test_named_tuple_by_name(self, container: Container) -> None:
        """NamedTuple fields are filled by name."""
        assert container.call(Point, {"x": 1}) == Point(1, 0)

    def test_named_tuple_by_position(self, container: Container) -> None:
        """NamedTuple fields are filled by position."""
        assert container.call(Point, {0: 5, 1: 6}) == Point(5, 6)

    def test_named_tuple_identifier_is_registered(self, container: Container) -> None:
        """A registered NamedTuple entry is built on resolution."""
        container.register("origin", Point)

        assert container.resolve("origin", {"$x": 0}) == Point(0, 0)
