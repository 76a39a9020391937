"""Errors and troubleshooting.

An unresolvable parameter raises ``EntryWireNotFoundError`` naming the
missing identifier; an override or a registration fixes it. Dependency
cycles are reported by ``EntryWireResolutionDepthError`` when the container
has a depth limit.
"""

from __future__ import annotations

from entrywire import Container, EntryWireNotFoundError, EntryWireResolutionDepthError


class Engine:
    pass


class Car:
    def __init__(self, engine: Engine) -> None:
        self.engine = engine


class Chicken:
    def __init__(self, egg: Egg) -> None:
        self.egg = egg


class Egg:
    def __init__(self, chicken: Chicken) -> None:
        self.chicken = chicken


def main() -> None:
    container = Container()
    try:
        container.call(Car)
    except EntryWireNotFoundError as error:
        print(f"missing={error.identifier}")  # => missing=__main__.Engine

    car = container.call(Car, {"engine": Engine()})
    print(f"engine={type(car.engine).__name__}")  # => engine=Engine

    guarded = Container(autowiring=True, max_resolution_depth=4)
    try:
        guarded.make(Chicken)
    except EntryWireResolutionDepthError as error:
        names = [identifier.rsplit(".", maxsplit=1)[-1] for identifier in error.chain]
        print(f"depth={len(error.chain)}")  # => depth=5
        print(" -> ".join(names))  # => Chicken -> Egg -> Chicken -> Egg -> Chicken


if __name__ == "__main__":
    main()
