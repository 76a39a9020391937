"""Memoization: ``resolve`` versus ``make``.

``resolve`` builds an identifier once and returns the same object for the
lifetime of the container, even after the entry is unregistered. ``make``
always builds a fresh value.
"""

from __future__ import annotations

from entrywire import Container


class Counter:
    instances = 0

    def __init__(self) -> None:
        Counter.instances += 1


def main() -> None:
    container = Container()
    container.register("counter", Counter)

    first = container.resolve("counter")
    second = container.resolve("counter")
    print(f"resolve_same={first is second}")  # => resolve_same=True

    made = container.make("counter")
    print(f"make_fresh={made is not first}")  # => make_fresh=True
    print(f"instances={Counter.instances}")  # => instances=2

    container.unregister("counter")
    print(f"registered={container.contains('counter')}")  # => registered=False
    print(f"still_resolved={container.resolve('counter') is first}")  # => still_resolved=True


if __name__ == "__main__":
    main()
