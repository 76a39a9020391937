"""Quickstart: autowire a dependency chain from type hints.

Enable autowiring, make only the top-level service, and let entrywire
construct every class it depends on.
"""

from __future__ import annotations

from entrywire import Container


class Clock:
    def __init__(self) -> None:
        self.zone = "UTC"


class Formatter:
    def __init__(self, clock: Clock) -> None:
        self.clock = clock


class Reporter:
    def __init__(self, formatter: Formatter) -> None:
        self.formatter = formatter


def main() -> None:
    container = Container(autowiring=True)
    reporter = container.make(Reporter)

    print(f"zone={reporter.formatter.clock.zone}")  # => zone=UTC

    chain = (
        f"{type(reporter).__name__}"
        f">{type(reporter.formatter).__name__}"
        f">{type(reporter.formatter.clock).__name__}"
    )
    print(f"chain={chain}")  # => chain=Reporter>Formatter>Clock


if __name__ == "__main__":
    main()
