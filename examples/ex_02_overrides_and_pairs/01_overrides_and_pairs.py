"""Overrides and bound-call pairs.

Parameters are filled from ``"$name"``, ``"name"`` or positional overrides
before defaults apply. A ``[target, "method"]`` pair builds the target and
calls the method; ``[[target, overrides], "method"]`` gives the constructor
its own overrides.
"""

from __future__ import annotations

from entrywire import Container


class Greeting:
    def __init__(self, salutation: str = "Hello", name: str = "world") -> None:
        self.salutation = salutation
        self.name = name

    def render(self, punctuation: str = "!") -> str:
        return f"{self.salutation}, {self.name}{punctuation}"


def main() -> None:
    container = Container()

    print(container.call(Greeting).render())  # => Hello, world!
    print(container.call(Greeting, {"$name": "Ada"}).render())  # => Hello, Ada!
    print(container.call(Greeting, {0: "Hi"}).render())  # => Hi, world!

    print(container.call([Greeting, "render"], {"punctuation": "?"}))  # => Hello, world?

    pair = [[Greeting, {"name": "Grace"}], "render"]
    print(container.call(pair, {"$punctuation": "."}))  # => Hello, Grace.

    print(container.call("plain value"))  # => plain value


if __name__ == "__main__":
    main()
