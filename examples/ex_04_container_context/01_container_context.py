"""Shared container: reach one container from anywhere.

``container_context`` lazily creates a process-wide container. Use
``override`` to swap in another container for a block, for example a
container with fakes in tests.
"""

from __future__ import annotations

from entrywire import Container, container_context


class Mailer:
    def send(self, to: str) -> str:
        return f"sent to {to}"


class FakeMailer(Mailer):
    def send(self, to: str) -> str:
        return f"recorded {to}"


def notify(to: str) -> str:
    return container_context.resolve("mailer").send(to)


def main() -> None:
    container_context.register("mailer", Mailer)
    print(notify("ops"))  # => sent to ops

    with container_context.override(Container()) as container:
        container.register("mailer", FakeMailer)
        print(notify("qa"))  # => recorded qa

    print(notify("dev"))  # => sent to dev


if __name__ == "__main__":
    main()
