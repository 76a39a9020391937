from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar, overload

from entrywire.container import Container, Overrides

T = TypeVar("T")


class ContainerContext:
    """Hold the process-wide shared container and proxy calls to it.

    The first access creates the container with ``factory`` and every later
    access returns the same instance. The binding is explicit state rather
    than a class-level singleton: ``set_current`` substitutes another
    container (for example in tests) and ``reset`` drops the binding so the
    next access creates a fresh container. There is no teardown.

    The binding is process-global for this instance (not task-local or
    thread-local).
    """

    def __init__(self, factory: Callable[[], Container] = Container) -> None:
        self._factory = factory
        self._container: Container | None = None
        self._lock = threading.Lock()

    def get_current(self) -> Container:
        """Return the shared container, creating it on first use.

        Returns:
            The bound container.

        """
        container = self._container
        if container is None:
            with self._lock:
                if self._container is None:
                    self._container = self._factory()
                container = self._container
        return container

    def set_current(self, container: Container) -> None:
        """Bind a container as the shared instance.

        Args:
            container: Container to bind.

        """
        self._container = container

    def reset(self) -> None:
        """Drop the bound container; the next access creates a new one."""
        self._container = None

    @property
    def is_bound(self) -> bool:
        """Whether a container has been created or bound."""
        return self._container is not None

    @contextmanager
    def override(self, container: Container) -> Iterator[Container]:
        """Bind a container for the duration of a ``with`` block.

        The previous binding, including "nothing bound yet", is restored on
        exit.

        Args:
            container: Container to bind temporarily.

        Yields:
            The temporarily bound container.

        Examples:
            .. code-block:: python

                with container_context.override(Container(autowiring=True)) as container:
                    container.register("greeting", "hi")

        """
        previous = self._container
        self._container = container
        try:
            yield container
        finally:
            self._container = previous

    def register(self, identifier: str | type[Any], entry: Any) -> None:
        """Register an entry on the shared container.

        Args:
            identifier: Identifier to bind.
            entry: Raw entry value.

        """
        self.get_current().register(identifier, entry)

    def unregister(self, identifier: str | type[Any]) -> None:
        """Remove an entry from the shared container.

        Args:
            identifier: Identifier to unbind.

        """
        self.get_current().unregister(identifier)

    def contains(self, identifier: str | type[Any]) -> bool:
        """Return whether the shared container has an entry for an identifier.

        Args:
            identifier: Identifier to look up.

        """
        return self.get_current().contains(identifier)

    def fetch_raw(self, identifier: str | type[Any]) -> Any:
        """Return a raw entry of the shared container.

        Args:
            identifier: Identifier to look up.

        """
        return self.get_current().fetch_raw(identifier)

    @overload
    def resolve(self, identifier: type[T], overrides: Overrides | None = None) -> T: ...

    @overload
    def resolve(self, identifier: str, overrides: Overrides | None = None) -> Any: ...

    def resolve(self, identifier: Any, overrides: Overrides | None = None) -> Any:
        """Resolve a memoized value through the shared container.

        Args:
            identifier: Identifier to resolve.
            overrides: Parameter overrides used when the value is built.

        """
        return self.get_current().resolve(identifier, overrides)

    def make(self, identifier: Any, overrides: Overrides | None = None) -> Any:
        """Build a fresh value through the shared container.

        Args:
            identifier: Identifier to build.
            overrides: Parameter overrides for the invoked target.

        """
        return self.get_current().make(identifier, overrides)

    def call(self, entry: Any, overrides: Overrides | None = None) -> Any:
        """Invoke an entry through the shared container.

        Args:
            entry: Entry to invoke.
            overrides: Parameter overrides for the invoked target.

        """
        return self.get_current().call(entry, overrides)

    def use_autowiring(self, enabled: bool = True) -> None:  # noqa: FBT001, FBT002
        """Toggle autowiring on the shared container.

        Args:
            enabled: New autowiring state.

        """
        self.get_current().use_autowiring(enabled)


container_context = ContainerContext()
"""Process-wide shared container accessor.

Examples:
    .. code-block:: python

        from entrywire import container_context

        container_context.register("greeting", "hello")
        assert container_context.resolve("greeting") == "hello"
"""


def get_container() -> Container:
    """Return the process-wide shared container, creating it on first use."""
    return container_context.get_current()


__all__ = ["ContainerContext", "container_context", "get_container"]
