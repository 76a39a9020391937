from __future__ import annotations

from collections.abc import Iterator

import pytest

from entrywire.container import Container
from entrywire.container_context import container_context


@pytest.fixture()
def entrywire_container() -> Iterator[Container]:
    """Provide a fresh container bound as the process-wide shared container.

    Code under test that reaches the shared container through
    ``container_context`` or ``get_container()`` sees this instance. The
    previous binding is restored after the test, so registrations never leak
    between tests.

    Yields:
        A new ``Container`` instance.

    """
    with container_context.override(Container()) as container:
        yield container


@pytest.fixture()
def entrywire_autowiring_container() -> Iterator[Container]:
    """Provide a fresh autowiring container bound as the shared container.

    Yields:
        A new ``Container`` with autowiring enabled.

    """
    with container_context.override(Container(autowiring=True)) as container:
        yield container
