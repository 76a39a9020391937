from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from entrywire.exceptions import EntryWireResolutionDepthError

# Identifiers currently being made in this context, outermost first.
_resolution_chain: ContextVar[tuple[str, ...]] = ContextVar(
    "entrywire_resolution_chain",
    default=(),
)


def current_resolution_chain() -> tuple[str, ...]:
    """Return the identifiers being made in the current context, outermost first."""
    return _resolution_chain.get()


@contextmanager
def resolution_frame(identifier: str, *, max_depth: int) -> Iterator[None]:
    """Track one nested ``make`` call and enforce the depth limit.

    Args:
        identifier: Identifier being made.
        max_depth: Maximum number of nested frames.

    Raises:
        EntryWireResolutionDepthError: If entering the frame would exceed
            ``max_depth``.

    """
    chain = _resolution_chain.get()
    if len(chain) >= max_depth:
        raise EntryWireResolutionDepthError([*chain, identifier], max_depth)

    token = _resolution_chain.set((*chain, identifier))
    try:
        yield
    finally:
        _resolution_chain.reset(token)
