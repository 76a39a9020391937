from __future__ import annotations

from enum import Enum


class LockMode(Enum):
    """Select locking behavior for a container's entry store and resolved cache.

    Resolution is synchronous and recursive, so the thread lock is re-entrant
    and held for the whole of a top-level ``resolve``/``make``/``call``.
    """

    THREAD = "thread"
    """Serialize container operations with one ``threading.RLock``."""

    NONE = "none"
    """Disable locking; the container is used from a single thread."""
