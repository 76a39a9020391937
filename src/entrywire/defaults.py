from __future__ import annotations

from entrywire.lock_mode import LockMode

DEFAULT_AUTOWIRING = False

DEFAULT_LOCK_MODE = LockMode.NONE

DEFAULT_MAX_RESOLUTION_DEPTH: int | None = None
"""No depth guard: a cyclic graph recurses until ``RecursionError``."""

PARAMETER_NAME_SIGIL = "$"
"""Prefix naming a parameter explicitly, in overrides and as an identifier."""
