from __future__ import annotations

import enum
import inspect
import types
from dataclasses import dataclass
from typing import Any, TypeGuard


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


@dataclass(frozen=True, slots=True)
class InstantiationPolicy:
    """Internal policy deciding whether a class may be constructed by the invoker."""

    def is_instantiable(self, candidate: object) -> TypeGuard[type[Any]]:
        """Return true when calling the class would build a new instance.

        Abstract classes, protocols, enums and metaclasses are rejected; the
        invoker hands such entries back unchanged.

        Args:
            candidate: Value being checked.

        """
        if not is_runtime_class(candidate):
            return False
        if inspect.isabstract(candidate):
            return False
        if issubclass(candidate, (type, enum.Enum)):
            return False
        return not getattr(candidate, "_is_protocol", False)


__all__ = ["InstantiationPolicy", "is_runtime_class"]
