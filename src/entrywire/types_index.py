from __future__ import annotations

import builtins
import importlib
import logging
import sys
from typing import Any

from entrywire._internal.type_checks import is_runtime_class
from entrywire.exceptions import EntryWireReflectionError

logger = logging.getLogger(__name__)


def type_identifier(cls: type[Any]) -> str:
    """Return the identifier a class is registered and resolved under.

    Classes from ``builtins`` use their bare name (``"int"``); every other
    class uses ``"<module>.<qualname>"``.

    Args:
        cls: Class to name.

    Returns:
        The identifier string.

    Examples:
        .. code-block:: python

            import datetime

            assert type_identifier(datetime.date) == "datetime.date"
            assert type_identifier(int) == "int"

    """
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


class TypeLocator:
    """Map type identifiers back to runtime classes.

    Classes the container has already seen are remembered under their
    identifier, which makes classes defined in local scopes resolvable. Any
    other identifier is treated as a dotted path; names without a dot are
    looked up in ``builtins``. Dotted paths resolve against modules that are
    already loaded and import new modules only when asked to, since importing
    runs module-level code.
    """

    def __init__(self) -> None:
        self._known_types: dict[str, type[Any]] = {}

    def remember(self, cls: type[Any]) -> str:
        """Index a class and return its identifier.

        Args:
            cls: Class to index.

        Returns:
            The class identifier.

        """
        identifier = type_identifier(cls)
        self._known_types.setdefault(identifier, cls)
        return identifier

    def identifier_for_name(self, name: str) -> str | None:
        """Match an unevaluated type hint against the remembered classes.

        A hint such as ``"Engine"`` that could not be evaluated (a class local
        to a function, or a name imported only for type checking) matches a
        remembered identifier equal to it or ending in ``".Engine"``.

        Args:
            name: Type hint source string.

        Returns:
            The identifier of the single matching class, or ``None`` when no
            class or more than one class matches.

        """
        if name in self._known_types:
            return name

        suffix = f".{name}"
        matches = [identifier for identifier in list(self._known_types) if identifier.endswith(suffix)]
        if len(matches) != 1:
            return None
        return matches[0]

    def locate(self, identifier: str, *, import_modules: bool = False) -> type[Any]:
        """Return the class named by an identifier.

        Args:
            identifier: Identifier to look up.
            import_modules: Import modules named by a dotted identifier that
                are not loaded yet. Importing executes the module's top-level
                code.

        Returns:
            The located class.

        Raises:
            EntryWireReflectionError: If the identifier does not name a class.

        """
        known_type = self._known_types.get(identifier)
        if known_type is not None:
            return known_type

        located = self._find_dotted(identifier, import_modules=import_modules)
        if not is_runtime_class(located):
            msg = f"Identifier '{identifier}' names {located!r}, which is not a class."
            raise EntryWireReflectionError(msg)

        self._known_types[identifier] = located
        return located

    def _find_dotted(self, identifier: str, *, import_modules: bool) -> object:
        segments = identifier.split(".")
        if not all(segment.isidentifier() for segment in segments):
            msg = f"Identifier '{identifier}' is not a dotted Python name."
            raise EntryWireReflectionError(msg)

        if len(segments) == 1:
            try:
                return getattr(builtins, identifier)
            except AttributeError as error:
                msg = f"Identifier '{identifier}' is not a builtin name."
                raise EntryWireReflectionError(msg) from error

        for split_at in range(len(segments) - 1, 0, -1):
            module_name = ".".join(segments[:split_at])
            target: object | None = sys.modules.get(module_name)
            if target is None and import_modules:
                try:
                    target = importlib.import_module(module_name)
                except ImportError:
                    continue
                logger.debug("Imported module '%s' for identifier '%s'", module_name, identifier)
            if target is None:
                continue

            try:
                for attribute in segments[split_at:]:
                    target = getattr(target, attribute)
            except AttributeError as error:
                msg = f"Module '{module_name}' has no attribute path for '{identifier}'."
                raise EntryWireReflectionError(msg) from error
            return target

        msg = f"No loaded module found for identifier '{identifier}'."
        raise EntryWireReflectionError(msg)


__all__ = ["TypeLocator", "type_identifier"]
