from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from entrywire.exceptions import EntryWireNotFoundError


class EntryRegistry:
    """Store raw entries indexed by identifier.

    Entries are kept verbatim: values, classes, callables and bound-call pairs
    are only interpreted when a container resolves them. Registering an
    existing identifier replaces the previous entry.
    """

    def __init__(self) -> None:
        self._entries: dict[str, Any] = {}

    def register(self, identifier: str, entry: Any) -> None:
        """Bind an entry to an identifier, replacing any previous entry.

        Args:
            identifier: Identifier to bind.
            entry: Raw entry value.

        """
        self._entries[identifier] = entry

    def contains(self, identifier: str) -> bool:
        """Return whether an identifier has an entry.

        Args:
            identifier: Identifier to look up.

        """
        return identifier in self._entries

    def fetch(self, identifier: str) -> Any:
        """Return the raw entry bound to an identifier.

        Args:
            identifier: Identifier to look up.

        Raises:
            EntryWireNotFoundError: If the identifier has no entry.

        """
        try:
            return self._entries[identifier]
        except KeyError:
            raise EntryWireNotFoundError(identifier) from None

    def remove(self, identifier: str) -> None:
        """Drop the entry bound to an identifier, if any.

        Args:
            identifier: Identifier to unbind.

        """
        self._entries.pop(identifier, None)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
