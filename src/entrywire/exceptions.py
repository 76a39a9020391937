from __future__ import annotations

from collections.abc import Sequence


class EntryWireError(Exception):
    """Represent a base class for all entrywire-specific failures.

    Catch this type when you want to handle any entrywire error path without
    matching each concrete exception class individually.
    """


class EntryWireNotFoundError(EntryWireError):
    """Signal that an identifier has no entry and cannot be autowired.

    Raised by ``Container.fetch_raw``, ``Container.make`` and
    ``Container.resolve`` when the identifier is not registered and autowiring
    is disabled. It also surfaces from ``Container.call`` when a parameter of
    the invoked target cannot be resolved: an untyped parameter whose
    ``$name`` identifier is unregistered, or a typed parameter where every
    declared type failed (the last failure is the one propagated).

    Typical fixes include registering the identifier, passing an override for
    the parameter (``{"$name": value}``), giving the parameter a default, or
    enabling autowiring with ``Container.use_autowiring()``.
    """

    def __init__(self, identifier: str, message: str | None = None) -> None:
        self.identifier = identifier
        if message is None:
            message = f"Identifier '{identifier}' is not registered."
        super().__init__(message)


class EntryWireInvalidArgumentError(EntryWireError, TypeError):
    """Signal a malformed identifier or override map.

    Raised when an identifier is not a non-empty string (or a class), when an
    override map is not a mapping, or when an override key is neither a
    string nor an integer position.
    """


class EntryWireReflectionError(EntryWireError):
    """Signal that an entry cannot be reflected upon as a constructible target.

    Raised while interpreting an entry: the identifier does not locate a
    class, a bound-call pair names a missing method, or a method signature
    cannot be introspected. ``Container.call`` recovers from this error by
    returning the entry unchanged, so it never reaches callers of the public
    resolution API.
    """


class EntryWireResolutionDepthError(EntryWireError):
    """Signal that resolution nested deeper than the configured limit.

    Raised by ``Container.make`` (and therefore ``resolve``/``call``) only
    when the container was created with ``max_resolution_depth``. Deep
    nesting usually means a dependency cycle such as ``A -> B -> A``.

    Typical fixes include breaking the cycle with an override or a registered
    entry, or raising the limit for legitimately deep graphs.
    """

    def __init__(self, chain: Sequence[str], max_depth: int) -> None:
        self.chain = tuple(chain)
        self.max_depth = max_depth
        rendered_chain = " -> ".join(self.chain)
        super().__init__(
            f"Resolution depth exceeded the limit of {max_depth}: {rendered_chain}.",
        )
