from entrywire.container import Container, Overrides
from entrywire.container_context import ContainerContext, container_context, get_container
from entrywire.exceptions import (
    EntryWireError,
    EntryWireInvalidArgumentError,
    EntryWireNotFoundError,
    EntryWireReflectionError,
    EntryWireResolutionDepthError,
)
from entrywire.lock_mode import LockMode
from entrywire.registry import EntryRegistry
from entrywire.types_index import type_identifier

__all__ = [
    "Container",
    "ContainerContext",
    "EntryRegistry",
    "EntryWireError",
    "EntryWireInvalidArgumentError",
    "EntryWireNotFoundError",
    "EntryWireReflectionError",
    "EntryWireResolutionDepthError",
    "LockMode",
    "Overrides",
    "container_context",
    "get_container",
    "type_identifier",
]
