from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping, Sequence
from contextlib import AbstractContextManager, nullcontext
from types import MappingProxyType
from typing import Any, TypeAlias, TypeVar, cast, overload

from entrywire._internal.type_checks import InstantiationPolicy, is_runtime_class
from entrywire.defaults import (
    DEFAULT_AUTOWIRING,
    DEFAULT_LOCK_MODE,
    DEFAULT_MAX_RESOLUTION_DEPTH,
    PARAMETER_NAME_SIGIL,
)
from entrywire.exceptions import (
    EntryWireInvalidArgumentError,
    EntryWireNotFoundError,
    EntryWireReflectionError,
)
from entrywire.integrations.pydantic_settings import (
    is_pydantic_settings_subclass,
    settings_field_overrides,
)
from entrywire.lock_mode import LockMode
from entrywire.parameters import ParameterInfo, ParametersExtractor, count_required
from entrywire.registry import EntryRegistry
from entrywire.resolution_stack import resolution_frame
from entrywire.types_index import TypeLocator

T = TypeVar("T")

Overrides: TypeAlias = Mapping[str | int, Any]
"""Per-call parameter overrides keyed by ``"$name"``, ``"name"`` or position."""

logger = logging.getLogger(__name__)

# Types that never act as the target of a bound-call pair.
_SCALAR_TYPES: tuple[type[Any], ...] = (
    int,
    float,
    complex,
    bytes,
    bytearray,
    dict,
    set,
    frozenset,
)
_EMPTY_OVERRIDES: Mapping[str | int, Any] = MappingProxyType({})


class Container:
    """Register entries and resolve them into live objects.

    An entry is whatever was registered for an identifier: a plain value, a
    callable, a class (or the identifier of one), or a bound-call pair
    ``[target, "method"]`` whose target may carry its own constructor
    overrides as ``[[target, {"$arg": value}], "method"]``.

    ``resolve`` memoizes one value per identifier for the lifetime of the
    container. ``make`` builds a fresh value every time and ``call`` works on
    an entry the caller already holds. Parameters of invoked targets are
    filled from overrides (``"$name"``, ``"name"``, then position), then
    defaults, then by resolving ``"$name"`` for untyped parameters or each
    declared type in order for typed ones.

    With autowiring enabled an unregistered identifier is registered to
    itself, so class identifiers resolve by constructing the class.
    """

    def __init__(
        self,
        *,
        autowiring: bool = DEFAULT_AUTOWIRING,
        lock_mode: LockMode = DEFAULT_LOCK_MODE,
        max_resolution_depth: int | None = DEFAULT_MAX_RESOLUTION_DEPTH,
    ) -> None:
        """Initialize an empty container.

        Args:
            autowiring: Treat unregistered identifiers as entries for
                themselves instead of failing.
            lock_mode: ``LockMode.THREAD`` serializes all container operations
                with a re-entrant lock; ``LockMode.NONE`` disables locking.
            max_resolution_depth: Optional bound on nested ``make`` calls.
                ``None`` leaves cycles to Python's recursion limit.

        Raises:
            EntryWireInvalidArgumentError: If ``lock_mode`` is not a
                ``LockMode`` or ``max_resolution_depth`` is not a positive
                integer.

        Examples:
            .. code-block:: python

                container = Container()

                autowired = Container(autowiring=True)

                threaded = Container(lock_mode=LockMode.THREAD)

        """
        if not isinstance(lock_mode, LockMode):
            msg = f"lock_mode must be a LockMode, got {lock_mode!r}."
            raise EntryWireInvalidArgumentError(msg)
        if max_resolution_depth is not None and (
            isinstance(max_resolution_depth, bool)
            or not isinstance(max_resolution_depth, int)
            or max_resolution_depth < 1
        ):
            msg = f"max_resolution_depth must be a positive integer, got {max_resolution_depth!r}."
            raise EntryWireInvalidArgumentError(msg)

        self._autowiring = autowiring
        self._max_resolution_depth = max_resolution_depth

        self._entries = EntryRegistry()
        self._resolved: dict[str, Any] = {}
        self._type_locator = TypeLocator()
        self._parameters_extractor = ParametersExtractor()
        self._instantiation_policy = InstantiationPolicy()
        self._lock: AbstractContextManager[Any] = (
            threading.RLock() if lock_mode is LockMode.THREAD else nullcontext()
        )
        self._own_identifier = self._type_locator.remember(type(self))

    # region Entry Store

    def register(self, identifier: str | type[Any], entry: Any) -> None:
        """Bind a raw entry to an identifier.

        Re-registering an identifier replaces its entry. Values already
        memoized by ``resolve`` are not affected.

        Args:
            identifier: Non-empty identifier, or a class standing for its
                identifier.
            entry: Value, class, callable or bound-call pair.

        Raises:
            EntryWireInvalidArgumentError: If the identifier is malformed.

        Examples:
            .. code-block:: python

                container.register("greeting", "hello")
                container.register("clock", Clock)
                container.register("report", [Reporter, "render"])

        """
        key = self._normalize_identifier(identifier)
        with self._lock:
            self._entries.register(key, entry)

    def unregister(self, identifier: str | type[Any]) -> None:
        """Remove the raw entry of an identifier, if any.

        The memoized value of the identifier, if ``resolve`` produced one, is
        kept.

        Args:
            identifier: Identifier to unbind.

        """
        key = self._normalize_identifier(identifier)
        with self._lock:
            self._entries.remove(key)

    def contains(self, identifier: str | type[Any]) -> bool:
        """Return whether an identifier has a raw entry.

        Args:
            identifier: Identifier to look up.

        """
        key = self._normalize_identifier(identifier)
        with self._lock:
            return self._entries.contains(key)

    def __contains__(self, identifier: object) -> bool:
        if not (isinstance(identifier, str) and identifier) and not is_runtime_class(identifier):
            return False
        return self.contains(identifier)

    def fetch_raw(self, identifier: str | type[Any]) -> Any:
        """Return the raw entry of an identifier without resolving it.

        Args:
            identifier: Identifier to look up.

        Raises:
            EntryWireNotFoundError: If the identifier has no entry.

        """
        key = self._normalize_identifier(identifier)
        with self._lock:
            return self._entries.fetch(key)

    # endregion Entry Store

    # region Resolution

    @property
    def autowiring(self) -> bool:
        """Whether unregistered identifiers are autowired."""
        return self._autowiring

    def use_autowiring(self, enabled: bool = True) -> None:  # noqa: FBT001, FBT002
        """Toggle autowiring for subsequent ``make``/``resolve`` calls.

        Args:
            enabled: New autowiring state.

        """
        self._autowiring = enabled

    def is_resolved(self, identifier: str | type[Any]) -> bool:
        """Return whether ``resolve`` has memoized a value for an identifier.

        Args:
            identifier: Identifier to look up.

        """
        key = self._normalize_identifier(identifier)
        with self._lock:
            return key in self._resolved

    @overload
    def resolve(self, identifier: type[T], overrides: Overrides | None = None) -> T: ...

    @overload
    def resolve(self, identifier: str, overrides: Overrides | None = None) -> Any: ...

    def resolve(self, identifier: Any, overrides: Overrides | None = None) -> Any:
        """Return the memoized value of an identifier, building it on first use.

        The first call makes the value with ``make`` and stores it; every later
        call returns the identical object and ignores ``overrides``.

        Args:
            identifier: Identifier to resolve, or a class standing for its
                identifier.
            overrides: Parameter overrides used when the value is built.

        Returns:
            The memoized value.

        Raises:
            EntryWireNotFoundError: If the identifier, or a dependency of its
                entry, cannot be resolved.
            EntryWireInvalidArgumentError: If the identifier or overrides are
                malformed.
            EntryWireResolutionDepthError: If a depth limit is configured and
                exceeded.

        Examples:
            .. code-block:: python

                container.register("clock", Clock)
                assert container.resolve("clock") is container.resolve("clock")

        """
        key = self._normalize_identifier(identifier)
        with self._lock:
            if key in self._resolved:
                return self._resolved[key]

            value = self.make(key, overrides)
            logger.debug("Memoizing resolved value for '%s'", key)
            return self._resolved.setdefault(key, value)

    @overload
    def make(self, identifier: type[T], overrides: Overrides | None = None) -> T: ...

    @overload
    def make(self, identifier: str, overrides: Overrides | None = None) -> Any: ...

    def make(self, identifier: Any, overrides: Overrides | None = None) -> Any:
        """Build a fresh value for an identifier without memoizing it.

        The container's own identifier yields the container itself. With
        autowiring enabled an unregistered identifier is first registered as
        its own entry.

        Args:
            identifier: Identifier to build, or a class standing for its
                identifier.
            overrides: Parameter overrides for the invoked target.

        Returns:
            The built value.

        Raises:
            EntryWireNotFoundError: If the identifier is unregistered with
                autowiring off, or a dependency cannot be resolved.
            EntryWireInvalidArgumentError: If the identifier or overrides are
                malformed.
            EntryWireResolutionDepthError: If a depth limit is configured and
                exceeded.

        """
        key = self._normalize_identifier(identifier)
        parameters = self._normalize_overrides(overrides)
        with self._lock, self._resolution_frame(key):
            if key == self._own_identifier:
                return self

            if self._autowiring and not self._entries.contains(key):
                logger.debug("Autowiring unregistered identifier '%s'", key)
                self._entries.register(key, key)
                entry: Any = key
            else:
                entry = self._entries.fetch(key)

            return self._call(entry, parameters)

    def call(self, entry: Any, overrides: Overrides | None = None) -> Any:
        """Invoke an entry directly, bypassing the entry store and memoization.

        Callables are called with synthesized arguments, classes and class
        identifiers are constructed, bound-call pairs build their target and
        call the named method on it. Anything that cannot be interpreted that
        way is returned unchanged.

        Args:
            entry: Entry to invoke.
            overrides: Parameter overrides for the invoked target.

        Returns:
            The produced value, or ``entry`` itself for opaque values.

        Raises:
            EntryWireNotFoundError: If a parameter of the target cannot be
                resolved.
            EntryWireInvalidArgumentError: If overrides are malformed.

        Examples:
            .. code-block:: python

                container.call(Clock)
                container.call([Reporter, "render"], {"$title": "Weekly"})
                container.call([[Reporter, {"$clock": frozen}], "render"])
                container.call(lambda clock: clock.now(), {"clock": frozen})

        """
        parameters = self._normalize_overrides(overrides)
        with self._lock:
            return self._call(entry, parameters)

    # endregion Resolution

    # region Invoker

    def _call(self, entry: Any, parameters: Mapping[str | int, Any]) -> Any:
        if self._is_function_value(entry):
            return self._call_function(entry, parameters)

        try:
            return self._new_instance_entry(entry, parameters)
        except EntryWireReflectionError as error:
            logger.debug("Returning entry %r unchanged: %s", entry, error)
            return entry

    def _is_function_value(self, entry: Any) -> bool:
        return callable(entry) and not isinstance(entry, type)

    def _call_function(
        self,
        entry: Callable[..., Any],
        parameters: Mapping[str | int, Any],
    ) -> Any:
        parameter_infos = self._parameters_extractor.extract_from_callable(entry)
        args, kwargs = self._dependencies(parameter_infos, parameters)
        return entry(*args, **kwargs)

    def _new_instance_entry(self, entry: Any, parameters: Mapping[str | int, Any]) -> Any:
        if self._is_bound_call_pair(entry):
            return self._call_class_with_method(entry, parameters)

        return self._call_class(entry, parameters)

    def _is_bound_call_pair(self, entry: Any) -> bool:
        if not isinstance(entry, (list, tuple)) or not 1 <= len(entry) <= 2:  # noqa: PLR2004
            return False
        target = entry[0]
        if target is None or isinstance(target, _SCALAR_TYPES):
            return False
        if isinstance(target, (str, list, tuple)) and not target:
            return False
        return len(entry) == 1 or isinstance(entry[1], str)

    def _call_class_with_method(
        self,
        entry: Sequence[Any],
        parameters: Mapping[str | int, Any],
    ) -> Any:
        target = entry[0]
        method_name = cast("str | None", entry[1] if len(entry) > 1 else None)

        class_parameters: Mapping[str | int, Any] = _EMPTY_OVERRIDES
        has_nested_parameters = isinstance(target, (list, tuple))
        if has_nested_parameters:
            target, class_parameters = self._unwrap_nested_target(target)

        if method_name is None:
            # No method: the built target itself is the result.
            return self._call_class(
                target,
                class_parameters if has_nested_parameters else parameters,
            )

        built = self._build_target(target, class_parameters)
        return self._call_method(built, method_name, parameters)

    def _unwrap_nested_target(
        self,
        target: Sequence[Any],
    ) -> tuple[Any, Mapping[str | int, Any]]:
        if not target or isinstance(target[0], (list, tuple)):
            msg = f"Nested bound-call target {target!r} must be [target, overrides]."
            raise EntryWireReflectionError(msg)

        class_parameters = target[1] if len(target) > 1 else _EMPTY_OVERRIDES
        if class_parameters is None:
            class_parameters = _EMPTY_OVERRIDES
        if not isinstance(class_parameters, Mapping):
            msg = f"Constructor overrides of {target[0]!r} must be a mapping."
            raise EntryWireReflectionError(msg)
        return target[0], self._normalize_overrides(class_parameters)

    def _build_target(self, target: Any, parameters: Mapping[str | int, Any]) -> Any:
        built = self._call_class(target, parameters)
        if isinstance(built, (str, list, tuple)):
            msg = f"Bound-call target {target!r} did not produce an object."
            raise EntryWireReflectionError(msg)
        return built

    def _call_class(self, entry: Any, parameters: Mapping[str | int, Any]) -> Any:
        if is_runtime_class(entry):
            cls = entry
            self._type_locator.remember(cls)
        elif isinstance(entry, str):
            cls = self._type_locator.locate(entry, import_modules=self._autowiring)
        else:
            # Already-built objects and opaque values.
            return entry

        if not self._instantiation_policy.is_instantiable(cls):
            return entry

        if is_pydantic_settings_subclass(cls):
            return cls(**settings_field_overrides(parameters))

        try:
            parameter_infos = self._parameters_extractor.extract_from_class(cls)
        except (ValueError, TypeError):
            logger.debug("No introspectable constructor for %r; calling without arguments", cls)
            return cls()

        if not parameters and count_required(parameter_infos) == 0:
            return cls()

        args, kwargs = self._dependencies(parameter_infos, parameters)
        return cls(*args, **kwargs)

    def _call_method(
        self,
        target: Any,
        method_name: str,
        parameters: Mapping[str | int, Any],
    ) -> Any:
        method = getattr(target, method_name, None)
        if method is None or not callable(method):
            msg = f"{target!r} has no callable attribute '{method_name}'."
            raise EntryWireReflectionError(msg)

        try:
            parameter_infos = self._parameters_extractor.extract_from_callable(method)
        except (ValueError, TypeError) as error:
            msg = f"Cannot introspect '{method_name}' of {target!r}: {error}"
            raise EntryWireReflectionError(msg) from error

        args, kwargs = self._dependencies(parameter_infos, parameters)
        return method(*args, **kwargs)

    # endregion Invoker

    # region Parameter Resolver

    def _dependencies(
        self,
        parameter_infos: tuple[ParameterInfo, ...],
        parameters: Mapping[str | int, Any],
    ) -> tuple[list[Any], dict[str, Any]]:
        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        for parameter in parameter_infos:
            value = self._resolve_parameter(parameter, parameters)
            if parameter.is_keyword_only:
                kwargs[parameter.name] = value
            else:
                args.append(value)
        return args, kwargs

    def _resolve_parameter(
        self,
        parameter: ParameterInfo,
        parameters: Mapping[str | int, Any],
    ) -> Any:
        sigil_name = f"{PARAMETER_NAME_SIGIL}{parameter.name}"
        if sigil_name in parameters:
            return parameters[sigil_name]
        if parameter.name in parameters:
            return parameters[parameter.name]
        if parameter.position in parameters:
            return parameters[parameter.position]
        if parameter.has_default:
            return parameter.default
        if not parameter.is_typed:
            return self.resolve(sigil_name)
        return self._resolve_parameter_with_type(parameter)

    def _resolve_parameter_with_type(self, parameter: ParameterInfo) -> Any:
        last_error: EntryWireNotFoundError | None = None
        for declared_type in parameter.declared_types:
            identifier = self._declared_type_identifier(declared_type)
            try:
                if isinstance(declared_type, str):
                    self._ensure_hint_names_class(identifier)
                return self.resolve(identifier)
            except EntryWireNotFoundError as error:
                logger.debug(
                    "Declared type '%s' of parameter '%s' is not resolvable: %s",
                    identifier,
                    parameter.name,
                    error,
                )
                last_error = error

        raise cast("EntryWireNotFoundError", last_error)

    def _ensure_hint_names_class(self, identifier: str) -> None:
        # An unevaluated hint must not be autowired into its own source string.
        if self._entries.contains(identifier) or identifier in self._resolved:
            return
        try:
            self._type_locator.locate(identifier, import_modules=self._autowiring)
        except EntryWireReflectionError as error:
            msg = f"Type hint '{identifier}' could not be evaluated and is not registered."
            raise EntryWireNotFoundError(identifier, msg) from error

    def _declared_type_identifier(self, declared_type: Any) -> str:
        if isinstance(declared_type, str):
            # Local classes keep their bare name in postponed annotations.
            return self._type_locator.identifier_for_name(declared_type) or declared_type
        if is_runtime_class(declared_type):
            return self._type_locator.remember(declared_type)
        return getattr(declared_type, "__qualname__", None) or repr(declared_type)

    # endregion Parameter Resolver

    # region Validation

    def _normalize_identifier(self, identifier: object) -> str:
        if is_runtime_class(identifier):
            return self._type_locator.remember(identifier)
        if not isinstance(identifier, str) or not identifier:
            msg = f"Identifier must be a non-empty string or a class, got {identifier!r}."
            raise EntryWireInvalidArgumentError(msg)
        return identifier

    def _normalize_overrides(self, overrides: object) -> Mapping[str | int, Any]:
        if overrides is None:
            return _EMPTY_OVERRIDES
        if not isinstance(overrides, Mapping):
            msg = f"Overrides must be a mapping, got {type(overrides).__qualname__}."
            raise EntryWireInvalidArgumentError(msg)
        for key in overrides:
            if isinstance(key, bool) or not isinstance(key, (str, int)):
                msg = (
                    f"Override key {key!r} must be a parameter name, '$name' or an integer "
                    "position."
                )
                raise EntryWireInvalidArgumentError(msg)
        return overrides

    def _resolution_frame(self, identifier: str) -> AbstractContextManager[None]:
        if self._max_resolution_depth is None:
            return nullcontext()
        return resolution_frame(identifier, max_depth=self._max_resolution_depth)

    # endregion Validation


__all__ = ["Container", "Overrides"]
