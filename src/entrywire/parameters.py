from __future__ import annotations

import functools
import inspect
import logging
import sys
import types
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from inspect import Parameter
from typing import (
    Annotated,
    Any,
    ForwardRef,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from entrywire._internal.type_checks import is_runtime_class

if sys.version_info >= (3, 14):
    import annotationlib

    def _get_raw_annotations(obj: object) -> Mapping[str, Any]:
        return annotationlib.get_annotations(obj, format=annotationlib.Format.FORWARDREF)

else:

    def _get_raw_annotations(obj: object) -> Mapping[str, Any]:
        return inspect.get_annotations(obj)  # type: ignore[arg-type]


logger = logging.getLogger(__name__)

_MISSING_ANNOTATION = object()
_VARIADIC_KINDS = frozenset({Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD})


@dataclass(frozen=True, slots=True)
class ParameterInfo:
    """Describe one declared parameter of a callable, constructor or method."""

    name: str
    position: int
    declared_types: tuple[Any, ...]
    """Candidate types in declaration order; empty for untyped parameters."""
    has_default: bool
    default: Any
    kind: Any

    @property
    def is_typed(self) -> bool:
        return bool(self.declared_types)

    @property
    def is_keyword_only(self) -> bool:
        return self.kind is Parameter.KEYWORD_ONLY


def declared_type_candidates(annotation: Any) -> tuple[Any, ...]:
    """Flatten an annotation into the ordered types a parameter accepts.

    ``X | Y`` and ``Union[X, Y]`` yield ``(X, Y)``; ``None`` members are
    dropped, so ``Optional[X]`` yields ``(X,)``. ``Annotated`` metadata is
    stripped and parameterized generics yield their origin class. ``Any`` and
    a missing annotation yield no candidates. String forward references are
    kept verbatim and unevaluated ``ForwardRef`` objects yield their source
    string.

    Args:
        annotation: Evaluated or raw parameter annotation.

    Returns:
        Candidate types in declaration order.

    """
    if annotation is Parameter.empty or annotation is Any or annotation is None:
        return ()
    if annotation is type(None):
        return ()
    if isinstance(annotation, ForwardRef):
        return (annotation.__forward_arg__,)

    origin = get_origin(annotation)
    if origin is Annotated:
        return declared_type_candidates(get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        candidates: list[Any] = []
        for member in get_args(annotation):
            candidates.extend(declared_type_candidates(member))
        return tuple(candidates)
    if origin is not None and is_runtime_class(origin):
        return (origin,)
    return (annotation,)


def count_required(parameters: tuple[ParameterInfo, ...]) -> int:
    """Return how many parameters have no default value."""
    return sum(1 for parameter in parameters if not parameter.has_default)


@dataclass(slots=True)
class ParametersExtractor:
    """Extract declared parameters from functions, methods and classes."""

    def extract_from_callable(self, func: Callable[..., Any]) -> tuple[ParameterInfo, ...]:
        """Extract parameters from a function, bound method or callable object.

        Args:
            func: Callable to inspect.

        Raises:
            ValueError: If no signature can be found for ``func``.
            TypeError: If ``func`` is not supported by ``inspect.signature``.

        """
        annotations = self._resolved_type_hints(self._hints_target(func))
        return self._build_parameters(inspect.signature(func), annotations)

    def extract_from_class(self, cls: type[Any]) -> tuple[ParameterInfo, ...]:
        """Extract constructor parameters from a class.

        Class-level annotations (dataclass and model fields) are merged with
        the hints of ``__init__`` and ``__new__``.

        Args:
            cls: Class to inspect.

        Raises:
            ValueError: If no signature can be found for ``cls``.
            TypeError: If ``cls`` is not supported by ``inspect.signature``.

        """
        signature = inspect.signature(cls)
        annotations = self._resolved_type_hints(cls)
        for member_name in ("__new__", "__init__"):
            member = getattr(cls, member_name)
            for parameter_name, annotation in self._resolved_type_hints(member).items():
                annotations.setdefault(parameter_name, annotation)
        return self._build_parameters(signature, annotations)

    def _build_parameters(
        self,
        signature: inspect.Signature,
        annotations: dict[str, Any],
    ) -> tuple[ParameterInfo, ...]:
        parameters: list[ParameterInfo] = []
        position = 0
        for parameter in signature.parameters.values():
            if parameter.kind in _VARIADIC_KINDS:
                continue

            annotation = annotations.get(parameter.name, _MISSING_ANNOTATION)
            if annotation is _MISSING_ANNOTATION:
                annotation = parameter.annotation

            has_default = parameter.default is not Parameter.empty
            parameters.append(
                ParameterInfo(
                    name=parameter.name,
                    position=position,
                    declared_types=declared_type_candidates(annotation),
                    has_default=has_default,
                    default=parameter.default if has_default else None,
                    kind=parameter.kind,
                ),
            )
            position += 1
        return tuple(parameters)

    def _hints_target(self, func: Callable[..., Any]) -> object:
        if isinstance(func, functools.partial):
            return self._hints_target(func.func)
        if inspect.isroutine(func):
            return func
        return type(func).__call__

    def _resolved_type_hints(self, target: object) -> dict[str, Any]:
        try:
            return dict(get_type_hints(target, include_extras=True))
        except (AttributeError, NameError, TypeError) as error:
            logger.debug("Evaluating hints of %r one by one: %s", target, error)

        # Only the hints that fail on their own stay raw strings.
        hints: dict[str, Any] = {}
        for annotations, globalns, localns in self._annotation_scopes(target):
            for name, annotation in annotations.items():
                hints[name] = _evaluate_annotation(annotation, globalns, localns)
        return hints

    def _annotation_scopes(
        self,
        target: object,
    ) -> Iterator[tuple[dict[str, Any], dict[str, Any], dict[str, Any] | None]]:
        if isinstance(target, type):
            # Later classes in the reversed MRO override earlier ones.
            for base in reversed(target.__mro__):
                module = sys.modules.get(base.__module__)
                yield _raw_annotations(base), getattr(module, "__dict__", {}), dict(vars(base))
            return

        unwrapped = inspect.unwrap(target) if callable(target) else target
        yield _raw_annotations(target), getattr(unwrapped, "__globals__", {}), None


def _raw_annotations(obj: object) -> dict[str, Any]:
    try:
        return dict(_get_raw_annotations(obj))
    except (NameError, TypeError):
        return {}


def _evaluate_annotation(
    annotation: Any,
    globalns: dict[str, Any],
    localns: dict[str, Any] | None,
) -> Any:
    holder = types.SimpleNamespace(__annotations__={"annotation": annotation})
    try:
        hints = get_type_hints(holder, globalns=globalns, localns=localns, include_extras=True)
    except (AttributeError, NameError, TypeError, SyntaxError):
        return annotation
    return hints["annotation"]


__all__ = [
    "ParameterInfo",
    "ParametersExtractor",
    "count_required",
    "declared_type_candidates",
]
