from __future__ import annotations

import importlib
import warnings
from collections.abc import Mapping
from typing import Any

from entrywire._internal.type_checks import is_runtime_class
from entrywire.defaults import PARAMETER_NAME_SIGIL

_PYDANTIC_V1_WARNING_PATTERN = (
    r"Core Pydantic V1 functionality isn't compatible with Python 3\.14 or greater\."
)


def _load_base_settings(module_name: str) -> type[Any] | None:
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return None
    base_settings = getattr(module, "BaseSettings", None)
    return base_settings if isinstance(base_settings, type) else None


def _discover_settings_bases() -> tuple[type[Any], ...]:
    with warnings.catch_warnings():
        warnings.filterwarnings(
            "ignore",
            message=_PYDANTIC_V1_WARNING_PATTERN,
            category=UserWarning,
        )
        candidates = (
            _load_base_settings("pydantic_settings"),
            _load_base_settings("pydantic.v1"),
        )

    bases: list[type[Any]] = []
    for candidate in candidates:
        if candidate is not None and candidate not in bases:
            bases.append(candidate)
    return tuple(bases)


SETTINGS_BASES: tuple[type[Any], ...] = _discover_settings_bases()


def is_pydantic_settings_subclass(candidate: object) -> bool:
    """Return whether a class is an environment-backed Pydantic settings model.

    Both ``pydantic_settings.BaseSettings`` and the legacy
    ``pydantic.v1.BaseSettings`` are recognized when installed. Without
    Pydantic every candidate is rejected.

    Args:
        candidate: Object to test.

    Returns:
        ``True`` when ``candidate`` is a runtime class deriving from a
        discovered settings base; otherwise ``False``.

    """
    if not is_runtime_class(candidate):
        return False
    try:
        return any(issubclass(candidate, base) for base in SETTINGS_BASES)
    except TypeError:
        return False


def settings_field_overrides(overrides: Mapping[str | int, Any]) -> dict[str, Any]:
    """Turn a parameter override map into settings-model keyword arguments.

    Settings read unspecified fields from the environment, so only name
    overrides are forwarded. ``"$field"`` wins over a bare ``"field"`` key and
    positional keys are ignored.

    Args:
        overrides: Parameter override map given to the container.

    Returns:
        Field values keyed by field name.

    """
    fields: dict[str, Any] = {}
    sigil_fields: dict[str, Any] = {}
    for key, value in overrides.items():
        if not isinstance(key, str):
            continue
        if key.startswith(PARAMETER_NAME_SIGIL):
            sigil_fields[key.removeprefix(PARAMETER_NAME_SIGIL)] = value
        else:
            fields[key] = value
    fields.update(sigil_fields)
    return fields


__all__ = [
    "SETTINGS_BASES",
    "is_pydantic_settings_subclass",
    "settings_field_overrides",
]
