"""Shared pytest fixtures for entrywire tests."""

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

from entrywire.container import Container
from entrywire.parameters import ParametersExtractor

UNLOADED_MODULE_NAME = "entrywire_unloaded_widgets"


@pytest.fixture()
def container() -> Container:
    """Default container with autowiring disabled."""
    return Container()


@pytest.fixture()
def autowiring_container() -> Container:
    """Container with autowiring enabled."""
    return Container(autowiring=True)


@pytest.fixture()
def parameters_extractor() -> ParametersExtractor:
    """ParametersExtractor instance."""
    return ParametersExtractor()


@pytest.fixture()
def unloaded_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[str]:
    """Importable module with a ``Widget`` class that is not loaded yet."""
    (tmp_path / f"{UNLOADED_MODULE_NAME}.py").write_text(
        "class Widget:\n    pass\n",
        encoding="utf-8",
    )
    monkeypatch.syspath_prepend(str(tmp_path))
    sys.modules.pop(UNLOADED_MODULE_NAME, None)
    yield UNLOADED_MODULE_NAME
    sys.modules.pop(UNLOADED_MODULE_NAME, None)
