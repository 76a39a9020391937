"""Tests for the exception hierarchy."""

import pytest

from entrywire.exceptions import (
    EntryWireError,
    EntryWireInvalidArgumentError,
    EntryWireNotFoundError,
    EntryWireReflectionError,
    EntryWireResolutionDepthError,
)


class TestExceptionHierarchy:
    @pytest.mark.parametrize(
        "exception_class",
        [
            EntryWireNotFoundError,
            EntryWireInvalidArgumentError,
            EntryWireReflectionError,
            EntryWireResolutionDepthError,
        ],
    )
    def test_all_errors_derive_from_base(self, exception_class: type[Exception]) -> None:
        """Every concrete error can be caught as ``EntryWireError``."""
        assert issubclass(exception_class, EntryWireError)

    def test_invalid_argument_is_type_error(self) -> None:
        """Malformed arguments are also ``TypeError``."""
        assert issubclass(EntryWireInvalidArgumentError, TypeError)


class TestEntryWireNotFoundError:
    def test_default_message_names_identifier(self) -> None:
        """The default message mentions the missing identifier."""
        error = EntryWireNotFoundError("clock")

        assert error.identifier == "clock"
        assert str(error) == "Identifier 'clock' is not registered."

    def test_custom_message(self) -> None:
        """A custom message replaces the default one."""
        error = EntryWireNotFoundError("clock", "no clock today")

        assert error.identifier == "clock"
        assert str(error) == "no clock today"


class TestEntryWireResolutionDepthError:
    def test_chain_and_limit_are_exposed(self) -> None:
        """The error keeps the chain as a tuple along with the limit."""
        error = EntryWireResolutionDepthError(["a", "b", "a"], 2)

        assert error.chain == ("a", "b", "a")
        assert error.max_depth == 2

    def test_message_renders_chain(self) -> None:
        """The message shows the limit and the identifier chain."""
        error = EntryWireResolutionDepthError(["a", "b", "a"], 2)

        assert str(error) == "Resolution depth exceeded the limit of 2: a -> b -> a."
