"""Unit tests for exception hierarchy."""

import pytest

from pphp_routes.exceptions import (
    CatchAllPositionError,
    FileListNotFoundError,
    MalformedPathError,
    ProjectNotFoundError,
    RoutingToolkitError,
    SchemaError,
    UnmatchedRouteConvention,
)


class TestRoutingToolkitError:
    """Tests for the base exception class."""

    def test_inherits_from_exception(self) -> None:
        """RoutingToolkitError inherits from Exception."""
        assert issubclass(RoutingToolkitError, Exception)

    def test_message_is_preserved(self) -> None:
        """Exception message is accessible."""
        error = RoutingToolkitError("specific error details")
        assert str(error) == "specific error details"


@pytest.mark.parametrize(
    "error_type",
    [
        SchemaError,
        MalformedPathError,
        CatchAllPositionError,
        UnmatchedRouteConvention,
        ProjectNotFoundError,
        FileListNotFoundError,
    ],
)
class TestSubclasses:
    """Every package error can be caught with the base class."""

    def test_inherits_from_base(self, error_type) -> None:
        assert issubclass(error_type, RoutingToolkitError)

    def test_can_be_caught_with_base_class(self, error_type) -> None:
        with pytest.raises(RoutingToolkitError, match="details"):
            raise error_type("details")


def test_catch_all_position_is_a_malformed_path() -> None:
    """CatchAllPositionError can be handled as a MalformedPathError."""
    assert issubclass(CatchAllPositionError, MalformedPathError)


def test_unmatched_convention_is_not_a_malformed_path() -> None:
    """A non-route file is a different condition from a broken path."""
    assert not issubclass(UnmatchedRouteConvention, MalformedPathError)
