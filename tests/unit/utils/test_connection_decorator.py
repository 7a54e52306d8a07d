"""Unit tests for the connection decorator."""

from typing import Any

import pytest

from utils.connection_decorator import connection


class Connectable:
    """Object with controllable connection state."""

    def __init__(self, alive: bool) -> None:
        """Initialize the object."""
        self.alive = alive
        self.connect_calls = 0

    def connected(self) -> bool:
        """Return connection state."""
        return self.alive

    def connect(self) -> None:
        """Reconnect."""
        self.connect_calls += 1
        self.alive = True

    @connection
    def query(self, value: Any) -> Any:
        """Return value when connected."""
        assert self.alive
        return value


@pytest.mark.parametrize("alive, connect_calls", [(True, 0), (False, 1)])
def test_connection_decorator(alive: bool, connect_calls: int) -> None:
    """Test that connection is reopened only when it is not alive."""
    connectable = Connectable(alive)
    assert connectable.query(42) == 42
    assert connectable.connect_calls == connect_calls


def test_connection_decorator_keeps_metadata() -> None:
    """Test that decorated method keeps its name and docstring."""
    assert Connectable.query.__name__ == "query"
    assert Connectable.query.__doc__ == "Return value when connected."
