"""Decorator that makes sure the object is 'connected' according to it's connected predicate."""

from functools import wraps
from typing import Any, Callable


def connection(f: Callable) -> Callable:
    """Reconnect to the storage when the connection is not alive.

    Example:
    ```python
    @connection
    def load(self) -> list[HistoryEntry]:
        ...
    ```
    """

    @wraps(f)
    def wrapper(connectable: Any, *args: Any, **kwargs: Any) -> Callable:
        if not connectable.connected():
            connectable.connect()
        return f(connectable, *args, **kwargs)

    return wrapper
