"""Common types for the project."""

from typing import Literal, TypedDict


class Singleton(type):
    """Metaclass for Singleton support."""

    _instances = {}  # type: ignore

    def __call__(cls, *args, **kwargs):  # type: ignore
        """Ensure a single instance is created."""
        if cls not in cls._instances:
            cls._instances[cls] = super(Singleton, cls).__call__(*args, **kwargs)
        return cls._instances[cls]


class ChatMessage(TypedDict):
    """One message in OpenAI compatible chat completion request."""

    role: Literal["system", "user", "assistant"]
    content: str


Messages = list[ChatMessage]
