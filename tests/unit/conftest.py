"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from typing import Any, Callable, Optional

import pytest
from pytest_mock import MockerFixture

from generation.provider_client import CompletionResult, ProviderClient
from models.config import ProviderConfiguration


@pytest.fixture(name="make_provider_client")
def make_provider_client_fixture(
    mocker: MockerFixture,
) -> Callable[..., ProviderClient]:
    """Return factory creating provider clients with mocked `complete` method.

    The `outcomes` are used as side effects of the `complete` call: strings
    become successful completions, exceptions are raised and coroutine
    functions are awaited to produce the completion text.
    """

    def make(
        provider_id: str,
        outcomes: Optional[list[Any]] = None,
        models: Optional[list[str]] = None,
        priority: int = 0,
    ) -> ProviderClient:
        config = ProviderConfiguration(
            id=provider_id,
            url=f"http://{provider_id}.example.com/v1/chat/completions",
            models=models or [],
            priority=priority,
        )
        client = ProviderClient(
            config, mocker.Mock(), max_tokens=100, temperature=0.5
        )

        remaining = iter(outcomes or [])

        async def complete(
            messages: Any,
            model_id: str,
            api_key: Optional[str] = None,
            timeout: Optional[float] = None,
        ) -> CompletionResult:
            outcome = next(remaining)
            if isinstance(outcome, BaseException):
                raise outcome
            if callable(outcome):
                outcome = await outcome()
            return CompletionResult(
                content=outcome, provider_id=provider_id, model_id=model_id
            )

        client.complete = mocker.AsyncMock(side_effect=complete)  # type: ignore
        return client

    return make
