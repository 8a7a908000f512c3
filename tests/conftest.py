"""Pytest configuration and shared fixtures for omnibase_consul tests."""

from __future__ import annotations

import inspect
from collections.abc import AsyncGenerator, Iterator
from unittest.mock import patch

import pytest
import pytest_asyncio

from omnibase_consul.clients import ConsulClient
from omnibase_consul.event_bus import InMemoryEventBus
from tests.helpers import CONSUL_FACTORY_PATH, FakeConsul


# =============================================================================
# Duck Typing Conformance Helpers
# =============================================================================


def assert_has_async_methods(
    obj: object,
    required_methods: list[str],
    *,
    protocol_name: str | None = None,
) -> None:
    """Assert that an object has all required async methods.

    Args:
        obj: The object to check for async method presence.
        required_methods: List of method names that must be async and callable.
        protocol_name: Optional protocol name for clearer error messages.

    Raises:
        AssertionError: If any method is missing, not callable, or not async.
    """
    name = protocol_name or obj.__class__.__name__
    for method_name in required_methods:
        assert hasattr(obj, method_name), f"{name} must have '{method_name}' method"
        method = getattr(obj, method_name)
        assert callable(method), f"{name}.{method_name} must be callable"
        assert inspect.iscoroutinefunction(
            method
        ), f"{name}.{method_name} must be async (coroutine function)"


# =============================================================================
# Consul Fixtures
# =============================================================================


@pytest.fixture
def consul_config() -> dict[str, object]:
    """Provide test Consul client configuration."""
    return {
        "host": "consul.example.com",
        "port": 8500,
        "scheme": "http",
        "token": "acl-token-abc123",
        "datacenter": "dc1",
        "timeout_seconds": 5.0,
    }


@pytest.fixture
def fake_consul() -> FakeConsul:
    """Provide an in-memory python-consul stand-in."""
    return FakeConsul()


@pytest.fixture
def consul_client(
    consul_config: dict[str, object], fake_consul: FakeConsul
) -> Iterator[ConsulClient]:
    """Provide a ConsulClient backed by ``fake_consul``."""
    with patch(CONSUL_FACTORY_PATH, return_value=fake_consul):
        client = ConsulClient(consul_config)
    yield client
    client.close()


@pytest_asyncio.fixture
async def event_bus() -> AsyncGenerator[InMemoryEventBus, None]:
    """Provide a started in-memory event bus."""
    bus = InMemoryEventBus(environment="test", group="consul")
    await bus.start()
    yield bus
    await bus.close()
