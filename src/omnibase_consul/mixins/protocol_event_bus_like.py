# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Event Bus Protocol for the Consul service bus layer.

This module provides the minimal protocol an event bus must satisfy to carry
proxied Consul requests and replies.

Concurrency Safety:
    Implementations MUST be safe for concurrent async access. Multiple
    coroutines may publish and subscribe simultaneously.

Related:
    - InMemoryEventBus: In-process implementation
    - ConsulServiceBusBinding / ConsulServiceBusClient: protocol consumers
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Protocol, runtime_checkable

from omnibase_consul.event_bus.models import ModelEventMessage


@runtime_checkable
class ProtocolEventBusLike(Protocol):
    """Minimal publish/subscribe interface used by the service bus layer."""

    async def publish(
        self,
        topic: str,
        key: bytes | None,
        value: bytes,
    ) -> None:
        """Publish raw bytes to a topic."""
        ...

    async def subscribe(
        self,
        topic: str,
        group_id: str,
        on_message: Callable[[ModelEventMessage], Awaitable[None]],
    ) -> Callable[[], Awaitable[None]]:
        """Subscribe to a topic; returns an async unsubscribe function."""
        ...


__all__: list[str] = ["ProtocolEventBusLike"]
