# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""In-Memory Event Bus carrying proxied Consul requests inside one process.

Subscribers are invoked directly from ``publish()`` in registration order,
so a request published by ConsulServiceBusClient is handled by the bound
ConsulServiceBusBinding before ``publish()`` returns.

Usage:
    ```python
    bus = InMemoryEventBus(environment="dev", group="consul")
    await bus.start()

    async def handler(msg):
        print(msg.value)
    unsubscribe = await bus.subscribe("consul.service", "proxy", handler)

    await bus.publish("consul.service", None, b"{}")

    await unsubscribe()
    await bus.close()
    ```
"""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable
from typing import Optional

from omnibase_consul.enums import EnumInfraTransportType
from omnibase_consul.errors import InfraUnavailableError, ModelInfraErrorContext
from omnibase_consul.event_bus.models import ModelEventHeaders, ModelEventMessage

logger = logging.getLogger(__name__)

MessageHandler = Callable[[ModelEventMessage], Awaitable[None]]


class InMemoryEventBus:
    """Topic-based in-memory event bus.

    Features:
        - FIFO delivery per topic
        - Multiple subscribers per topic, tagged with a group ID
        - Bounded event history for debugging and tests
        - Coroutine-safe bookkeeping using asyncio.Lock

    Attributes:
        environment: Environment identifier (e.g., "local", "test")
        group: Consumer group identifier
    """

    def __init__(
        self,
        environment: str = "local",
        group: str = "default",
        max_history: int = 1000,
    ) -> None:
        """Initialize the in-memory event bus.

        Args:
            environment: Environment identifier used as message source
            group: Group identifier used as message source
            max_history: Maximum number of messages kept in history
        """
        self._environment = environment
        self._group = group
        self._max_history = max_history

        self._subscribers: dict[str, list[tuple[str, MessageHandler]]] = defaultdict(
            list
        )
        self._event_history: list[ModelEventMessage] = []
        self._topic_offsets: dict[str, int] = defaultdict(int)
        self._lock = asyncio.Lock()
        self._started = False

    @property
    def environment(self) -> str:
        """Environment identifier."""
        return self._environment

    @property
    def group(self) -> str:
        """Consumer group identifier."""
        return self._group

    async def start(self) -> None:
        """Mark the bus ready for publishing. Idempotent."""
        async with self._lock:
            self._started = True
        logger.info(
            "InMemoryEventBus started",
            extra={"environment": self._environment, "group": self._group},
        )

    async def shutdown(self) -> None:
        """Alias for close()."""
        await self.close()

    async def publish(
        self,
        topic: str,
        key: Optional[bytes],
        value: bytes,
        headers: Optional[ModelEventHeaders] = None,
    ) -> None:
        """Publish a message to every subscriber of ``topic``.

        Args:
            topic: Target topic name
            key: Optional message key
            value: Message payload
            headers: Optional headers (generated when omitted)

        Raises:
            InfraUnavailableError: If the bus has not been started
        """
        if headers is None:
            headers = ModelEventHeaders(
                source=f"{self._environment}.{self._group}",
                event_type=topic,
            )

        if not self._started:
            context = ModelInfraErrorContext(
                transport_type=EnumInfraTransportType.EVENT_BUS,
                operation="publish",
                target_name=f"inmemory.{self._environment}",
                correlation_id=headers.correlation_id,
            )
            raise InfraUnavailableError(
                "InMemoryEventBus not started. Call start() first.",
                context=context,
                topic=topic,
            )

        async with self._lock:
            offset = self._topic_offsets[topic]
            self._topic_offsets[topic] = offset + 1

            message = ModelEventMessage(
                topic=topic,
                key=key,
                value=value,
                headers=headers,
                offset=str(offset),
                partition=0,
            )

            self._event_history.append(message)
            if len(self._event_history) > self._max_history:
                self._event_history.pop(0)

            subscribers = list(self._subscribers.get(topic, []))

        # Outside the lock: subscribers may publish replies
        for group_id, callback in subscribers:
            try:
                await callback(message)
            except Exception:
                logger.exception(
                    "Subscriber callback failed",
                    extra={
                        "topic": topic,
                        "group_id": group_id,
                        "correlation_id": str(headers.correlation_id),
                    },
                )

    async def subscribe(
        self,
        topic: str,
        group_id: str,
        on_message: MessageHandler,
    ) -> Callable[[], Awaitable[None]]:
        """Register ``on_message`` for ``topic``.

        Returns:
            Async function removing this subscription. Calling it twice is safe.
        """
        async with self._lock:
            self._subscribers[topic].append((group_id, on_message))
        logger.debug(
            "Subscriber added",
            extra={"topic": topic, "group_id": group_id},
        )

        async def unsubscribe() -> None:
            async with self._lock:
                subscription = (group_id, on_message)
                if subscription in self._subscribers[topic]:
                    self._subscribers[topic].remove(subscription)
                    logger.debug(
                        "Subscriber removed",
                        extra={"topic": topic, "group_id": group_id},
                    )

        return unsubscribe

    async def close(self) -> None:
        """Drop all subscribers and stop accepting publishes. Idempotent."""
        async with self._lock:
            self._subscribers.clear()
            self._started = False
        logger.info(
            "InMemoryEventBus closed",
            extra={"environment": self._environment, "group": self._group},
        )

    async def health_check(self) -> dict[str, object]:
        """Return bus status for diagnostics."""
        async with self._lock:
            subscriber_count = sum(len(subs) for subs in self._subscribers.values())
            topic_count = len([subs for subs in self._subscribers.values() if subs])
            history_size = len(self._event_history)

        return {
            "healthy": self._started,
            "started": self._started,
            "environment": self._environment,
            "group": self._group,
            "subscriber_count": subscriber_count,
            "topic_count": topic_count,
            "history_size": history_size,
        }

    # =========================================================================
    # Debugging/Observability Methods
    # =========================================================================

    async def get_event_history(
        self,
        limit: int = 100,
        topic: Optional[str] = None,
    ) -> list[ModelEventMessage]:
        """Return recent messages, most recent last, optionally filtered by topic."""
        async with self._lock:
            history = list(self._event_history)
        if topic:
            history = [msg for msg in history if msg.topic == topic]
        return history[-limit:]

    def clear_event_history(self) -> None:
        """Clear event history between tests."""
        self._event_history.clear()

    async def get_subscriber_count(self, topic: Optional[str] = None) -> int:
        """Return the number of subscriptions, optionally for one topic."""
        async with self._lock:
            if topic:
                return len(self._subscribers.get(topic, []))
            return sum(len(subs) for subs in self._subscribers.values())


__all__: list[str] = ["InMemoryEventBus"]
