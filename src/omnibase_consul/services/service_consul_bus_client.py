# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Bus client calling a remote ConsulServiceProxy.

ConsulServiceBusClient offers the ConsulClient operation set to a caller
that can only reach the service over a bus. Each call publishes one
ModelConsulServiceRequest to the service address and completes from the
reply carrying the same correlation ID.

Correlation:
    Pending calls are tracked as futures keyed by correlation ID. Replies
    arrive on a reply topic unique to this client instance. Replies with no
    pending call (late or duplicate) are logged and ignored.

Error Handling:
    - Error replies are rebuilt as the error class raised remotely
    - No reply within ``timeout_seconds``: InfraTimeoutError
    - Call after close(): InfraClientClosedError
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any
from uuid import UUID, uuid4

from pydantic import ValidationError

from omnibase_consul.enums import EnumInfraErrorCode, EnumInfraTransportType
from omnibase_consul.errors import (
    InfraClientClosedError,
    InfraTimeoutError,
    ModelInfraErrorContext,
    RuntimeHostError,
)
from omnibase_consul.event_bus.models import ModelEventMessage
from omnibase_consul.mixins import ProtocolEventBusLike
from omnibase_consul.services.consul_operations import (
    CLOSE_OPERATION,
    CONSUL_OPERATIONS,
    OPERATION_PREFIX,
)
from omnibase_consul.services.models import (
    ModelConsulServiceReply,
    ModelConsulServiceRequest,
)
from omnibase_consul.services.service_consul_bus_binding import DEFAULT_SERVICE_ADDRESS

logger = logging.getLogger(__name__)

DEFAULT_REPLY_TIMEOUT_SECONDS: float = 30.0


class ConsulServiceBusClient:
    """Remote stand-in for ConsulClient reached through a bus.

    Operations are available as coroutine methods with the client's
    signatures:

        ```python
        async with ConsulServiceBusClient(bus) as remote:
            await remote.put_value("foo/bar", "value")
            pair = await remote.get_value("foo/bar")
        ```
    """

    def __init__(
        self,
        bus: ProtocolEventBusLike,
        address: str = DEFAULT_SERVICE_ADDRESS,
        timeout_seconds: float = DEFAULT_REPLY_TIMEOUT_SECONDS,
        reply_address: str | None = None,
    ) -> None:
        if timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {timeout_seconds}")
        self._bus = bus
        self._address = address
        self._timeout_seconds = timeout_seconds
        self._reply_address = reply_address or f"{address}.reply.{uuid4().hex[:8]}"
        self._pending: dict[UUID, asyncio.Future[ModelConsulServiceReply]] = {}
        self._unsubscribe: Callable[[], Awaitable[None]] | None = None
        self._closed = False

    @property
    def reply_address(self) -> str:
        return self._reply_address

    @property
    def closed(self) -> bool:
        return self._closed

    async def __aenter__(self) -> ConsulServiceBusClient:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def __getattr__(self, name: str) -> Callable[..., Awaitable[Any]]:
        if name.startswith("_"):
            raise AttributeError(name)
        consul_operation = CONSUL_OPERATIONS.get(f"{OPERATION_PREFIX}{name}")
        if consul_operation is None:
            raise AttributeError(
                f"{self.__class__.__name__!r} object has no attribute {name!r}"
            )

        async def invoke(
            *args: object, correlation_id: UUID | None = None, **kwargs: object
        ) -> Any:
            arguments = consul_operation.bind_arguments(*args, **kwargs)
            return await self.call(
                consul_operation.name,
                consul_operation.encode_arguments(arguments),
                correlation_id=correlation_id,
            )

        invoke.__name__ = name
        invoke.__qualname__ = f"{self.__class__.__name__}.{name}"
        return invoke

    def _error_context(
        self, operation: str, correlation_id: UUID | None
    ) -> ModelInfraErrorContext:
        return ModelInfraErrorContext(
            transport_type=EnumInfraTransportType.EVENT_BUS,
            operation=operation,
            target_name=self._address,
            correlation_id=correlation_id,
        )

    async def start(self) -> None:
        """Subscribe to the reply topic. Idempotent."""
        if self._closed:
            raise InfraClientClosedError(
                "ConsulServiceBusClient is closed",
                context=self._error_context("start", None),
            )
        if self._unsubscribe is not None:
            return
        self._unsubscribe = await self._bus.subscribe(
            self._reply_address, self._reply_address, self._on_reply
        )
        logger.debug(
            "ConsulServiceBusClient listening for replies",
            extra={"address": self._address, "reply_address": self._reply_address},
        )

    async def call(
        self,
        operation: str,
        payload: Mapping[str, object] | None = None,
        *,
        correlation_id: UUID | None = None,
    ) -> Any:
        """Send one request and await its reply.

        Args:
            operation: Operation name ("consul.get_value", ...)
            payload: JSON-compatible arguments keyed by parameter name
            correlation_id: Correlation ID (generated when omitted)

        Returns:
            The decoded operation result (None for operations without one).

        Raises:
            InfraClientClosedError: If close() was called.
            InfraTimeoutError: If no reply arrives within timeout_seconds.
            RuntimeHostError: The error raised by the remote service.
        """
        cid = correlation_id or uuid4()
        if self._closed:
            raise InfraClientClosedError(
                "ConsulServiceBusClient is closed",
                context=self._error_context(operation, cid),
            )
        consul_operation = CONSUL_OPERATIONS.get(operation)
        if consul_operation is None and operation != CLOSE_OPERATION:
            raise RuntimeHostError(
                f"Operation '{operation}' not supported",
                error_code=EnumInfraErrorCode.INVALID_INPUT,
                context=self._error_context(operation, cid),
            )

        await self.start()

        request = ModelConsulServiceRequest(
            operation=operation,
            payload=dict(payload or {}),
            correlation_id=cid,
            reply_to=self._reply_address,
        )
        future: asyncio.Future[ModelConsulServiceReply] = (
            asyncio.get_running_loop().create_future()
        )
        self._pending[cid] = future

        try:
            await self._bus.publish(
                self._address,
                str(cid).encode("utf-8"),
                request.model_dump_json().encode("utf-8"),
            )
            try:
                reply = await asyncio.wait_for(future, timeout=self._timeout_seconds)
            except TimeoutError:
                raise InfraTimeoutError(
                    f"No reply for {operation} after {self._timeout_seconds}s",
                    context=self._error_context(operation, cid),
                    timeout_seconds=self._timeout_seconds,
                ) from None
        finally:
            self._pending.pop(cid, None)

        if reply.status == "error" and reply.error is not None:
            raise reply.error.to_error(cid)
        if consul_operation is None:
            return None
        return consul_operation.decode_result(reply.result)

    async def _on_reply(self, message: ModelEventMessage) -> None:
        try:
            reply = ModelConsulServiceReply.model_validate_json(message.value)
        except ValidationError as e:
            logger.warning(
                "Dropping malformed Consul service reply: %d validation error(s)",
                e.error_count(),
                extra={"reply_address": self._reply_address},
            )
            return

        future = self._pending.get(reply.correlation_id)
        if future is None or future.done():
            logger.debug(
                "Orphan reply received (no pending request)",
                extra={
                    "correlation_id": str(reply.correlation_id),
                    "operation": reply.operation,
                },
            )
            return
        future.set_result(reply)

    async def stop(self) -> None:
        """Stop listening for replies and fail pending calls.

        The remote client stays open; see close().
        """
        if self._unsubscribe is not None:
            unsubscribe, self._unsubscribe = self._unsubscribe, None
            await unsubscribe()

        for cid, future in list(self._pending.items()):
            if not future.done():
                future.set_exception(
                    InfraClientClosedError(
                        "ConsulServiceBusClient stopped before reply",
                        context=self._error_context("stop", cid),
                    )
                )
        self._pending.clear()

    async def close(self) -> None:
        """Close the remote client, then stop listening. A second call is a no-op."""
        if self._closed:
            return
        try:
            await self.call(CLOSE_OPERATION)
        finally:
            self._closed = True
            await self.stop()
        logger.debug(
            "ConsulServiceBusClient closed",
            extra={"address": self._address},
        )


__all__: list[str] = ["ConsulServiceBusClient"]
