# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Bus binding exposing a ConsulServiceProxy at a bus address.

The binding subscribes to one topic (the service address), decodes each
ModelConsulServiceRequest, dispatches it through the proxy and publishes
exactly one ModelConsulServiceReply to the request's ``reply_to`` topic.

Error Encoding:
    - Infra errors are encoded with their class name and rebuilt as the
      same class by ConsulServiceBusClient
    - Any other exception is logged and encoded as RuntimeHostError
    - Bytes that do not decode to a request are logged and dropped, since
      there is no reply topic to answer on
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from pydantic import ValidationError

from omnibase_consul.enums import EnumInfraTransportType
from omnibase_consul.errors import InfraError, ModelInfraErrorContext, RuntimeHostError
from omnibase_consul.event_bus.models import ModelEventMessage
from omnibase_consul.mixins import ProtocolEventBusLike
from omnibase_consul.services.models import (
    ModelConsulServiceError,
    ModelConsulServiceReply,
    ModelConsulServiceRequest,
)
from omnibase_consul.services.service_consul_proxy import ConsulServiceProxy

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_ADDRESS: str = "consul.service"
DEFAULT_GROUP_ID: str = "consul-service-proxy"


class ConsulServiceBusBinding:
    """Serves proxy requests arriving on a bus topic.

    Example:
        ```python
        proxy = ConsulServiceProxy(ConsulClient(config))
        binding = ConsulServiceBusBinding(proxy, bus, address="consul.service")
        await binding.start()
        ...
        await binding.stop()
        ```
    """

    def __init__(
        self,
        proxy: ConsulServiceProxy,
        bus: ProtocolEventBusLike,
        address: str = DEFAULT_SERVICE_ADDRESS,
        group_id: str = DEFAULT_GROUP_ID,
    ) -> None:
        self._proxy = proxy
        self._bus = bus
        self._address = address
        self._group_id = group_id
        self._unsubscribe: Callable[[], Awaitable[None]] | None = None

    @property
    def address(self) -> str:
        return self._address

    @property
    def is_started(self) -> bool:
        return self._unsubscribe is not None

    async def start(self) -> None:
        """Subscribe to the service address. Idempotent."""
        if self._unsubscribe is not None:
            return
        self._unsubscribe = await self._bus.subscribe(
            self._address, self._group_id, self._on_message
        )
        logger.info(
            "ConsulServiceBusBinding started",
            extra={"address": self._address, "group_id": self._group_id},
        )

    async def stop(self) -> None:
        """Unsubscribe from the service address. The proxy stays open."""
        if self._unsubscribe is None:
            return
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        await unsubscribe()
        logger.info(
            "ConsulServiceBusBinding stopped",
            extra={"address": self._address},
        )

    async def _on_message(self, message: ModelEventMessage) -> None:
        try:
            request = ModelConsulServiceRequest.model_validate_json(message.value)
        except ValidationError as e:
            logger.warning(
                "Dropping malformed Consul service request: %d validation error(s)",
                e.error_count(),
                extra={"address": self._address, "offset": message.offset},
            )
            return

        reply = await self.handle_request(request)
        await self._bus.publish(
            request.reply_to,
            str(request.correlation_id).encode("utf-8"),
            reply.model_dump_json().encode("utf-8"),
        )

    async def handle_request(
        self, request: ModelConsulServiceRequest
    ) -> ModelConsulServiceReply:
        """Dispatch one request through the proxy and build its reply."""
        envelope = {
            "operation": request.operation,
            "payload": request.payload,
            "correlation_id": request.correlation_id,
        }
        try:
            response = await self._proxy.execute(envelope)
        except InfraError as e:
            return self._error_reply(request, e)
        except Exception as e:
            logger.exception(
                "Unexpected error serving %s",
                request.operation,
                extra={
                    "operation": request.operation,
                    "correlation_id": str(request.correlation_id),
                },
            )
            wrapped = RuntimeHostError(
                f"Unexpected error serving request: {type(e).__name__}",
                context=ModelInfraErrorContext(
                    transport_type=EnumInfraTransportType.EVENT_BUS,
                    operation=request.operation,
                    target_name=self._address,
                    correlation_id=request.correlation_id,
                ),
            )
            return self._error_reply(request, wrapped)

        return ModelConsulServiceReply(
            correlation_id=request.correlation_id,
            operation=request.operation,
            status="success",
            result=response.result,
        )

    def _error_reply(
        self, request: ModelConsulServiceRequest, error: InfraError
    ) -> ModelConsulServiceReply:
        logger.debug(
            "Replying with %s",
            type(error).__name__,
            extra={
                "operation": request.operation,
                "correlation_id": str(request.correlation_id),
            },
        )
        return ModelConsulServiceReply(
            correlation_id=request.correlation_id,
            operation=request.operation,
            status="error",
            error=ModelConsulServiceError.from_error(error),
        )


__all__: list[str] = [
    "DEFAULT_SERVICE_ADDRESS",
    "ConsulServiceBusBinding",
]
