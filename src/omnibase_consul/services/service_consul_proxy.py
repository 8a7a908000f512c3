# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Consul Service Proxy - the client's operation set behind a service boundary.

ConsulServiceProxy makes every ConsulClient operation callable by a caller
that only holds the proxy, directly or through a request envelope. It owns
no Consul logic: each call is handed to the wrapped client unchanged and the
client's result or error is returned unchanged.

Direct calls:
    ``proxy.get_value("foo/bar")`` resolves to the client's bound coroutine
    function, so the proxy's signatures are the client's signatures.

Envelope dispatch:
    ``await proxy.execute({"operation": "consul.get_value",
    "payload": {"key": "foo/bar"}, "correlation_id": ...})`` validates the
    payload against the client method's type hints, calls it, and wraps the
    JSON-compatible result in ModelConsulServiceResponse.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from uuid import UUID

from omnibase_consul.clients import ConsulClient
from omnibase_consul.enums import EnumInfraErrorCode, EnumInfraTransportType
from omnibase_consul.errors import ModelInfraErrorContext, RuntimeHostError
from omnibase_consul.mixins import MixinEnvelopeExtraction
from omnibase_consul.services.consul_operations import (
    CLOSE_OPERATION,
    CONSUL_OPERATIONS,
    OPERATION_PREFIX,
    SUPPORTED_OPERATIONS,
)
from omnibase_consul.services.models import ModelConsulServiceResponse

logger = logging.getLogger(__name__)

TARGET_NAME_PROXY: str = "consul_service_proxy"


class ConsulServiceProxy(MixinEnvelopeExtraction):
    """Forwards the ConsulClient operation set to one wrapped client.

    The proxy holds nothing but the client reference. It never reorders,
    batches, retries or transforms results, and it does not catch errors.
    """

    def __init__(self, client: ConsulClient) -> None:
        self._client = client

    @property
    def client(self) -> ConsulClient:
        """The wrapped client."""
        return self._client

    def __getattr__(self, name: str) -> object:
        # Only reached for names not found normally
        if not name.startswith("_") and f"{OPERATION_PREFIX}{name}" in CONSUL_OPERATIONS:
            return getattr(self._client, name)
        raise AttributeError(
            f"{self.__class__.__name__!r} object has no attribute {name!r}"
        )

    def __dir__(self) -> list[str]:
        operations = [operation.method_name for operation in CONSUL_OPERATIONS.values()]
        return sorted(set(super().__dir__()) | set(operations))

    def close(self) -> None:
        """Close the wrapped client."""
        self._client.close()

    def describe(self) -> dict[str, object]:
        """Return proxy metadata and the operations it dispatches."""
        return {
            "service_type": "consul_proxy",
            "supported_operations": sorted(SUPPORTED_OPERATIONS),
            "client": self._client.describe(),
        }

    def _error_context(
        self, operation: str, correlation_id: UUID
    ) -> ModelInfraErrorContext:
        return ModelInfraErrorContext(
            transport_type=EnumInfraTransportType.CONSUL,
            operation=operation,
            target_name=TARGET_NAME_PROXY,
            correlation_id=correlation_id,
        )

    async def execute(
        self, envelope: Mapping[str, object]
    ) -> ModelConsulServiceResponse:
        """Execute one Consul operation from a request envelope.

        Args:
            envelope: Request envelope containing:
                - operation: Operation name ("consul.put_value", "consul.close", ...)
                - payload: dict of arguments keyed by parameter name
                - correlation_id: Optional correlation ID for tracing
                - envelope_id: Optional envelope ID for causality tracking

        Returns:
            ModelConsulServiceResponse with the JSON-compatible result.

        Raises:
            RuntimeHostError: If the envelope is invalid or the operation is
                unknown. Errors raised by the client propagate unchanged.
        """
        correlation_id = self._extract_correlation_id(envelope)
        envelope_id = self._extract_envelope_id(envelope)

        operation = envelope.get("operation")
        if not isinstance(operation, str):
            raise RuntimeHostError(
                "Missing or invalid 'operation' in envelope",
                error_code=EnumInfraErrorCode.INVALID_INPUT,
                context=self._error_context("execute", correlation_id),
            )

        if operation not in SUPPORTED_OPERATIONS:
            raise RuntimeHostError(
                f"Operation '{operation}' not supported. "
                f"Available: {', '.join(sorted(SUPPORTED_OPERATIONS))}",
                error_code=EnumInfraErrorCode.INVALID_INPUT,
                context=self._error_context(operation, correlation_id),
            )

        payload = envelope.get("payload", {})
        if not isinstance(payload, Mapping):
            raise RuntimeHostError(
                "Missing or invalid 'payload' in envelope",
                error_code=EnumInfraErrorCode.INVALID_INPUT,
                context=self._error_context(operation, correlation_id),
            )

        logger.debug(
            "Dispatching %s",
            operation,
            extra={
                "operation": operation,
                "correlation_id": str(correlation_id),
                "envelope_id": str(envelope_id),
            },
        )

        if operation == CLOSE_OPERATION:
            self.close()
            return ModelConsulServiceResponse(
                operation=operation,
                correlation_id=correlation_id,
                envelope_id=envelope_id,
            )

        consul_operation = CONSUL_OPERATIONS[operation]
        try:
            arguments = consul_operation.decode_arguments(payload)
        except ValueError as e:
            raise RuntimeHostError(
                f"Invalid 'payload' for {operation}: {type(e).__name__}",
                error_code=EnumInfraErrorCode.INVALID_INPUT,
                context=self._error_context(operation, correlation_id),
                parameters=sorted(consul_operation.argument_adapters),
            ) from e

        method = getattr(self._client, consul_operation.method_name)
        result = await method(**arguments, correlation_id=correlation_id)

        return ModelConsulServiceResponse(
            operation=operation,
            correlation_id=correlation_id,
            envelope_id=envelope_id,
            result=consul_operation.encode_result(result),
        )


__all__: list[str] = ["ConsulServiceProxy"]
