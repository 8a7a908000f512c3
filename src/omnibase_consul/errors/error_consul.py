# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Consul-Specific Infrastructure Error Class.

This module defines the InfraConsulError class for requests that reached
Consul but were rejected by it.
"""

from omnibase_consul.enums import EnumInfraErrorCode
from omnibase_consul.errors.infra_errors import RuntimeHostError
from omnibase_consul.errors.model_infra_error_context import ModelInfraErrorContext


class InfraConsulError(RuntimeHostError):
    """Request rejected by Consul.

    Used when the agent answered but refused the request: a malformed
    registration, an unsupported check definition, a failed check-and-set
    write, or a server-side error. The store's own rejection detail is kept
    in ``context["detail"]``.

    The context should use ``transport_type=EnumInfraTransportType.CONSUL``.

    Example:
        >>> context = ModelInfraErrorContext(
        ...     transport_type=EnumInfraTransportType.CONSUL,
        ...     operation="consul.register_check",
        ...     target_name="consul_client",
        ... )
        >>> raise InfraConsulError(
        ...     "Consul rejected request: BadRequest",
        ...     context=context,
        ...     detail="400 Invalid check: TTL must be > 0",
        ... )
    """

    def __init__(
        self,
        message: str,
        context: ModelInfraErrorContext | None = None,
        consul_key: str | None = None,
        service_name: str | None = None,
        **extra_context: object,
    ) -> None:
        """Initialize InfraConsulError with Consul-specific context.

        Args:
            message: Human-readable error message
            context: Bundled infrastructure context (should use CONSUL transport_type)
            consul_key: Optional KV key that caused the error
            service_name: Optional service name for service registration errors
            **extra_context: Additional context information (e.g., detail)
        """
        if consul_key is not None:
            extra_context["consul_key"] = consul_key

        if service_name is not None:
            extra_context["service_name"] = service_name

        super().__init__(
            message=message,
            error_code=EnumInfraErrorCode.REQUEST_REJECTED,
            context=context,
            **extra_context,
        )


__all__: list[str] = [
    "InfraConsulError",
]
