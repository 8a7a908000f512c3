# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Infrastructure-Specific Error Classes.

This module defines the error classes raised by the Consul client, the
service proxy and the bus layer.

Error Hierarchy:
    InfraError
    └── RuntimeHostError (base infrastructure error)
        ├── ProtocolConfigurationError
        ├── InfraConnectionError
        ├── InfraTimeoutError
        ├── InfraAuthenticationError
        ├── InfraUnavailableError
        ├── InfraResourceNotFoundError
        └── InfraClientClosedError

All errors:
    - Use EnumInfraErrorCode for error classification
    - Support proper error chaining with `raise ... from e`
    - Include structured context for debugging
    - Support correlation IDs for request tracking
    - Accept ModelInfraErrorContext for bundled context parameters
"""

from typing import Optional

from omnibase_consul.enums import EnumInfraErrorCode
from omnibase_consul.errors.error_infra_base import InfraError
from omnibase_consul.errors.model_infra_error_context import ModelInfraErrorContext


class RuntimeHostError(InfraError):
    """Base error class for runtime infrastructure errors.

    All infrastructure-specific errors inherit from this class. It is also
    raised directly for invalid operation input and unexpected failures.

    Example:
        >>> context = ModelInfraErrorContext(
        ...     transport_type=EnumInfraTransportType.CONSUL,
        ...     operation="consul.put_value",
        ...     target_name="consul_client",
        ... )
        >>> raise RuntimeHostError("Missing or invalid 'key'", context=context)
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[EnumInfraErrorCode] = None,
        context: Optional[ModelInfraErrorContext] = None,
        **extra_context: object,
    ) -> None:
        """Initialize RuntimeHostError with structured fields.

        Args:
            message: Human-readable error message
            error_code: Error code (defaults to OPERATION_FAILED)
            context: Bundled infrastructure context (transport_type, operation, etc.)
            **extra_context: Additional context information
        """
        structured_context: dict[str, object] = dict(extra_context)

        correlation_id = None
        if context is not None:
            if context.transport_type is not None:
                structured_context["transport_type"] = context.transport_type
            if context.operation is not None:
                structured_context["operation"] = context.operation
            if context.target_name is not None:
                structured_context["target_name"] = context.target_name
            correlation_id = context.correlation_id

        super().__init__(
            message,
            error_code or EnumInfraErrorCode.OPERATION_FAILED,
            correlation_id,
            **structured_context,
        )


class ProtocolConfigurationError(RuntimeHostError):
    """Raised when configuration validation fails.

    Messages name the failing fields only, never their values.
    """

    def __init__(
        self,
        message: str,
        context: Optional[ModelInfraErrorContext] = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumInfraErrorCode.INVALID_CONFIGURATION,
            context=context,
            **extra_context,
        )


class InfraConnectionError(RuntimeHostError):
    """Raised when the store cannot be reached.

    Used for refused connections, DNS failures, dropped sockets and a
    cluster without a leader.

    Example:
        >>> raise InfraConnectionError(
        ...     "Consul connection failed: ConnectionError",
        ...     context=context,
        ...     host="consul.example.com",
        ...     port=8500,
        ... )
    """

    def __init__(
        self,
        message: str,
        context: Optional[ModelInfraErrorContext] = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumInfraErrorCode.CONNECTION_ERROR,
            context=context,
            **extra_context,
        )


class InfraTimeoutError(RuntimeHostError):
    """Raised when a store call or a bus reply exceeds its timeout."""

    def __init__(
        self,
        message: str,
        context: Optional[ModelInfraErrorContext] = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumInfraErrorCode.TIMEOUT_ERROR,
            context=context,
            **extra_context,
        )


class InfraAuthenticationError(RuntimeHostError):
    """Raised when the ACL token is missing, invalid or lacks permission."""

    def __init__(
        self,
        message: str,
        context: Optional[ModelInfraErrorContext] = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumInfraErrorCode.AUTHENTICATION_ERROR,
            context=context,
            **extra_context,
        )


class InfraUnavailableError(RuntimeHostError):
    """Raised when a resource is unavailable.

    Used for an open circuit breaker and for a bus that has not been started.
    """

    def __init__(
        self,
        message: str,
        context: Optional[ModelInfraErrorContext] = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumInfraErrorCode.SERVICE_UNAVAILABLE,
            context=context,
            **extra_context,
        )


class InfraResourceNotFoundError(RuntimeHostError):
    """Raised when an operation targets a key, id or name the store does not hold.

    Example:
        >>> raise InfraResourceNotFoundError(
        ...     "Key not found in Consul KV store",
        ...     context=context,
        ...     consul_key="config/database/connection",
        ... )
    """

    def __init__(
        self,
        message: str,
        context: Optional[ModelInfraErrorContext] = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumInfraErrorCode.RESOURCE_NOT_FOUND,
            context=context,
            **extra_context,
        )


class InfraClientClosedError(RuntimeHostError):
    """Raised when an operation is invoked on a closed client."""

    def __init__(
        self,
        message: str,
        context: Optional[ModelInfraErrorContext] = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumInfraErrorCode.CLIENT_CLOSED,
            context=context,
            **extra_context,
        )


__all__ = [
    "RuntimeHostError",
    "ProtocolConfigurationError",
    "InfraConnectionError",
    "InfraTimeoutError",
    "InfraAuthenticationError",
    "InfraUnavailableError",
    "InfraResourceNotFoundError",
    "InfraClientClosedError",
]
