# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""ONEX Consul Infrastructure Errors Module.

Exports:
    InfraError: Root exception type
    ModelInfraErrorContext: Configuration model for bundled error context
    RuntimeHostError: Base infrastructure error class
    ProtocolConfigurationError: Configuration validation errors
    InfraConnectionError: Store unreachable
    InfraTimeoutError: Store call or bus reply timed out
    InfraAuthenticationError: ACL permission denied
    InfraUnavailableError: Circuit open or bus not started
    InfraResourceNotFoundError: Key, id or name unknown to the store
    InfraConsulError: Request rejected by the store
    InfraClientClosedError: Operation invoked after close()
    INFRA_ERROR_TYPES: Error class lookup by class name

Correlation ID Assignment:
    - Always propagate correlation_id from incoming requests to error context
    - If no correlation_id exists in the request, generate one using uuid4()
    - Preserve correlation_id as UUID objects throughout the system

Error Sanitization Guidelines:
    NEVER include in error messages or context:
        - ACL tokens or other credentials
        - Full URLs with query strings (they may carry ?token=...)

    SAFE to include:
        - Operation names (e.g., "consul.get_value")
        - Correlation IDs
        - Keys, service names, check ids and token ids
        - Host names and port numbers
        - The store's rejection detail
"""

from omnibase_consul.errors.error_consul import InfraConsulError
from omnibase_consul.errors.error_infra_base import InfraError
from omnibase_consul.errors.infra_errors import (
    InfraAuthenticationError,
    InfraClientClosedError,
    InfraConnectionError,
    InfraResourceNotFoundError,
    InfraTimeoutError,
    InfraUnavailableError,
    ProtocolConfigurationError,
    RuntimeHostError,
)
from omnibase_consul.errors.model_infra_error_context import ModelInfraErrorContext

# Used by the bus client to rebuild an error raised on the far side
INFRA_ERROR_TYPES: dict[str, type[RuntimeHostError]] = {
    error_type.__name__: error_type
    for error_type in (
        RuntimeHostError,
        ProtocolConfigurationError,
        InfraConnectionError,
        InfraTimeoutError,
        InfraAuthenticationError,
        InfraUnavailableError,
        InfraResourceNotFoundError,
        InfraConsulError,
        InfraClientClosedError,
    )
}

__all__: list[str] = [
    "INFRA_ERROR_TYPES",
    "ModelInfraErrorContext",
    "InfraError",
    "RuntimeHostError",
    "ProtocolConfigurationError",
    "InfraConnectionError",
    "InfraTimeoutError",
    "InfraAuthenticationError",
    "InfraUnavailableError",
    "InfraResourceNotFoundError",
    "InfraConsulError",
    "InfraClientClosedError",
]
