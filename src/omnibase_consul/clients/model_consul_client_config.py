# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Consul Client Configuration Model.

Security Note:
    The token field uses SecretStr to prevent accidental logging of the ACL
    token. Tokens should come from the environment or a secret store, never
    from configuration files checked into source control.
"""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, SecretStr


class ModelConsulClientConfig(BaseModel):
    """Configuration for ConsulClient.

    The connection fields accept the short names used by agent
    configuration files as aliases (``acl_token`` for ``token`` and ``dc``
    for ``datacenter``).

    Attributes:
        host: Consul agent hostname (default "localhost")
        port: Consul HTTP API port (default 8500)
        scheme: "http" or "https"
        token: ACL token sent with every request (SecretStr)
        datacenter: Target datacenter (agent default when None)
        verify_ssl: Verify TLS certificates for https
        timeout_seconds: Per-call timeout enforced around each store call
        max_concurrent_operations: Worker threads running store calls
        circuit_breaker_enabled: Fail fast after repeated transport failures
        circuit_breaker_failure_threshold: Failures before the circuit opens
        circuit_breaker_reset_timeout_seconds: Seconds the circuit stays open

    Example:
        >>> config = ModelConsulClientConfig.model_validate(
        ...     {"acl_token": SecretStr("topSecret"), "dc": "test-dc", "port": 8500}
        ... )
        >>> print(config.token)
        **********
    """

    model_config = ConfigDict(
        strict=True,
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )

    host: str = Field(default="localhost", min_length=1)
    port: int = Field(default=8500, ge=1, le=65535)
    scheme: Literal["http", "https"] = Field(default="http")
    token: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("token", "acl_token"),
        description="ACL token (use SecretStr for security)",
    )
    datacenter: str | None = Field(
        default=None,
        validation_alias=AliasChoices("datacenter", "dc"),
        description="Target datacenter",
    )
    verify_ssl: bool = Field(default=True)
    timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        le=300.0,
        description="Per-call timeout in seconds",
    )
    max_concurrent_operations: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Maximum concurrent store calls (thread pool size)",
    )
    circuit_breaker_enabled: bool = Field(
        default=False,
        description="Enable circuit breaker for transport failures",
    )
    circuit_breaker_failure_threshold: int = Field(
        default=5,
        ge=1,
        le=20,
        description="Number of consecutive failures before opening circuit",
    )
    circuit_breaker_reset_timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        le=300.0,
        description="Seconds to wait before attempting to close opened circuit",
    )

    @property
    def target_name(self) -> str:
        """Circuit breaker service name, e.g. ``consul.dc1``."""
        return f"consul.{self.datacenter or 'default'}"


__all__: list[str] = ["ModelConsulClientConfig"]
