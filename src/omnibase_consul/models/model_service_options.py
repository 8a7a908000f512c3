# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Service registration request model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from omnibase_consul.models.model_check_options import ModelCheckOptions


class ModelServiceOptions(BaseModel):
    """Registration request for a service instance on the local agent.

    When ``check_options`` is present the agent creates a check bound to the
    service in the same call, with ID ``"service:" + service_id`` where the
    service ID defaults to the name.

    Example:
        >>> options = ModelServiceOptions(
        ...     name="serviceName",
        ...     tags=["tag1", "tag2"],
        ...     address="10.0.0.1",
        ...     port=8080,
        ...     check_options=ModelCheckOptions.ttl_check("10s"),
        ... )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(description="Service name")
    id: str | None = Field(default=None, description="Instance ID (defaults to name)")
    tags: list[str] = Field(default_factory=list, description="Ordered service tags")
    address: str | None = Field(default=None, description="Service address")
    port: int | None = Field(default=None, ge=1, le=65535, description="Service port")
    check_options: ModelCheckOptions | None = Field(
        default=None, description="Check registered together with the service"
    )

    @property
    def service_id(self) -> str:
        """Effective instance ID as assigned by the agent."""
        return self.id or self.name

    @property
    def check_id(self) -> str:
        """ID of the check bound to this service."""
        return f"service:{self.service_id}"


__all__: list[str] = ["ModelServiceOptions"]
