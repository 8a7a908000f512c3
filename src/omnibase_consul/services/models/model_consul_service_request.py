# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Request envelope sent over the bus to a ConsulServiceBusBinding."""

from __future__ import annotations

from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


class ModelConsulServiceRequest(BaseModel):
    """One proxied Consul operation call.

    Attributes:
        operation: Operation name (e.g. "consul.put_value")
        payload: JSON-compatible arguments keyed by parameter name
        correlation_id: Correlation ID; the reply carries the same value
        reply_to: Topic the reply is published to
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    operation: str = Field(min_length=1, description="Operation name")
    payload: dict[str, Any] = Field(default_factory=dict)
    correlation_id: UUID = Field(default_factory=uuid4)
    reply_to: str = Field(min_length=1, description="Reply topic")


__all__: list[str] = ["ModelConsulServiceRequest"]
