# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Response envelope returned by ConsulServiceProxy.execute()."""

from __future__ import annotations

from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ModelConsulServiceResponse(BaseModel):
    """Successful result of one dispatched operation.

    Failures are never wrapped in a response; they are raised.

    Attributes:
        status: Always "success"
        operation: Dispatched operation name (e.g. "consul.get_value")
        correlation_id: Correlation ID of the request
        envelope_id: ID of the request envelope, for causality tracking
        result: JSON-compatible operation result (None for operations without one)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    status: Literal["success"] = Field(default="success")
    operation: str = Field(description="Dispatched operation name")
    correlation_id: UUID = Field(description="Request correlation ID")
    envelope_id: UUID | None = Field(default=None, description="Request envelope ID")
    result: Any = Field(default=None, description="JSON-compatible result")


__all__: list[str] = ["ModelConsulServiceResponse"]
