# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Reply envelope published by ConsulServiceBusBinding."""

from __future__ import annotations

from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from omnibase_consul.services.models.model_consul_service_error import (
    ModelConsulServiceError,
)


class ModelConsulServiceReply(BaseModel):
    """Exactly one reply is published per request.

    Attributes:
        correlation_id: Correlation ID copied from the request
        operation: Operation name copied from the request
        status: "success" or "error"
        result: JSON-compatible result on success
        error: Serialized error on failure
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    correlation_id: UUID
    operation: str
    status: Literal["success", "error"]
    result: Any = Field(default=None)
    error: ModelConsulServiceError | None = Field(default=None)

    @model_validator(mode="after")
    def validate_error_present(self) -> ModelConsulServiceReply:
        if self.status == "error" and self.error is None:
            raise ValueError("error replies must carry 'error'")
        return self


__all__: list[str] = ["ModelConsulServiceReply"]
