# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Wire form of an infrastructure error carried in a bus reply."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from omnibase_consul.enums import EnumInfraErrorCode, EnumInfraTransportType
from omnibase_consul.errors import (
    INFRA_ERROR_TYPES,
    InfraError,
    ModelInfraErrorContext,
    RuntimeHostError,
)

_CONTEXT_FIELDS = ("transport_type", "operation", "target_name")


class ModelConsulServiceError(BaseModel):
    """Serialized infrastructure error.

    ``error_type`` is the class name of the raised error. Errors outside the
    infra hierarchy are encoded as RuntimeHostError.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    error_type: str = Field(description="Error class name")
    message: str
    error_code: EnumInfraErrorCode = Field(default=EnumInfraErrorCode.OPERATION_FAILED)
    context: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_error(cls, error: InfraError) -> ModelConsulServiceError:
        error_type = type(error).__name__
        if error_type not in INFRA_ERROR_TYPES:
            error_type = RuntimeHostError.__name__
        return cls(
            error_type=error_type,
            message=error.message,
            error_code=error.error_code,
            context=dict(error.context),
        )

    def to_error(self, correlation_id: UUID | None = None) -> RuntimeHostError:
        """Rebuild the error as the class that was raised on the far side."""
        extra = {k: v for k, v in self.context.items() if k not in _CONTEXT_FIELDS}
        transport_type = self.context.get("transport_type")
        context = ModelInfraErrorContext(
            transport_type=(
                EnumInfraTransportType(transport_type)
                if transport_type in {t.value for t in EnumInfraTransportType}
                else None
            ),
            operation=self.context.get("operation"),
            target_name=self.context.get("target_name"),
            correlation_id=correlation_id,
        )

        error_class = INFRA_ERROR_TYPES.get(self.error_type, RuntimeHostError)
        if error_class is RuntimeHostError:
            return RuntimeHostError(
                self.message, error_code=self.error_code, context=context, **extra
            )
        return error_class(self.message, context=context, **extra)


__all__: list[str] = ["ModelConsulServiceError"]
