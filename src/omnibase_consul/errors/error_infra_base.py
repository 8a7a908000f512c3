# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Root exception type for ONEX Consul infrastructure errors.

InfraError carries a stable error code, an optional correlation ID and a
flat dictionary of structured context. The dictionary only ever holds
JSON-compatible values (enums are stored by value) so that an error can be
sent across the message bus and rebuilt on the other side.
"""

from __future__ import annotations

from enum import Enum
from uuid import UUID

from omnibase_consul.enums import EnumInfraErrorCode


class InfraError(Exception):
    """Base class for every error raised by omnibase_consul.

    Attributes:
        message: Human-readable, sanitized error message
        error_code: Classification code
        correlation_id: Correlation ID of the failed request, if known
        context: Structured context (transport_type, operation, target_name, ...)
    """

    def __init__(
        self,
        message: str,
        error_code: EnumInfraErrorCode = EnumInfraErrorCode.OPERATION_FAILED,
        correlation_id: UUID | None = None,
        **context: object,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.correlation_id = correlation_id
        self.context: dict[str, object] = {
            key: value.value if isinstance(value, Enum) else value
            for key, value in context.items()
        }

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.message!r}, "
            f"error_code={self.error_code.value!r}, "
            f"correlation_id={self.correlation_id!s})"
        )


__all__ = ["InfraError"]
