# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Event headers model carrying message metadata."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


class ModelEventHeaders(BaseModel):
    """Metadata attached to every bus message.

    Attributes:
        source: Publisher identifier ("<environment>.<group>")
        event_type: Message type (defaults to the topic)
        content_type: MIME type of the value bytes
        correlation_id: Correlation ID for tracing
        timestamp: Publish time (UTC)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source: str = Field(description="Publisher identifier")
    event_type: str = Field(description="Message type")
    content_type: str = Field(default="application/octet-stream")
    correlation_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


__all__: list[str] = ["ModelEventHeaders"]
