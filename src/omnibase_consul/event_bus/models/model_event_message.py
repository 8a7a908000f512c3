# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Event message model wrapping topic, key, value and headers."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from omnibase_consul.event_bus.models.model_event_headers import ModelEventHeaders


class ModelEventMessage(BaseModel):
    """A message delivered to bus subscribers."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    topic: str
    key: bytes | None = None
    value: bytes
    headers: ModelEventHeaders
    offset: str = Field(description="Per-topic offset, as a string")
    partition: int = 0


__all__: list[str] = ["ModelEventMessage"]
