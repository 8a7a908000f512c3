# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Key/value pair model for the Consul KV store."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from omnibase_consul.models.util_consul_decode import decode_text, get_str


class ModelKeyValuePair(BaseModel):
    """One entry of the Consul KV store.

    The key is a slash-delimited hierarchical path and is the entry's only
    identity. A key stored without a value reads back as an empty string.

    Attributes:
        key: KV path (e.g., "config/database/host")
        value: Stored value decoded as UTF-8 text
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str = Field(description="Slash-delimited KV path")
    value: str = Field(default="", description="Stored value as text")

    @classmethod
    def from_consul(cls, data: Mapping[str, object]) -> ModelKeyValuePair:
        """Build a pair from a python-consul ``kv.get`` item."""
        return cls(
            key=get_str(data, "Key") or "",
            value=decode_text(data.get("Value")) or "",
        )


__all__: list[str] = ["ModelKeyValuePair"]
