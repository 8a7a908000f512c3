# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""User event model for Consul's fire-and-forget event stream."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from omnibase_consul.models.util_consul_decode import decode_text, get_int, get_str


class ModelEvent(BaseModel):
    """A user event broadcast through Consul.

    Events are immutable once fired. The store assigns ``id`` when the event
    is fired and keeps a bounded window of recent events for listing.

    Attributes:
        id: Store-assigned event ID (None before fire)
        name: Event name
        payload: Optional event body as text
        node_filter: Regular expression restricting target nodes
        service_filter: Regular expression restricting target services
        tag_filter: Regular expression restricting target service tags
        version: Event format version reported by the store
        l_time: Lamport time assigned by the store
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str | None = Field(default=None, description="Store-assigned event ID")
    name: str = Field(description="Event name")
    payload: str | None = Field(default=None, description="Event body")
    node_filter: str | None = Field(default=None)
    service_filter: str | None = Field(default=None)
    tag_filter: str | None = Field(default=None)
    version: int | None = Field(default=None)
    l_time: int | None = Field(default=None)

    @classmethod
    def from_consul(
        cls, data: Mapping[str, object], *, payload_base64: bool = False
    ) -> ModelEvent:
        """Build an event from a Consul event object.

        Args:
            data: Event JSON object (``ID``, ``Name``, ``Payload``, ...).
            payload_base64: True for the fire response, whose payload is
                still base64-encoded.
        """
        return cls(
            id=get_str(data, "ID"),
            name=get_str(data, "Name") or "",
            payload=decode_text(data.get("Payload"), base64_encoded=payload_base64),
            node_filter=get_str(data, "NodeFilter"),
            service_filter=get_str(data, "ServiceFilter"),
            tag_filter=get_str(data, "TagFilter"),
            version=get_int(data, "Version"),
            l_time=get_int(data, "LTime"),
        )


__all__: list[str] = ["ModelEvent"]
