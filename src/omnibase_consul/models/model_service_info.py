# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Registered service instance model."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from omnibase_consul.models.util_consul_decode import get_int, get_str, get_str_list


class ModelServiceInfo(BaseModel):
    """A service instance as reported by the agent or the catalog.

    Attributes:
        id: Instance ID
        name: Service name
        tags: Ordered service tags
        address: Service address (node address when the service has none)
        port: Service port
        node: Node name (catalog lookups only)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str | None = Field(default=None)
    name: str = Field(description="Service name")
    tags: list[str] = Field(default_factory=list)
    address: str | None = Field(default=None)
    port: int | None = Field(default=None)
    node: str | None = Field(default=None)

    @classmethod
    def from_agent(cls, data: Mapping[str, object]) -> ModelServiceInfo:
        """Build from an ``/v1/agent/services`` entry."""
        return cls(
            id=get_str(data, "ID"),
            name=get_str(data, "Service") or "",
            tags=get_str_list(data, "Tags"),
            address=get_str(data, "Address"),
            port=get_int(data, "Port"),
        )

    @classmethod
    def from_catalog(cls, data: Mapping[str, object]) -> ModelServiceInfo:
        """Build from a ``/v1/catalog/service/<name>`` entry."""
        return cls(
            id=get_str(data, "ServiceID"),
            name=get_str(data, "ServiceName") or "",
            tags=get_str_list(data, "ServiceTags"),
            address=get_str(data, "ServiceAddress") or get_str(data, "Address"),
            port=get_int(data, "ServicePort"),
            node=get_str(data, "Node"),
        )


__all__: list[str] = ["ModelServiceInfo"]
