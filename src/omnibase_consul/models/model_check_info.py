# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Live health check state model."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from omnibase_consul.enums import EnumCheckStatus
from omnibase_consul.models.util_consul_decode import get_str


class ModelCheckInfo(BaseModel):
    """Live state of a check registered on the local agent.

    Checks bound to a service have ID ``"service:" + service_id``. Use
    ``model_copy(update={"output": ...})`` to prepare an update:

        >>> check = checks[0].model_copy(update={"output": "outputMessage"})
        >>> await client.update_check(check)

    Attributes:
        id: Check ID
        name: Check name
        status: Current status (None only on locally built instances)
        output: Output of the last run or TTL update
        notes: Human-readable notes
        service_id: Bound service instance ID
        service_name: Bound service name
        node: Node the check runs on
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(description="Check ID")
    name: str | None = Field(default=None)
    status: EnumCheckStatus | None = Field(default=None)
    output: str | None = Field(default=None)
    notes: str | None = Field(default=None)
    service_id: str | None = Field(default=None)
    service_name: str | None = Field(default=None)
    node: str | None = Field(default=None)

    @classmethod
    def from_consul(cls, data: Mapping[str, object]) -> ModelCheckInfo:
        """Build from an ``/v1/agent/checks`` entry."""
        status = get_str(data, "Status")
        return cls(
            id=get_str(data, "CheckID") or "",
            name=get_str(data, "Name"),
            status=EnumCheckStatus(status) if status else None,
            output=data.get("Output") if isinstance(data.get("Output"), str) else None,
            notes=get_str(data, "Notes"),
            service_id=get_str(data, "ServiceID"),
            service_name=get_str(data, "ServiceName"),
            node=get_str(data, "Node"),
        )


__all__: list[str] = ["ModelCheckInfo"]
