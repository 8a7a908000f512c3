# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""ACL token model."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from omnibase_consul.enums import EnumAclTokenType
from omnibase_consul.models.util_consul_decode import get_str


class ModelAclToken(BaseModel):
    """An access-control token.

    The store assigns ``id`` on creation unless one is supplied; the ID is the
    token's only handle.

    Attributes:
        id: Token ID
        name: Human-readable name
        type: Token type (client or management)
        rules: HCL/JSON rule set for client tokens
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str | None = Field(default=None, description="Token ID")
    name: str | None = Field(default=None)
    type: EnumAclTokenType = Field(default=EnumAclTokenType.CLIENT)
    rules: str | None = Field(default=None)

    @classmethod
    def from_consul(cls, data: Mapping[str, object]) -> ModelAclToken:
        """Build from a legacy ``/v1/acl/info`` entry."""
        token_type = get_str(data, "Type")
        return cls(
            id=get_str(data, "ID"),
            name=get_str(data, "Name"),
            type=EnumAclTokenType(token_type) if token_type else EnumAclTokenType.CLIENT,
            rules=get_str(data, "Rules"),
        )


__all__: list[str] = ["ModelAclToken"]
