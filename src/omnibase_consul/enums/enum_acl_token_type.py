# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""ACL Token Type Enumeration."""

from enum import Enum


class EnumAclTokenType(str, Enum):
    """Consul ACL token types.

    Attributes:
        CLIENT: Token restricted by its rules
        MANAGEMENT: Token allowed to perform any operation
    """

    CLIENT = "client"
    MANAGEMENT = "management"


__all__ = ["EnumAclTokenType"]
