# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""ONEX Consul enumerations.

Exports:
    EnumAclTokenType: Consul ACL token types
    EnumCheckStatus: Health check states (passing, warning, critical)
    EnumInfraErrorCode: Error classification codes
    EnumInfraTransportType: Transport identifiers for error context
"""

from omnibase_consul.enums.enum_acl_token_type import EnumAclTokenType
from omnibase_consul.enums.enum_check_status import EnumCheckStatus
from omnibase_consul.enums.enum_infra_error_code import EnumInfraErrorCode
from omnibase_consul.enums.enum_infra_transport_type import EnumInfraTransportType

__all__: list[str] = [
    "EnumAclTokenType",
    "EnumCheckStatus",
    "EnumInfraErrorCode",
    "EnumInfraTransportType",
]
