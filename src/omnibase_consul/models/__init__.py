# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Models for Consul store entities.

Exports:
    ModelAclToken: Access-control token
    ModelCheckInfo: Live state of a registered check
    ModelCheckOptions: Check definition for registration
    ModelEvent: User event
    ModelKeyValuePair: KV store entry
    ModelServiceInfo: Registered service instance
    ModelServiceOptions: Service registration request
"""

from omnibase_consul.models.model_acl_token import ModelAclToken
from omnibase_consul.models.model_check_info import ModelCheckInfo
from omnibase_consul.models.model_check_options import ModelCheckOptions
from omnibase_consul.models.model_event import ModelEvent
from omnibase_consul.models.model_key_value_pair import ModelKeyValuePair
from omnibase_consul.models.model_service_info import ModelServiceInfo
from omnibase_consul.models.model_service_options import ModelServiceOptions

__all__: list[str] = [
    "ModelAclToken",
    "ModelCheckInfo",
    "ModelCheckOptions",
    "ModelEvent",
    "ModelKeyValuePair",
    "ModelServiceInfo",
    "ModelServiceOptions",
]
