# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Event bus message models."""

from omnibase_consul.event_bus.models.model_event_headers import ModelEventHeaders
from omnibase_consul.event_bus.models.model_event_message import ModelEventMessage

__all__: list[str] = ["ModelEventHeaders", "ModelEventMessage"]
