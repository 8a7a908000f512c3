# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Event bus implementations for omnibase_consul.

Exports:
    InMemoryEventBus: In-process bus carrying proxied Consul requests
    ModelEventHeaders: Event headers model for message metadata
    ModelEventMessage: Event message model wrapping topic, key, value, and headers
"""

from __future__ import annotations

from omnibase_consul.event_bus.inmemory_event_bus import InMemoryEventBus
from omnibase_consul.event_bus.models import ModelEventHeaders, ModelEventMessage

__all__: list[str] = [
    "InMemoryEventBus",
    "ModelEventHeaders",
    "ModelEventMessage",
]
