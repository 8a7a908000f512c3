# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""ONEX Consul Client - async Consul access and bus-exposed service proxy.

This package provides an asyncio client for a HashiCorp Consul agent and a
proxy layer that re-exposes the same operation set to callers reached over a
message bus:

- ConsulClient: key/value, events, services, health checks and ACL tokens
- ConsulServiceProxy: forwards the client's operations, with envelope dispatch
- ConsulServiceBusBinding / ConsulServiceBusClient: request/reply over a bus
- InMemoryEventBus: topic-based bus for local wiring and tests

Key Components:
    - Transport-aware error handling with ModelInfraErrorContext
    - Immutable pydantic models for every store entity
    - Operation registry derived from the client by introspection
"""

from omnibase_consul.clients import ConsulClient, ModelConsulClientConfig
from omnibase_consul.services import (
    ConsulServiceBusBinding,
    ConsulServiceBusClient,
    ConsulServiceProxy,
)

__all__: list[str] = [
    "ConsulClient",
    "ConsulServiceBusBinding",
    "ConsulServiceBusClient",
    "ConsulServiceProxy",
    "ModelConsulClientConfig",
]
