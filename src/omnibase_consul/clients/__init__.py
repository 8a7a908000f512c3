# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Consul client module for omnibase_consul.

Exports:
    ConsulClient: Asyncio client for a Consul agent (KV, events, services,
        health checks, ACL tokens)
    ModelConsulClientConfig: Validated client configuration
    CONSUL_CLIENT_OPERATIONS: Names of the operations re-exposed by the proxy
"""

from omnibase_consul.clients.client_consul import (
    CONSUL_CLIENT_OPERATIONS,
    ConsulClient,
)
from omnibase_consul.clients.model_consul_client_config import (
    ModelConsulClientConfig,
)

__all__: list[str] = [
    "CONSUL_CLIENT_OPERATIONS",
    "ConsulClient",
    "ModelConsulClientConfig",
]
