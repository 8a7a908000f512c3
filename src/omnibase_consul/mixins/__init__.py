# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""ONEX Consul Mixins.

Reusable mixin classes providing:
- Coroutine-safe circuit breaking (using asyncio.Lock)
- Correlation ID extraction from request envelopes
- The event bus protocol consumed by the service bus layer
"""

from omnibase_consul.mixins.mixin_async_circuit_breaker import (
    CircuitState,
    MixinAsyncCircuitBreaker,
)
from omnibase_consul.mixins.mixin_envelope_extraction import MixinEnvelopeExtraction
from omnibase_consul.mixins.protocol_event_bus_like import ProtocolEventBusLike

__all__: list[str] = [
    "CircuitState",
    "MixinAsyncCircuitBreaker",
    "MixinEnvelopeExtraction",
    "ProtocolEventBusLike",
]
