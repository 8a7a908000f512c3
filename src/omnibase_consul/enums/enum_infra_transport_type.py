# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Infrastructure Transport Type Enumeration.

Defines the canonical transport types for infrastructure components.
Used for error context, protocol routing, and transport identification.
"""

from enum import Enum


class EnumInfraTransportType(str, Enum):
    """Infrastructure transport types for ONEX Consul components.

    Attributes:
        CONSUL: Consul HTTP API transport
        EVENT_BUS: Message bus transport carrying proxied requests
        RUNTIME: In-process transport (validation, lifecycle)
    """

    CONSUL = "consul"
    EVENT_BUS = "event_bus"
    RUNTIME = "runtime"


__all__ = ["EnumInfraTransportType"]
