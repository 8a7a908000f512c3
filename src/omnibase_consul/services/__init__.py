# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Consul service module - the client's operations behind a service boundary.

Exports:
    ConsulServiceProxy: Forwards ConsulClient operations, with envelope dispatch
    ConsulServiceBusBinding: Serves a proxy at a bus address
    ConsulServiceBusClient: Calls a remote proxy over a bus
    CONSUL_OPERATIONS: Operation registry derived from ConsulClient
    SUPPORTED_OPERATIONS: Every dispatchable operation name
"""

from omnibase_consul.services.consul_operations import (
    CLOSE_OPERATION,
    CONSUL_OPERATIONS,
    SUPPORTED_OPERATIONS,
    ConsulOperation,
)
from omnibase_consul.services.models import (
    ModelConsulServiceError,
    ModelConsulServiceReply,
    ModelConsulServiceRequest,
    ModelConsulServiceResponse,
)
from omnibase_consul.services.service_consul_bus_binding import (
    DEFAULT_SERVICE_ADDRESS,
    ConsulServiceBusBinding,
)
from omnibase_consul.services.service_consul_bus_client import ConsulServiceBusClient
from omnibase_consul.services.service_consul_proxy import ConsulServiceProxy

__all__: list[str] = [
    "CLOSE_OPERATION",
    "CONSUL_OPERATIONS",
    "DEFAULT_SERVICE_ADDRESS",
    "SUPPORTED_OPERATIONS",
    "ConsulOperation",
    "ConsulServiceBusBinding",
    "ConsulServiceBusClient",
    "ConsulServiceProxy",
    "ModelConsulServiceError",
    "ModelConsulServiceReply",
    "ModelConsulServiceRequest",
    "ModelConsulServiceResponse",
]
