# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Envelope models for the Consul service proxy and its bus exposure."""

from omnibase_consul.services.models.model_consul_service_error import (
    ModelConsulServiceError,
)
from omnibase_consul.services.models.model_consul_service_reply import (
    ModelConsulServiceReply,
)
from omnibase_consul.services.models.model_consul_service_request import (
    ModelConsulServiceRequest,
)
from omnibase_consul.services.models.model_consul_service_response import (
    ModelConsulServiceResponse,
)

__all__: list[str] = [
    "ModelConsulServiceError",
    "ModelConsulServiceReply",
    "ModelConsulServiceRequest",
    "ModelConsulServiceResponse",
]
