# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Infrastructure Error Code Enumeration.

Stable, serializable error codes attached to every infrastructure error.
Codes survive the bus boundary, so remote callers can classify failures
without importing the error classes.
"""

from enum import Enum


class EnumInfraErrorCode(str, Enum):
    """Error classification codes for infrastructure errors."""

    OPERATION_FAILED = "operation_failed"
    INVALID_CONFIGURATION = "invalid_configuration"
    INVALID_INPUT = "invalid_input"
    CONNECTION_ERROR = "connection_error"
    TIMEOUT_ERROR = "timeout_error"
    AUTHENTICATION_ERROR = "authentication_error"
    SERVICE_UNAVAILABLE = "service_unavailable"
    RESOURCE_NOT_FOUND = "resource_not_found"
    REQUEST_REJECTED = "request_rejected"
    CLIENT_CLOSED = "client_closed"


__all__ = ["EnumInfraErrorCode"]
