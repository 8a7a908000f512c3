# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Health Check Status Enumeration."""

from enum import Enum


class EnumCheckStatus(str, Enum):
    """Status of a Consul health check as reported by the agent.

    Attributes:
        PASSING: Check is healthy
        WARNING: Check is degraded
        CRITICAL: Check is failing (also the state of an expired TTL check)
    """

    PASSING = "passing"
    WARNING = "warning"
    CRITICAL = "critical"


__all__ = ["EnumCheckStatus"]
