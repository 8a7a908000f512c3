# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for MixinAsyncCircuitBreaker.

Tests cover:
- Initialization and parameter validation
- CLOSED → OPEN → HALF_OPEN → CLOSED transitions
- Error context of the fail-fast error
- The *_if_enabled helpers on an uninitialized breaker
"""

from __future__ import annotations

from unittest.mock import patch
from uuid import uuid4

import pytest

from omnibase_consul.enums import EnumInfraErrorCode, EnumInfraTransportType
from omnibase_consul.errors import InfraUnavailableError
from omnibase_consul.mixins import CircuitState, MixinAsyncCircuitBreaker

TIME_PATH = "omnibase_consul.mixins.mixin_async_circuit_breaker.time.time"


class BreakerService(MixinAsyncCircuitBreaker):
    """Test service using the circuit breaker mixin."""

    def __init__(self, threshold: int = 3, reset_timeout: float = 60.0) -> None:
        self._init_circuit_breaker(
            threshold=threshold,
            reset_timeout=reset_timeout,
            service_name="consul.dc1",
            transport_type=EnumInfraTransportType.CONSUL,
        )

    async def check(self) -> None:
        await self._check_circuit_if_enabled("consul.get_value")

    async def fail(self) -> None:
        await self._record_circuit_failure_if_enabled("consul.get_value")

    async def succeed(self) -> None:
        await self._reset_circuit_if_enabled()


class TestInitialization:
    """Test suite for circuit breaker initialization."""

    def test_initial_state(self) -> None:
        service = BreakerService()
        assert service.circuit_state == CircuitState.CLOSED
        assert service.circuit_breaker_threshold == 3
        assert service.service_name == "consul.dc1"

    def test_invalid_threshold(self) -> None:
        with pytest.raises(ValueError, match="threshold"):
            BreakerService(threshold=0)

    def test_invalid_reset_timeout(self) -> None:
        with pytest.raises(ValueError, match="reset_timeout"):
            BreakerService(reset_timeout=-1.0)

    @pytest.mark.asyncio
    async def test_uninitialized_breaker_is_noop(self) -> None:
        """Helpers do nothing when _init_circuit_breaker never ran."""
        service = MixinAsyncCircuitBreaker()

        for _ in range(10):
            await service._record_circuit_failure_if_enabled("op")
        await service._check_circuit_if_enabled("op")
        await service._reset_circuit_if_enabled()

        assert service.circuit_state == CircuitState.CLOSED


@pytest.mark.asyncio
class TestStateTransitions:
    """Test suite for state transitions."""

    async def test_opens_at_threshold(self) -> None:
        service = BreakerService(threshold=3)

        await service.fail()
        await service.fail()
        await service.check()
        await service.fail()

        assert service.circuit_state == CircuitState.OPEN
        with pytest.raises(InfraUnavailableError):
            await service.check()

    async def test_success_resets_failure_count(self) -> None:
        service = BreakerService(threshold=2)

        await service.fail()
        await service.succeed()
        await service.fail()

        assert service.circuit_state == CircuitState.CLOSED

    async def test_open_error_context(self) -> None:
        service = BreakerService(threshold=1, reset_timeout=30.0)
        correlation_id = uuid4()

        with patch(TIME_PATH, return_value=1000.0):
            await service.fail()
        with patch(TIME_PATH, return_value=1010.0):
            with pytest.raises(InfraUnavailableError) as exc_info:
                await service._check_circuit_if_enabled(
                    "consul.put_value", correlation_id
                )

        error = exc_info.value
        assert error.error_code == EnumInfraErrorCode.SERVICE_UNAVAILABLE
        assert error.correlation_id == correlation_id
        assert error.context["circuit_state"] == "open"
        assert error.context["retry_after_seconds"] == 20
        assert error.context["target_name"] == "consul.dc1"
        assert error.context["operation"] == "consul.put_value"

    async def test_half_open_after_reset_timeout(self) -> None:
        service = BreakerService(threshold=1, reset_timeout=30.0)

        with patch(TIME_PATH, return_value=1000.0):
            await service.fail()
        with patch(TIME_PATH, return_value=1031.0):
            await service.check()

        assert service.circuit_state == CircuitState.HALF_OPEN

    async def test_half_open_success_closes(self) -> None:
        service = BreakerService(threshold=1, reset_timeout=0.0)

        await service.fail()
        await service.check()
        await service.succeed()

        assert service.circuit_state == CircuitState.CLOSED

    async def test_half_open_failure_reopens(self) -> None:
        service = BreakerService(threshold=3, reset_timeout=30.0)

        with patch(TIME_PATH, return_value=1000.0):
            for _ in range(3):
                await service.fail()
        with patch(TIME_PATH, return_value=1031.0):
            await service.check()
            await service.fail()

        assert service.circuit_state == CircuitState.OPEN
