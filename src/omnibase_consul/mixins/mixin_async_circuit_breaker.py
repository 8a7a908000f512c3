# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Coroutine-safe async circuit breaker mixin.

Implements the 3-state circuit breaker used by ConsulClient to fail fast
while the agent is unreachable. The breaker never retries; it only decides
whether a call is allowed to reach the transport.

Circuit Breaker States:
    - CLOSED: Normal operation, requests allowed
    - OPEN: Circuit tripped, requests rejected with InfraUnavailableError
    - HALF_OPEN: Reset timeout elapsed, next request is a trial

Concurrency Safety:
    The ``_check``, ``_record`` and ``_reset`` methods REQUIRE the caller to
    hold ``_circuit_breaker_lock``. The ``*_if_enabled`` helpers acquire it.
    asyncio.Lock guards coroutines on one loop, not OS threads.

Usage:
    ```python
    class ConsulClient(MixinAsyncCircuitBreaker):
        def __init__(self, config):
            self._init_circuit_breaker(
                threshold=config.circuit_breaker_failure_threshold,
                reset_timeout=config.circuit_breaker_reset_timeout_seconds,
                service_name="consul.dc1",
                transport_type=EnumInfraTransportType.CONSUL,
            )

        async def get_value(self, key):
            await self._check_circuit_if_enabled("consul.get_value", cid)
            try:
                result = await self._call_store(...)
            except InfraConnectionError:
                await self._record_circuit_failure_if_enabled("consul.get_value", cid)
                raise
            await self._reset_circuit_if_enabled()
            return result
    ```
"""

from __future__ import annotations

import asyncio
import logging
import time
from enum import Enum
from uuid import UUID, uuid4

from omnibase_consul.enums import EnumInfraTransportType
from omnibase_consul.errors import InfraUnavailableError, ModelInfraErrorContext

logger = logging.getLogger(__name__)


class CircuitState(str, Enum):
    """Circuit breaker state.

    State Transitions:
        CLOSED → OPEN: Failure count >= threshold
        OPEN → HALF_OPEN: Reset timeout elapsed
        HALF_OPEN → CLOSED: Successful operation
        HALF_OPEN → OPEN: Failed operation
    """

    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class MixinAsyncCircuitBreaker:
    """Async circuit breaker mixin for infrastructure clients.

    State Variables:
        _circuit_breaker_failures: Consecutive failure counter
        _circuit_breaker_open: True while the circuit is open
        _circuit_breaker_open_until: Epoch seconds at which the circuit half-opens
        _circuit_breaker_half_open: True while the next call is a trial
        _circuit_breaker_lock: asyncio.Lock for coroutine-safe access
        _circuit_breaker_initialized: Whether _init_circuit_breaker ran
    """

    _circuit_breaker_initialized: bool = False

    def _init_circuit_breaker(
        self,
        threshold: int = 5,
        reset_timeout: float = 60.0,
        service_name: str = "unknown",
        transport_type: EnumInfraTransportType = EnumInfraTransportType.CONSUL,
    ) -> None:
        """Initialize circuit breaker state and configuration.

        Args:
            threshold: Consecutive failures before opening (>= 1)
            reset_timeout: Seconds the circuit stays open (>= 0)
            service_name: Service identifier for error context (e.g., "consul.dc1")
            transport_type: Transport type for error context

        Raises:
            ValueError: If threshold < 1 or reset_timeout < 0
        """
        if threshold < 1:
            raise ValueError(f"Circuit breaker threshold must be >= 1, got {threshold}")
        if reset_timeout < 0:
            raise ValueError(
                f"Circuit breaker reset_timeout must be >= 0, got {reset_timeout}"
            )

        self._circuit_breaker_failures = 0
        self._circuit_breaker_open = False
        self._circuit_breaker_half_open = False
        self._circuit_breaker_open_until: float = 0.0

        self.circuit_breaker_threshold = threshold
        self.circuit_breaker_reset_timeout = reset_timeout
        self.service_name = service_name
        self.transport_type = transport_type

        self._circuit_breaker_lock = asyncio.Lock()
        self._circuit_breaker_initialized = True

        logger.debug(
            "Circuit breaker initialized for %s",
            service_name,
            extra={
                "threshold": threshold,
                "reset_timeout": reset_timeout,
                "transport_type": transport_type.value,
            },
        )

    @property
    def circuit_state(self) -> CircuitState:
        """Current breaker state (CLOSED when the breaker is disabled)."""
        if not self._circuit_breaker_initialized:
            return CircuitState.CLOSED
        if self._circuit_breaker_open:
            return CircuitState.OPEN
        if self._circuit_breaker_half_open:
            return CircuitState.HALF_OPEN
        return CircuitState.CLOSED

    async def _check_circuit_breaker(
        self, operation: str, correlation_id: UUID | None = None
    ) -> None:
        """Raise InfraUnavailableError if the circuit is open.

        REQUIRES: self._circuit_breaker_lock must be held by caller.

        Raises:
            InfraUnavailableError: Circuit open and reset timeout not elapsed.
                Extra context carries ``circuit_state`` and ``retry_after_seconds``.
        """
        if not self._circuit_breaker_lock.locked():
            logger.error(
                "Circuit breaker lock not held during state check",
                extra={"service": self.service_name, "operation": operation},
            )

        if not self._circuit_breaker_open:
            return

        current_time = time.time()
        if current_time >= self._circuit_breaker_open_until:
            self._circuit_breaker_open = False
            self._circuit_breaker_half_open = True
            self._circuit_breaker_failures = 0
            logger.info(
                "Circuit breaker transitioning to half-open for %s",
                self.service_name,
                extra={"service": self.service_name, "operation": operation},
            )
            return

        retry_after = int(self._circuit_breaker_open_until - current_time)
        context = ModelInfraErrorContext(
            transport_type=self.transport_type,
            operation=operation,
            target_name=self.service_name,
            correlation_id=correlation_id if correlation_id else uuid4(),
        )
        raise InfraUnavailableError(
            f"Circuit breaker is open - {self.service_name} temporarily unavailable",
            context=context,
            circuit_state=CircuitState.OPEN.value,
            retry_after_seconds=retry_after,
        )

    async def _record_circuit_failure(
        self, operation: str, correlation_id: UUID | None = None
    ) -> None:
        """Count a failure and open the circuit at the threshold.

        A failure while HALF_OPEN reopens the circuit immediately.

        REQUIRES: self._circuit_breaker_lock must be held by caller.
        """
        if not self._circuit_breaker_lock.locked():
            logger.error(
                "Circuit breaker lock not held during failure recording",
                extra={"service": self.service_name, "operation": operation},
            )

        self._circuit_breaker_failures += 1

        if (
            self._circuit_breaker_half_open
            or self._circuit_breaker_failures >= self.circuit_breaker_threshold
        ):
            self._circuit_breaker_open = True
            self._circuit_breaker_half_open = False
            self._circuit_breaker_open_until = (
                time.time() + self.circuit_breaker_reset_timeout
            )
            logger.warning(
                "Circuit breaker opened for %s after %d failures",
                self.service_name,
                self._circuit_breaker_failures,
                extra={
                    "service": self.service_name,
                    "operation": operation,
                    "failure_count": self._circuit_breaker_failures,
                    "threshold": self.circuit_breaker_threshold,
                    "reset_timeout": self.circuit_breaker_reset_timeout,
                    "correlation_id": str(correlation_id) if correlation_id else None,
                },
            )

    async def _reset_circuit_breaker(self) -> None:
        """Close the circuit and clear the failure count.

        REQUIRES: self._circuit_breaker_lock must be held by caller.
        """
        if not self._circuit_breaker_lock.locked():
            logger.error(
                "Circuit breaker lock not held during reset",
                extra={"service": self.service_name},
            )

        if (
            self._circuit_breaker_open
            or self._circuit_breaker_half_open
            or self._circuit_breaker_failures > 0
        ):
            logger.info(
                "Circuit breaker reset from %s to closed for %s",
                self.circuit_state.value,
                self.service_name,
                extra={
                    "service": self.service_name,
                    "previous_failures": self._circuit_breaker_failures,
                },
            )

        self._circuit_breaker_open = False
        self._circuit_breaker_half_open = False
        self._circuit_breaker_failures = 0
        self._circuit_breaker_open_until = 0.0

    # Lock-acquiring helpers for callers with an optional breaker

    async def _check_circuit_if_enabled(
        self, operation: str, correlation_id: UUID | None = None
    ) -> None:
        """Check the circuit when the breaker is enabled."""
        if not self._circuit_breaker_initialized:
            return
        async with self._circuit_breaker_lock:
            await self._check_circuit_breaker(operation, correlation_id)

    async def _record_circuit_failure_if_enabled(
        self, operation: str, correlation_id: UUID | None = None
    ) -> None:
        """Record a failure when the breaker is enabled."""
        if not self._circuit_breaker_initialized:
            return
        async with self._circuit_breaker_lock:
            await self._record_circuit_failure(operation, correlation_id)

    async def _reset_circuit_if_enabled(self) -> None:
        """Reset the circuit when the breaker is enabled."""
        if not self._circuit_breaker_initialized:
            return
        async with self._circuit_breaker_lock:
            await self._reset_circuit_breaker()


__all__ = ["CircuitState", "MixinAsyncCircuitBreaker"]
