# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""HashiCorp Consul Client - asyncio access to a Consul agent via python-consul.

Every operation issues exactly one request to the agent and completes
exactly once: the awaited coroutine either returns the typed result or
raises one infrastructure error. Nothing is retried.

Security Features:
    - SecretStr protection for ACL tokens (prevents accidental logging)
    - Sanitized error messages (never expose tokens in logs)

Supported Operations:
    - KV store: put_value, get_value, get_values, delete_value, delete_values
    - Events: fire_event, list_events
    - Services: register_service, deregister_service, local_services, info_service
    - Checks: register_check, deregister_check, pass_check, warn_check,
      fail_check, update_check, local_checks
    - ACL tokens: create_acl_token, info_acl_token, destroy_acl_token,
      list_acl_tokens
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from concurrent.futures import ThreadPoolExecutor
from types import TracebackType
from typing import TypeVar
from uuid import UUID, uuid4

import consul
from pydantic import SecretStr, ValidationError

from omnibase_consul.clients.model_consul_client_config import ModelConsulClientConfig
from omnibase_consul.enums import (
    EnumCheckStatus,
    EnumInfraErrorCode,
    EnumInfraTransportType,
)
from omnibase_consul.errors import (
    InfraAuthenticationError,
    InfraClientClosedError,
    InfraConnectionError,
    InfraConsulError,
    InfraError,
    InfraResourceNotFoundError,
    InfraTimeoutError,
    ModelInfraErrorContext,
    ProtocolConfigurationError,
    RuntimeHostError,
)
from omnibase_consul.mixins import MixinAsyncCircuitBreaker
from omnibase_consul.models import (
    ModelAclToken,
    ModelCheckInfo,
    ModelCheckOptions,
    ModelEvent,
    ModelKeyValuePair,
    ModelServiceInfo,
    ModelServiceOptions,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)

TARGET_NAME_CONSUL: str = "consul_client"

# Operations re-exposed by ConsulServiceProxy, in documentation order
CONSUL_CLIENT_OPERATIONS: tuple[str, ...] = (
    "put_value",
    "get_value",
    "get_values",
    "delete_value",
    "delete_values",
    "fire_event",
    "list_events",
    "register_service",
    "deregister_service",
    "local_services",
    "info_service",
    "register_check",
    "deregister_check",
    "pass_check",
    "warn_check",
    "fail_check",
    "update_check",
    "local_checks",
    "create_acl_token",
    "info_acl_token",
    "destroy_acl_token",
    "list_acl_tokens",
)


class ConsulClient(MixinAsyncCircuitBreaker):
    """Asyncio client for a Consul agent.

    Thread Pool:
        python-consul is synchronous. Each store call runs in a bounded
        ThreadPoolExecutor (``max_concurrent_operations`` workers) via
        ``loop.run_in_executor`` and is bounded by ``timeout_seconds``.
        Concurrent calls are not serialized by the client.

    Lifecycle:
        The client is usable right after construction. ``close()`` releases
        the thread pool and the HTTP session; any operation started after
        that raises InfraClientClosedError without touching the network.

    Error Mapping:
        - ACLPermissionDenied -> InfraAuthenticationError
        - NotFound, or an absent key/id -> InfraResourceNotFoundError
        - Timeout, or ``timeout_seconds`` elapsed -> InfraTimeoutError
        - any other ConsulException -> InfraConsulError (store rejection)
        - OSError (requests connection errors) -> InfraConnectionError

    Example:
        ```python
        async with ConsulClient({"acl_token": token, "dc": "dc1"}) as client:
            await client.put_value("foo/bar", "value")
            pair = await client.get_value("foo/bar")
        ```
    """

    def __init__(
        self,
        config: ModelConsulClientConfig | Mapping[str, object] | None = None,
    ) -> None:
        """Create the client.

        Args:
            config: Validated config model, or a mapping with keys host, port,
                scheme, token/acl_token, datacenter/dc, timeout_seconds, ...

        Raises:
            ProtocolConfigurationError: If configuration validation fails.
            InfraConnectionError: If the python-consul client cannot be created.
            RuntimeHostError: If client creation fails for other reasons.
        """
        init_correlation_id = uuid4()
        self._closed: bool = False
        self._config = self._validate_consul_config(
            config if config is not None else {}, init_correlation_id
        )

        try:
            self._client: consul.Consul = self._setup_consul_client(self._config)
        except consul.ConsulException as e:
            raise InfraConnectionError(
                f"Consul connection failed: {type(e).__name__}",
                context=self._error_context("initialize", init_correlation_id),
                host=self._config.host,
                port=self._config.port,
            ) from e
        except Exception as e:
            raise RuntimeHostError(
                f"Consul client initialization failed: {type(e).__name__}",
                context=self._error_context("initialize", init_correlation_id),
            ) from e

        self._executor = ThreadPoolExecutor(
            max_workers=self._config.max_concurrent_operations,
            thread_name_prefix="consul_client_",
        )

        if self._config.circuit_breaker_enabled:
            self._init_circuit_breaker(
                threshold=self._config.circuit_breaker_failure_threshold,
                reset_timeout=self._config.circuit_breaker_reset_timeout_seconds,
                service_name=self._config.target_name,
                transport_type=EnumInfraTransportType.CONSUL,
            )

        logger.info(
            "%s initialized",
            self.__class__.__name__,
            extra={
                "host": self._config.host,
                "port": self._config.port,
                "scheme": self._config.scheme,
                "datacenter": self._config.datacenter,
                "thread_pool_max_workers": self._config.max_concurrent_operations,
                "circuit_breaker_enabled": self._config.circuit_breaker_enabled,
                "correlation_id": str(init_correlation_id),
            },
        )

    @property
    def config(self) -> ModelConsulClientConfig:
        """Validated client configuration."""
        return self._config

    @property
    def closed(self) -> bool:
        """Whether close() has been called."""
        return self._closed

    async def __aenter__(self) -> ConsulClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # Initialization helpers

    def _validate_consul_config(
        self,
        config: ModelConsulClientConfig | Mapping[str, object],
        correlation_id: UUID,
    ) -> ModelConsulClientConfig:
        """Validate and parse client configuration.

        Raises:
            ProtocolConfigurationError: If validation fails. Only field names
                are reported, never values.
        """
        if isinstance(config, ModelConsulClientConfig):
            return config

        raw = dict(config)
        for token_field in ("token", "acl_token"):
            token_raw = raw.get(token_field)
            if isinstance(token_raw, str):
                raw[token_field] = SecretStr(token_raw)

        try:
            return ModelConsulClientConfig.model_validate(raw)
        except ValidationError as e:
            sanitized_fields = [err.get("loc", ("unknown",))[-1] for err in e.errors()]
            raise ProtocolConfigurationError(
                f"Invalid Consul configuration - validation failed for fields: {sanitized_fields}",
                context=self._error_context("initialize", correlation_id),
            ) from e

    def _setup_consul_client(self, config: ModelConsulClientConfig) -> consul.Consul:
        """Create the python-consul client; no network I/O happens here."""
        token_value: str | None = None
        if config.token is not None:
            token_value = config.token.get_secret_value()

        return consul.Consul(
            host=config.host,
            port=config.port,
            scheme=config.scheme,
            token=token_value,
            dc=config.datacenter,
            verify=config.verify_ssl,
        )

    # Execution core

    def _error_context(
        self, operation: str, correlation_id: UUID | None
    ) -> ModelInfraErrorContext:
        return ModelInfraErrorContext(
            transport_type=EnumInfraTransportType.CONSUL,
            operation=operation,
            target_name=TARGET_NAME_CONSUL,
            correlation_id=correlation_id,
        )

    def _begin(self, operation: str, correlation_id: UUID | None) -> UUID:
        """Resolve the correlation ID and reject calls on a closed client."""
        cid = correlation_id or uuid4()
        if self._closed:
            raise InfraClientClosedError(
                "ConsulClient is closed. Create a new client to continue.",
                context=self._error_context(operation, cid),
            )
        return cid

    def _require(
        self, value: object, field: str, operation: str, correlation_id: UUID
    ) -> None:
        """Reject missing or empty string input before any I/O."""
        if not isinstance(value, str) or not value:
            raise RuntimeHostError(
                f"Missing or invalid '{field}'",
                error_code=EnumInfraErrorCode.INVALID_INPUT,
                context=self._error_context(operation, correlation_id),
            )

    def _decode(
        self,
        build: Callable[[], T],
        operation: str,
        correlation_id: UUID,
        **error_context: object,
    ) -> T:
        """Build a model from a store response.

        Values that are not UTF-8 text or malformed base64 payloads raise
        InfraConsulError carrying the offending key or event ID.
        """
        try:
            return build()
        except ValueError as e:
            raise InfraConsulError(
                f"Undecodable Consul response: {e}",
                context=self._error_context(operation, correlation_id),
                **error_context,
            ) from e

    async def _call(
        self,
        operation: str,
        func: Callable[[], T],
        correlation_id: UUID,
        **error_context: object,
    ) -> T:
        """Run one synchronous python-consul call in the thread pool.

        Args:
            operation: Operation name for logging and error context.
            func: Zero-argument callable issuing exactly one request.
            correlation_id: Correlation ID for tracing.
            **error_context: Extra context attached to a raised error.

        Raises:
            InfraClientClosedError: If the client was closed meanwhile.
            InfraUnavailableError: If the circuit breaker is open.
            RuntimeHostError: Translated store or transport failure.
        """
        await self._check_circuit_if_enabled(operation, correlation_id)

        logger.debug(
            "Executing %s",
            operation,
            extra={"operation": operation, "correlation_id": str(correlation_id)},
        )

        loop = asyncio.get_running_loop()
        try:
            future = loop.run_in_executor(self._executor, func)
        except RuntimeError as e:
            # Executor shut down by a concurrent close()
            raise InfraClientClosedError(
                "ConsulClient is closed. Create a new client to continue.",
                context=self._error_context(operation, correlation_id),
            ) from e

        try:
            result = await asyncio.wait_for(future, timeout=self._config.timeout_seconds)
        except asyncio.CancelledError:
            task = asyncio.current_task()
            if not self._closed or (task is not None and task.cancelling()):
                raise
            # Queued call cancelled by close()
            raise InfraClientClosedError(
                "ConsulClient is closed. Create a new client to continue.",
                context=self._error_context(operation, correlation_id),
            ) from None
        except Exception as e:
            error = self._translate_error(e, operation, correlation_id, **error_context)
            if isinstance(error, (InfraConnectionError, InfraTimeoutError)):
                await self._record_circuit_failure_if_enabled(operation, correlation_id)
            logger.warning(
                "Consul operation %s failed: %s",
                operation,
                type(error).__name__,
                extra={
                    "operation": operation,
                    "error_type": type(error).__name__,
                    "error_code": error.error_code.value,
                    "correlation_id": str(correlation_id),
                },
            )
            raise error from e

        await self._reset_circuit_if_enabled()
        return result

    def _translate_error(
        self,
        error: Exception,
        operation: str,
        correlation_id: UUID,
        **error_context: object,
    ) -> InfraError:
        """Map a python-consul or transport exception to an infra error."""
        ctx = self._error_context(operation, correlation_id)

        if isinstance(error, InfraError):
            return error

        if isinstance(error, consul.ACLPermissionDenied):
            return InfraAuthenticationError(
                "Consul ACL permission denied - check token permissions",
                context=ctx,
                **error_context,
            )

        if isinstance(error, consul.NotFound):
            return InfraResourceNotFoundError(
                "Consul resource not found",
                context=ctx,
                detail=str(error),
                **error_context,
            )

        if isinstance(error, (consul.Timeout, TimeoutError)):
            return InfraTimeoutError(
                f"Consul operation timed out: {type(error).__name__}",
                context=ctx,
                timeout_seconds=self._config.timeout_seconds,
                **error_context,
            )

        if isinstance(error, consul.ConsulException):
            return InfraConsulError(
                f"Consul rejected request: {type(error).__name__}",
                context=ctx,
                detail=str(error),
                **error_context,
            )

        if isinstance(error, OSError):
            return InfraConnectionError(
                f"Consul connection failed: {type(error).__name__}",
                context=ctx,
                host=self._config.host,
                port=self._config.port,
                **error_context,
            )

        return RuntimeHostError(
            f"Unexpected Consul client error: {type(error).__name__}",
            context=ctx,
            **error_context,
        )

    def _not_found(
        self, message: str, operation: str, correlation_id: UUID, **extra: object
    ) -> InfraResourceNotFoundError:
        return InfraResourceNotFoundError(
            message,
            context=self._error_context(operation, correlation_id),
            **extra,
        )

    # =========================================================================
    # Key/value store
    # =========================================================================

    async def put_value(
        self, key: str, value: str, *, correlation_id: UUID | None = None
    ) -> None:
        """Store ``value`` under ``key`` (last writer wins)."""
        operation = "consul.put_value"
        cid = self._begin(operation, correlation_id)
        self._require(key, "key", operation, cid)
        if not isinstance(value, str):
            raise RuntimeHostError(
                "Missing or invalid 'value' - must be a string",
                error_code=EnumInfraErrorCode.INVALID_INPUT,
                context=self._error_context(operation, cid),
            )

        stored = await self._call(
            operation,
            lambda: self._client.kv.put(key, value),
            cid,
            consul_key=key,
        )
        if stored is False:
            raise InfraConsulError(
                "Consul rejected KV write",
                context=self._error_context(operation, cid),
                consul_key=key,
            )

    async def get_value(
        self, key: str, *, correlation_id: UUID | None = None
    ) -> ModelKeyValuePair:
        """Read one key.

        Raises:
            InfraResourceNotFoundError: If the key does not exist.
        """
        operation = "consul.get_value"
        cid = self._begin(operation, correlation_id)
        self._require(key, "key", operation, cid)

        _index, data = await self._call(
            operation, lambda: self._client.kv.get(key), cid, consul_key=key
        )
        if not isinstance(data, Mapping):
            raise self._not_found(
                "Key not found in Consul KV store", operation, cid, consul_key=key
            )
        return self._decode(
            lambda: ModelKeyValuePair.from_consul(data), operation, cid, consul_key=key
        )

    async def get_values(
        self, key_prefix: str, *, correlation_id: UUID | None = None
    ) -> list[ModelKeyValuePair]:
        """Read every key starting with ``key_prefix`` (empty list when none match)."""
        operation = "consul.get_values"
        cid = self._begin(operation, correlation_id)

        _index, data = await self._call(
            operation,
            lambda: self._client.kv.get(key_prefix, recurse=True),
            cid,
            consul_key=key_prefix,
        )
        if not data:
            return []
        return [
            self._decode(
                lambda item=item: ModelKeyValuePair.from_consul(item),
                operation,
                cid,
                consul_key=str(item.get("Key")),
            )
            for item in data
        ]

    async def delete_value(
        self, key: str, *, correlation_id: UUID | None = None
    ) -> None:
        """Delete one key. Deleting an absent key succeeds."""
        operation = "consul.delete_value"
        cid = self._begin(operation, correlation_id)
        self._require(key, "key", operation, cid)

        deleted = await self._call(
            operation, lambda: self._client.kv.delete(key), cid, consul_key=key
        )
        if deleted is False:
            raise InfraConsulError(
                "Consul rejected KV delete",
                context=self._error_context(operation, cid),
                consul_key=key,
            )

    async def delete_values(
        self, key_prefix: str, *, correlation_id: UUID | None = None
    ) -> None:
        """Delete every key under ``key_prefix``."""
        operation = "consul.delete_values"
        cid = self._begin(operation, correlation_id)

        deleted = await self._call(
            operation,
            lambda: self._client.kv.delete(key_prefix, recurse=True),
            cid,
            consul_key=key_prefix,
        )
        if deleted is False:
            raise InfraConsulError(
                "Consul rejected KV delete",
                context=self._error_context(operation, cid),
                consul_key=key_prefix,
            )

    # =========================================================================
    # Events
    # =========================================================================

    async def fire_event(
        self, event: ModelEvent, *, correlation_id: UUID | None = None
    ) -> ModelEvent:
        """Fire a user event; returns it with the store-assigned ID."""
        operation = "consul.fire_event"
        cid = self._begin(operation, correlation_id)
        self._require(event.name, "name", operation, cid)

        data = await self._call(
            operation,
            lambda: self._client.event.fire(
                event.name,
                body=event.payload or "",
                node=event.node_filter,
                service=event.service_filter,
                tag=event.tag_filter,
            ),
            cid,
        )
        if not isinstance(data, Mapping):
            raise InfraConsulError(
                "Consul returned no event for fire request",
                context=self._error_context(operation, cid),
            )
        return self._decode(
            lambda: ModelEvent.from_consul(data, payload_base64=True),
            operation,
            cid,
            event_id=str(data.get("ID")),
        )

    async def list_events(
        self, *, correlation_id: UUID | None = None
    ) -> list[ModelEvent]:
        """List the events the agent currently retains."""
        operation = "consul.list_events"
        cid = self._begin(operation, correlation_id)

        _index, events = await self._call(
            operation, lambda: self._client.event.list(), cid
        )
        return [
            self._decode(
                lambda item=item: ModelEvent.from_consul(item),
                operation,
                cid,
                event_id=str(item.get("ID")),
            )
            for item in events or []
        ]

    # =========================================================================
    # Services
    # =========================================================================

    async def register_service(
        self, service: ModelServiceOptions, *, correlation_id: UUID | None = None
    ) -> None:
        """Register a service on the local agent, with its check if given.

        The bound check gets ID ``"service:" + service.service_id``.
        """
        operation = "consul.register_service"
        cid = self._begin(operation, correlation_id)
        self._require(service.name, "name", operation, cid)

        check: dict[str, str] | None = None
        if service.check_options is not None:
            if not service.check_options.has_definition:
                raise RuntimeHostError(
                    "Check definition requires 'ttl', 'http' or 'script'",
                    error_code=EnumInfraErrorCode.INVALID_INPUT,
                    context=self._error_context(operation, cid),
                )
            # The agent names and binds service checks itself
            fixed = [
                field
                for field in ("id", "name", "service_id")
                if getattr(service.check_options, field) is not None
            ]
            if fixed:
                raise RuntimeHostError(
                    f"Bound service check does not accept {', '.join(fixed)}",
                    error_code=EnumInfraErrorCode.INVALID_INPUT,
                    context=self._error_context(operation, cid),
                )
            check = service.check_options.to_consul()
            if service.check_options.notes:
                check["Notes"] = service.check_options.notes

        registered = await self._call(
            operation,
            lambda: self._client.agent.service.register(
                service.name,
                service_id=service.id,
                address=service.address,
                port=service.port,
                tags=list(service.tags) or None,
                check=check,
            ),
            cid,
            service_name=service.name,
        )
        if registered is False:
            raise InfraConsulError(
                "Consul rejected service registration",
                context=self._error_context(operation, cid),
                service_name=service.name,
            )

    async def deregister_service(
        self, service_id: str, *, correlation_id: UUID | None = None
    ) -> None:
        """Remove a service (and its bound checks) from the local agent."""
        operation = "consul.deregister_service"
        cid = self._begin(operation, correlation_id)
        self._require(service_id, "service_id", operation, cid)

        deregistered = await self._call(
            operation,
            lambda: self._client.agent.service.deregister(service_id),
            cid,
            service_id=service_id,
        )
        if deregistered is False:
            raise self._not_found(
                "Service not registered on local agent",
                operation,
                cid,
                service_id=service_id,
            )

    async def local_services(
        self, *, correlation_id: UUID | None = None
    ) -> list[ModelServiceInfo]:
        """List services registered on the local agent (not the catalog)."""
        operation = "consul.local_services"
        cid = self._begin(operation, correlation_id)

        services = await self._call(
            operation, lambda: self._client.agent.services(), cid
        )
        return [ModelServiceInfo.from_agent(item) for item in (services or {}).values()]

    async def info_service(
        self, name: str, *, correlation_id: UUID | None = None
    ) -> list[ModelServiceInfo]:
        """Look up every catalog instance of service ``name``."""
        operation = "consul.info_service"
        cid = self._begin(operation, correlation_id)
        self._require(name, "name", operation, cid)

        _index, nodes = await self._call(
            operation,
            lambda: self._client.catalog.service(name),
            cid,
            service_name=name,
        )
        return [ModelServiceInfo.from_catalog(item) for item in nodes or []]

    # =========================================================================
    # Health checks
    # =========================================================================

    async def register_check(
        self, check: ModelCheckOptions, *, correlation_id: UUID | None = None
    ) -> None:
        """Register a check on the local agent."""
        operation = "consul.register_check"
        cid = self._begin(operation, correlation_id)
        self._require(check.name, "name", operation, cid)
        if not check.has_definition:
            raise RuntimeHostError(
                "Check definition requires 'ttl', 'http' or 'script'",
                error_code=EnumInfraErrorCode.INVALID_INPUT,
                context=self._error_context(operation, cid),
            )

        registered = await self._call(
            operation,
            lambda: self._client.agent.check.register(
                check.name,
                check=check.to_consul(),
                check_id=check.id,
                notes=check.notes,
                service_id=check.service_id,
            ),
            cid,
            check_id=check.id or check.name,
        )
        if registered is False:
            raise InfraConsulError(
                "Consul rejected check registration",
                context=self._error_context(operation, cid),
                check_id=check.id or check.name,
            )

    async def deregister_check(
        self, check_id: str, *, correlation_id: UUID | None = None
    ) -> None:
        """Remove a check from the local agent."""
        operation = "consul.deregister_check"
        cid = self._begin(operation, correlation_id)
        self._require(check_id, "check_id", operation, cid)

        deregistered = await self._call(
            operation,
            lambda: self._client.agent.check.deregister(check_id),
            cid,
            check_id=check_id,
        )
        if deregistered is False:
            raise self._not_found(
                "Check not registered on local agent",
                operation,
                cid,
                check_id=check_id,
            )

    async def _update_ttl(
        self,
        operation: str,
        status: EnumCheckStatus,
        check_id: str,
        note: str | None,
        correlation_id: UUID | None,
    ) -> None:
        cid = self._begin(operation, correlation_id)
        self._require(check_id, "check_id", operation, cid)

        ttl_check = self._client.agent.check
        updater = {
            EnumCheckStatus.PASSING: ttl_check.ttl_pass,
            EnumCheckStatus.WARNING: ttl_check.ttl_warn,
            EnumCheckStatus.CRITICAL: ttl_check.ttl_fail,
        }[status]

        updated = await self._call(
            operation,
            lambda: updater(check_id, notes=note),
            cid,
            check_id=check_id,
        )
        if updated is False:
            raise self._not_found(
                "TTL check not registered on local agent",
                operation,
                cid,
                check_id=check_id,
            )

    async def pass_check(
        self,
        check_id: str,
        note: str | None = None,
        *,
        correlation_id: UUID | None = None,
    ) -> None:
        """Mark a TTL check passing and reset its TTL."""
        await self._update_ttl(
            "consul.pass_check", EnumCheckStatus.PASSING, check_id, note, correlation_id
        )

    async def warn_check(
        self,
        check_id: str,
        note: str | None = None,
        *,
        correlation_id: UUID | None = None,
    ) -> None:
        """Mark a TTL check warning and reset its TTL."""
        await self._update_ttl(
            "consul.warn_check", EnumCheckStatus.WARNING, check_id, note, correlation_id
        )

    async def fail_check(
        self,
        check_id: str,
        note: str | None = None,
        *,
        correlation_id: UUID | None = None,
    ) -> None:
        """Mark a TTL check critical and reset its TTL."""
        await self._update_ttl(
            "consul.fail_check", EnumCheckStatus.CRITICAL, check_id, note, correlation_id
        )

    async def update_check(
        self, check: ModelCheckInfo, *, correlation_id: UUID | None = None
    ) -> None:
        """Set status and output of an existing TTL check by its ID.

        The status selects the TTL endpoint and ``output`` becomes the
        check's output.
        """
        operation = "consul.update_check"
        if check.status is None:
            cid = self._begin(operation, correlation_id)
            raise RuntimeHostError(
                "Missing 'status' - check updates need passing, warning or critical",
                error_code=EnumInfraErrorCode.INVALID_INPUT,
                context=self._error_context(operation, cid),
            )
        await self._update_ttl(
            operation, check.status, check.id, check.output, correlation_id
        )

    async def local_checks(
        self, *, correlation_id: UUID | None = None
    ) -> list[ModelCheckInfo]:
        """List checks registered on the local agent."""
        operation = "consul.local_checks"
        cid = self._begin(operation, correlation_id)

        checks = await self._call(operation, lambda: self._client.agent.checks(), cid)
        return [ModelCheckInfo.from_consul(item) for item in (checks or {}).values()]

    # =========================================================================
    # ACL tokens
    # =========================================================================

    async def create_acl_token(
        self, token: ModelAclToken, *, correlation_id: UUID | None = None
    ) -> str:
        """Create a token; returns the ID assigned by the store."""
        operation = "consul.create_acl_token"
        cid = self._begin(operation, correlation_id)

        token_id = await self._call(
            operation,
            lambda: self._client.acl.create(
                name=token.name,
                type=token.type.value,
                rules=token.rules,
                acl_id=token.id,
            ),
            cid,
        )
        if not isinstance(token_id, str) or not token_id:
            raise InfraConsulError(
                "Consul returned no token ID",
                context=self._error_context(operation, cid),
            )
        return token_id

    async def info_acl_token(
        self, token_id: str, *, correlation_id: UUID | None = None
    ) -> ModelAclToken:
        """Read a token by ID.

        Raises:
            InfraResourceNotFoundError: If no token has this ID.
        """
        operation = "consul.info_acl_token"
        cid = self._begin(operation, correlation_id)
        self._require(token_id, "token_id", operation, cid)

        data = await self._call(
            operation, lambda: self._client.acl.info(token_id), cid, token_id=token_id
        )
        if not isinstance(data, Mapping):
            raise self._not_found(
                "ACL token not found", operation, cid, token_id=token_id
            )
        return ModelAclToken.from_consul(data)

    async def destroy_acl_token(
        self, token_id: str, *, correlation_id: UUID | None = None
    ) -> None:
        """Destroy a token by ID.

        Succeeds whenever the store reports success; a ``false`` answer is
        raised as InfraResourceNotFoundError.
        """
        operation = "consul.destroy_acl_token"
        cid = self._begin(operation, correlation_id)
        self._require(token_id, "token_id", operation, cid)

        destroyed = await self._call(
            operation,
            lambda: self._client.acl.destroy(token_id),
            cid,
            token_id=token_id,
        )
        if destroyed is False:
            raise self._not_found(
                "ACL token not found", operation, cid, token_id=token_id
            )

    async def list_acl_tokens(
        self, *, correlation_id: UUID | None = None
    ) -> list[ModelAclToken]:
        """List every token (requires a management token)."""
        operation = "consul.list_acl_tokens"
        cid = self._begin(operation, correlation_id)

        tokens = await self._call(operation, lambda: self._client.acl.list(), cid)
        return [ModelAclToken.from_consul(item) for item in tokens or []]

    # =========================================================================
    # Connectivity and lifecycle
    # =========================================================================

    async def verify_connection(self, *, correlation_id: UUID | None = None) -> str:
        """Check that the cluster has a leader; returns the leader address.

        Raises:
            InfraConnectionError: If the agent is unreachable or there is no leader.
        """
        operation = "consul.verify_connection"
        cid = self._begin(operation, correlation_id)

        leader = await self._call(operation, lambda: self._client.status.leader(), cid)
        if not leader:
            raise InfraConnectionError(
                "Consul cluster has no leader - cluster may be unavailable",
                context=self._error_context(operation, cid),
            )
        return str(leader)

    async def health_check(self) -> dict[str, object]:
        """Return client health; never raises for store failures."""
        health: dict[str, object] = {
            "healthy": False,
            "closed": self._closed,
            "circuit_state": self.circuit_state.value,
            "leader": None,
        }
        if self._closed:
            return health
        try:
            health["leader"] = await self.verify_connection()
            health["healthy"] = True
        except RuntimeHostError as e:
            health["error_type"] = type(e).__name__
        health["circuit_state"] = self.circuit_state.value
        return health

    def describe(self) -> dict[str, object]:
        """Return client metadata and capabilities (no credentials)."""
        return {
            "client_type": "consul",
            "supported_operations": sorted(
                f"consul.{name}" for name in CONSUL_CLIENT_OPERATIONS
            ),
            "host": self._config.host,
            "port": self._config.port,
            "datacenter": self._config.datacenter,
            "timeout_seconds": self._config.timeout_seconds,
            "closed": self._closed,
        }

    def close(self) -> None:
        """Release the thread pool and HTTP session.

        Does not wait for in-flight store calls; a request already running
        in a worker thread finishes on its own and queued calls are
        cancelled. Operations invoked after this raise InfraClientClosedError.
        A second call is a no-op.
        """
        if self._closed:
            logger.debug("ConsulClient already closed")
            return

        self._closed = True
        self._executor.shutdown(wait=False, cancel_futures=True)

        # python-consul has no close(); release the requests session directly
        session = getattr(getattr(self._client, "http", None), "session", None)
        if session is not None:
            session.close()

        logger.info(
            "ConsulClient closed",
            extra={"host": self._config.host, "port": self._config.port},
        )


__all__: list[str] = ["CONSUL_CLIENT_OPERATIONS", "ConsulClient"]
