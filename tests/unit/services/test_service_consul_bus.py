# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for the Consul service bus binding and bus client.

Requests travel over InMemoryEventBus from ConsulServiceBusClient to
ConsulServiceBusBinding, which serves them through a ConsulServiceProxy
backed by the in-memory FakeConsul.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
import pytest_asyncio

from omnibase_consul.clients import ConsulClient
from omnibase_consul.enums import EnumCheckStatus, EnumInfraErrorCode
from omnibase_consul.errors import (
    InfraClientClosedError,
    InfraConsulError,
    InfraResourceNotFoundError,
    InfraTimeoutError,
    RuntimeHostError,
)
from omnibase_consul.event_bus import InMemoryEventBus
from omnibase_consul.models import (
    ModelCheckOptions,
    ModelEvent,
    ModelKeyValuePair,
    ModelServiceOptions,
)
from omnibase_consul.services import (
    DEFAULT_SERVICE_ADDRESS,
    ConsulServiceBusBinding,
    ConsulServiceBusClient,
    ConsulServiceProxy,
    ModelConsulServiceReply,
    ModelConsulServiceRequest,
)
from tests.helpers import FakeConsul

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture
async def binding(
    consul_client: ConsulClient, event_bus: InMemoryEventBus
) -> AsyncGenerator[ConsulServiceBusBinding, None]:
    binding = ConsulServiceBusBinding(ConsulServiceProxy(consul_client), event_bus)
    await binding.start()
    yield binding
    await binding.stop()


@pytest_asyncio.fixture
async def remote(
    binding: ConsulServiceBusBinding, event_bus: InMemoryEventBus
) -> AsyncGenerator[ConsulServiceBusClient, None]:
    remote = ConsulServiceBusClient(event_bus, timeout_seconds=5.0)
    await remote.start()
    yield remote
    await remote.stop()


async def _replies(bus: InMemoryEventBus, reply_address: str) -> list[ModelConsulServiceReply]:
    messages = await bus.get_event_history(topic=reply_address)
    return [ModelConsulServiceReply.model_validate_json(m.value) for m in messages]


class TestRoundTrip:
    """Operations called over the bus behave like direct client calls."""

    async def test_put_then_get(self, remote: ConsulServiceBusClient) -> None:
        await remote.put_value("foo/bar", "value")

        pair = await remote.get_value("foo/bar")

        assert pair == ModelKeyValuePair(key="foo/bar", value="value")

    async def test_keyword_arguments(self, remote: ConsulServiceBusClient) -> None:
        await remote.put_value(key="foo/a", value="1")
        await remote.put_value(key="foo/b", value="2")

        pairs = await remote.get_values(key_prefix="foo")

        assert [p.key for p in pairs] == ["foo/a", "foo/b"]

    async def test_model_arguments_and_results(
        self, remote: ConsulServiceBusClient, fake_consul: FakeConsul
    ) -> None:
        fired = await remote.fire_event(ModelEvent(name="eventName", payload="payload"))

        assert isinstance(fired, ModelEvent)
        assert fired.id == fake_consul.event.events[0]["ID"]
        events = await remote.list_events()
        assert [e.name for e in events] == ["eventName"]

    async def test_service_and_check_lifecycle(
        self, remote: ConsulServiceBusClient
    ) -> None:
        await remote.register_service(
            ModelServiceOptions(
                name="web",
                id="web-1",
                port=8080,
                check_options=ModelCheckOptions.ttl_check("30s"),
            )
        )
        await remote.pass_check("service:web-1", note="ok")

        checks = await remote.local_checks()

        assert checks[0].service_id == "web-1"
        assert checks[0].status == EnumCheckStatus.PASSING

    async def test_call_with_encoded_payload(
        self, remote: ConsulServiceBusClient
    ) -> None:
        await remote.call("consul.put_value", {"key": "foo", "value": "bar"})

        result = await remote.call("consul.get_value", {"key": "foo"})

        assert result == ModelKeyValuePair(key="foo", value="bar")

    async def test_exactly_one_reply_per_request(
        self, remote: ConsulServiceBusClient, event_bus: InMemoryEventBus
    ) -> None:
        await remote.put_value("foo", "bar")
        with pytest.raises(InfraResourceNotFoundError):
            await remote.get_value("missing")

        replies = await _replies(event_bus, remote.reply_address)

        assert [r.status for r in replies] == ["success", "error"]
        assert len({r.correlation_id for r in replies}) == 2


class TestErrorReplies:
    """Errors raised by the remote client come back as the same class."""

    async def test_not_found_rebuilt(self, remote: ConsulServiceBusClient) -> None:
        correlation_id = uuid4()

        with pytest.raises(InfraResourceNotFoundError) as exc_info:
            await remote.get_value("missing", correlation_id=correlation_id)

        error = exc_info.value
        assert error.correlation_id == correlation_id
        assert error.error_code == EnumInfraErrorCode.RESOURCE_NOT_FOUND
        assert error.context["operation"] == "consul.get_value"
        assert error.context["consul_key"] == "missing"

    async def test_store_rejection_rebuilt(
        self, remote: ConsulServiceBusClient, fake_consul: FakeConsul
    ) -> None:
        fake_consul.kv.put = MagicMock(return_value=False)

        with pytest.raises(InfraConsulError) as exc_info:
            await remote.put_value("foo", "bar")

        assert exc_info.value.error_code == EnumInfraErrorCode.REQUEST_REJECTED
        assert exc_info.value.context["consul_key"] == "foo"

    async def test_invalid_payload_rejected_remotely(
        self, remote: ConsulServiceBusClient
    ) -> None:
        with pytest.raises(RuntimeHostError) as exc_info:
            await remote.call("consul.put_value", {"key": "foo"})

        assert exc_info.value.error_code == EnumInfraErrorCode.INVALID_INPUT

    async def test_unexpected_exception_wrapped(
        self, event_bus: InMemoryEventBus
    ) -> None:
        proxy = MagicMock(spec=ConsulServiceProxy)
        proxy.execute = AsyncMock(side_effect=KeyError("boom"))
        binding = ConsulServiceBusBinding(proxy, event_bus)
        request = ModelConsulServiceRequest(
            operation="consul.local_services", reply_to="replies"
        )

        reply = await binding.handle_request(request)

        assert reply.status == "error"
        assert reply.correlation_id == request.correlation_id
        assert reply.error is not None
        assert reply.error.error_type == "RuntimeHostError"
        assert "KeyError" in reply.error.message


class TestBusClient:
    """Bus client lifecycle and local validation."""

    async def test_exposes_client_operations(
        self, remote: ConsulServiceBusClient
    ) -> None:
        assert callable(remote.delete_values)
        with pytest.raises(AttributeError):
            remote.watch_key  # noqa: B018

    async def test_bad_arguments_raise_type_error(
        self, remote: ConsulServiceBusClient
    ) -> None:
        with pytest.raises(TypeError):
            await remote.get_value("a", "b")

    async def test_unknown_operation_rejected(
        self, remote: ConsulServiceBusClient
    ) -> None:
        with pytest.raises(RuntimeHostError) as exc_info:
            await remote.call("consul.watch")

        assert exc_info.value.error_code == EnumInfraErrorCode.INVALID_INPUT

    async def test_timeout_without_service(self, event_bus: InMemoryEventBus) -> None:
        remote = ConsulServiceBusClient(
            event_bus, address="nobody.home", timeout_seconds=0.05
        )

        with pytest.raises(InfraTimeoutError) as exc_info:
            await remote.local_services()

        assert exc_info.value.context["timeout_seconds"] == 0.05
        await remote.stop()

    async def test_non_positive_timeout_rejected(
        self, event_bus: InMemoryEventBus
    ) -> None:
        with pytest.raises(ValueError):
            ConsulServiceBusClient(event_bus, timeout_seconds=0)

    async def test_stop_fails_pending_calls(self, event_bus: InMemoryEventBus) -> None:
        remote = ConsulServiceBusClient(
            event_bus, address="nobody.home", timeout_seconds=5.0
        )
        task = asyncio.create_task(remote.local_services())
        while not remote._pending:
            await asyncio.sleep(0)

        await remote.stop()

        with pytest.raises(InfraClientClosedError):
            await task

    async def test_malformed_and_orphan_replies_ignored(
        self, remote: ConsulServiceBusClient, event_bus: InMemoryEventBus
    ) -> None:
        await event_bus.publish(remote.reply_address, None, b"not json")
        orphan = ModelConsulServiceReply(
            correlation_id=uuid4(), operation="consul.local_services", status="success"
        )
        await event_bus.publish(
            remote.reply_address, None, orphan.model_dump_json().encode("utf-8")
        )

        assert await remote.local_services() == []

    async def test_default_addresses(self, event_bus: InMemoryEventBus) -> None:
        remote = ConsulServiceBusClient(event_bus)

        assert remote.reply_address.startswith(f"{DEFAULT_SERVICE_ADDRESS}.reply.")


class TestClose:
    """close() is forwarded to the remote client."""

    async def test_close_closes_remote_client(
        self, remote: ConsulServiceBusClient, consul_client: ConsulClient
    ) -> None:
        await remote.close()

        assert remote.closed
        assert consul_client.closed

    async def test_calls_after_close_rejected(
        self, remote: ConsulServiceBusClient
    ) -> None:
        await remote.close()

        with pytest.raises(InfraClientClosedError):
            await remote.get_value("foo")
        with pytest.raises(InfraClientClosedError):
            await remote.start()

    async def test_second_close_is_noop(
        self, remote: ConsulServiceBusClient, event_bus: InMemoryEventBus
    ) -> None:
        await remote.close()
        await remote.close()

        requests = await event_bus.get_event_history(topic=DEFAULT_SERVICE_ADDRESS)
        assert len(requests) == 1

    async def test_other_callers_see_closed_client(
        self,
        remote: ConsulServiceBusClient,
        event_bus: InMemoryEventBus,
    ) -> None:
        other = ConsulServiceBusClient(event_bus, timeout_seconds=5.0)
        await remote.close()

        with pytest.raises(InfraClientClosedError):
            await other.get_value("foo")
        await other.stop()

    async def test_context_manager_closes(
        self, binding: ConsulServiceBusBinding, event_bus: InMemoryEventBus
    ) -> None:
        async with ConsulServiceBusClient(event_bus) as remote:
            await remote.put_value("foo", "bar")

        assert remote.closed


class TestBinding:
    """Binding subscription lifecycle."""

    async def test_start_is_idempotent(
        self, binding: ConsulServiceBusBinding, event_bus: InMemoryEventBus
    ) -> None:
        await binding.start()

        assert binding.is_started
        assert await event_bus.get_subscriber_count(binding.address) == 1

    async def test_stop_unsubscribes(
        self, binding: ConsulServiceBusBinding, event_bus: InMemoryEventBus
    ) -> None:
        await binding.stop()
        await binding.stop()

        assert not binding.is_started
        assert await event_bus.get_subscriber_count(binding.address) == 0

    async def test_malformed_request_dropped(
        self, binding: ConsulServiceBusBinding, event_bus: InMemoryEventBus
    ) -> None:
        await event_bus.publish(binding.address, None, b'{"operation": 1}')

        history = await event_bus.get_event_history()

        assert [m.topic for m in history] == [binding.address]
