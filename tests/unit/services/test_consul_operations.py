# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for the operation registry derived from ConsulClient."""

from __future__ import annotations

import inspect

import pytest
from pydantic import ValidationError

from omnibase_consul.clients import CONSUL_CLIENT_OPERATIONS, ConsulClient
from omnibase_consul.models import ModelEvent, ModelKeyValuePair, ModelServiceInfo
from omnibase_consul.services import (
    CLOSE_OPERATION,
    CONSUL_OPERATIONS,
    SUPPORTED_OPERATIONS,
)


class TestRegistryContents:
    """The registry mirrors the client's operation set."""

    def test_every_client_operation_registered(self) -> None:
        assert set(CONSUL_OPERATIONS) == {
            f"consul.{name}" for name in CONSUL_CLIENT_OPERATIONS
        }

    def test_close_is_dispatchable(self) -> None:
        assert CLOSE_OPERATION in SUPPORTED_OPERATIONS
        assert CLOSE_OPERATION not in CONSUL_OPERATIONS

    def test_registered_methods_are_client_coroutines(self) -> None:
        for operation in CONSUL_OPERATIONS.values():
            method = getattr(ConsulClient, operation.method_name)
            assert inspect.iscoroutinefunction(method), operation.name

    @pytest.mark.parametrize(
        ("operation", "parameters"),
        [
            ("consul.put_value", ["key", "value"]),
            ("consul.get_values", ["key_prefix"]),
            ("consul.fire_event", ["event"]),
            ("consul.pass_check", ["check_id", "note"]),
            ("consul.list_events", []),
        ],
    )
    def test_signature_drops_envelope_parameters(
        self, operation: str, parameters: list[str]
    ) -> None:
        signature = CONSUL_OPERATIONS[operation].signature

        assert list(signature.parameters) == parameters


class TestArgumentCodec:
    """Arguments are bound, encoded and decoded by parameter name."""

    def test_bind_positional_arguments(self) -> None:
        operation = CONSUL_OPERATIONS["consul.pass_check"]

        assert operation.bind_arguments("checkId") == {
            "check_id": "checkId",
            "note": None,
        }

    def test_bind_rejects_extra_arguments(self) -> None:
        with pytest.raises(TypeError):
            CONSUL_OPERATIONS["consul.get_value"].bind_arguments("a", "b")

    def test_model_argument_encodes_to_plain_dict(self) -> None:
        operation = CONSUL_OPERATIONS["consul.fire_event"]

        encoded = operation.encode_arguments(
            {"event": ModelEvent(name="eventName", payload="payload")}
        )

        assert encoded["event"]["name"] == "eventName"
        assert encoded["event"]["payload"] == "payload"

    def test_decoded_arguments_are_models(self) -> None:
        operation = CONSUL_OPERATIONS["consul.fire_event"]

        arguments = operation.decode_arguments({"event": {"name": "eventName"}})

        assert arguments["event"] == ModelEvent(name="eventName")

    def test_decode_applies_optional_defaults_by_omission(self) -> None:
        arguments = CONSUL_OPERATIONS["consul.pass_check"].decode_arguments(
            {"check_id": "checkId"}
        )

        assert arguments == {"check_id": "checkId"}

    def test_decode_rejects_missing_parameter(self) -> None:
        with pytest.raises(ValueError, match="missing parameter"):
            CONSUL_OPERATIONS["consul.put_value"].decode_arguments({"key": "foo"})

    def test_decode_rejects_unknown_parameter(self) -> None:
        with pytest.raises(ValueError, match="unknown parameters"):
            CONSUL_OPERATIONS["consul.get_value"].decode_arguments(
                {"key": "foo", "recurse": True}
            )

    def test_decode_rejects_wrong_type(self) -> None:
        with pytest.raises(ValidationError):
            CONSUL_OPERATIONS["consul.get_value"].decode_arguments({"key": 42})


class TestResultCodec:
    """Results round the wire through the method's return annotation."""

    def test_single_model_result(self) -> None:
        operation = CONSUL_OPERATIONS["consul.get_value"]
        pair = ModelKeyValuePair(key="foo/bar", value="value")

        encoded = operation.encode_result(pair)

        assert encoded == {"key": "foo/bar", "value": "value"}
        assert operation.decode_result(encoded) == pair

    def test_list_result(self) -> None:
        operation = CONSUL_OPERATIONS["consul.local_services"]
        services = [ModelServiceInfo(id="web-1", name="web", tags=["a"])]

        assert operation.decode_result(operation.encode_result(services)) == services

    def test_operations_without_result(self) -> None:
        operation = CONSUL_OPERATIONS["consul.put_value"]

        assert operation.result_adapter is None
        assert operation.encode_result(None) is None
        assert operation.decode_result({"anything": 1}) is None

    def test_string_result(self) -> None:
        operation = CONSUL_OPERATIONS["consul.create_acl_token"]

        assert operation.decode_result("token-id") == "token-id"
