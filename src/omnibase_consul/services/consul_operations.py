# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Operation registry for the Consul service proxy.

Each ConsulClient operation is described once, by introspecting the client
method's signature and type hints. The proxy, the bus binding and the bus
client all use these descriptions, so a change to a client signature is
picked up everywhere without edits here.

Wire form:
    Arguments and results cross the bus as JSON-compatible values produced
    by pydantic ``TypeAdapter.dump_python(..., mode="json")`` and are
    rebuilt with ``TypeAdapter.validate_python``.
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, get_type_hints

from pydantic import TypeAdapter

from omnibase_consul.clients import CONSUL_CLIENT_OPERATIONS, ConsulClient

OPERATION_PREFIX: str = "consul."
CLOSE_OPERATION: str = "consul.close"

# Supplied by the proxy from the request envelope, never part of the payload
_ENVELOPE_PARAMETERS = frozenset({"self", "correlation_id"})


@dataclass(frozen=True)
class ConsulOperation:
    """Call shape of one ConsulClient operation.

    Attributes:
        name: Envelope operation name (e.g. "consul.put_value")
        method_name: ConsulClient method name (e.g. "put_value")
        signature: Method signature without ``self`` and ``correlation_id``
        argument_adapters: TypeAdapter per parameter
        result_adapter: TypeAdapter for the return value, None when the
            operation returns nothing
    """

    name: str
    method_name: str
    signature: inspect.Signature
    argument_adapters: Mapping[str, TypeAdapter[Any]]
    result_adapter: TypeAdapter[Any] | None

    def bind_arguments(self, *args: object, **kwargs: object) -> dict[str, object]:
        """Bind call arguments to parameter names, applying defaults.

        Raises:
            TypeError: If the arguments do not match the signature.
        """
        bound = self.signature.bind(*args, **kwargs)
        bound.apply_defaults()
        return dict(bound.arguments)

    def encode_arguments(self, arguments: Mapping[str, object]) -> dict[str, Any]:
        """Serialize bound arguments to JSON-compatible values."""
        encoded: dict[str, Any] = {}
        for name, value in arguments.items():
            adapter = self.argument_adapters[name]
            encoded[name] = adapter.dump_python(
                adapter.validate_python(value), mode="json"
            )
        return encoded

    def decode_arguments(self, payload: Mapping[str, object]) -> dict[str, object]:
        """Validate a payload into call arguments.

        Raises:
            ValueError: On unknown or missing parameters. pydantic's
                ValidationError (a ValueError) on invalid values.
        """
        unknown = sorted(set(payload) - set(self.argument_adapters))
        if unknown:
            raise ValueError(f"unknown parameters: {unknown}")

        arguments: dict[str, object] = {}
        for name, parameter in self.signature.parameters.items():
            if name in payload:
                arguments[name] = self.argument_adapters[name].validate_python(
                    payload[name]
                )
            elif parameter.default is inspect.Parameter.empty:
                raise ValueError(f"missing parameter: {name!r}")
        return arguments

    def encode_result(self, result: object) -> Any:
        if self.result_adapter is None:
            return None
        return self.result_adapter.dump_python(result, mode="json")

    def decode_result(self, data: object) -> Any:
        if self.result_adapter is None:
            return None
        return self.result_adapter.validate_python(data)


def describe_operation(method_name: str) -> ConsulOperation:
    """Describe ConsulClient.<method_name> from its signature and type hints."""
    method = getattr(ConsulClient, method_name)
    hints = get_type_hints(method)
    signature = inspect.signature(method)

    parameters = [
        parameter
        for parameter in signature.parameters.values()
        if parameter.name not in _ENVELOPE_PARAMETERS
    ]
    return_hint = hints.get("return", type(None))

    return ConsulOperation(
        name=f"{OPERATION_PREFIX}{method_name}",
        method_name=method_name,
        signature=signature.replace(
            parameters=parameters, return_annotation=inspect.Signature.empty
        ),
        argument_adapters={
            parameter.name: TypeAdapter(hints[parameter.name])
            for parameter in parameters
        },
        result_adapter=None if return_hint is type(None) else TypeAdapter(return_hint),
    )


CONSUL_OPERATIONS: dict[str, ConsulOperation] = {
    f"{OPERATION_PREFIX}{method_name}": describe_operation(method_name)
    for method_name in CONSUL_CLIENT_OPERATIONS
}

SUPPORTED_OPERATIONS: frozenset[str] = frozenset(CONSUL_OPERATIONS) | {
    CLOSE_OPERATION
}


__all__: list[str] = [
    "CLOSE_OPERATION",
    "CONSUL_OPERATIONS",
    "OPERATION_PREFIX",
    "SUPPORTED_OPERATIONS",
    "ConsulOperation",
    "describe_operation",
]
