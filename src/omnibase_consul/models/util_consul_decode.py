# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Helpers for reading values out of Consul JSON responses.

python-consul decodes some byte fields (KV ``Value``, listed event
``Payload``) and leaves others base64-encoded (the event returned by the
fire endpoint). These helpers normalise both shapes to text.
"""

from __future__ import annotations

import base64
import binascii
from collections.abc import Mapping


def decode_text(value: object, *, base64_encoded: bool = False) -> str | None:
    """Decode a Consul byte field to UTF-8 text.

    Args:
        value: Raw field value (bytes, str or None).
        base64_encoded: Whether a str value is still base64-encoded.

    Returns:
        Decoded text, or None when the field is empty.

    Raises:
        ValueError: If the bytes are not UTF-8 or a base64 field is malformed.
    """
    if value is None:
        return None
    if isinstance(value, bytes):
        return value.decode("utf-8")
    if isinstance(value, str):
        if not base64_encoded:
            return value
        try:
            raw = base64.b64decode(value, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Malformed base64 payload: {e}") from e
        return raw.decode("utf-8")
    return str(value)


def get_str(data: Mapping[str, object], key: str) -> str | None:
    """Return ``data[key]`` when it is a non-empty string."""
    value = data.get(key)
    return value if isinstance(value, str) and value else None


def get_int(data: Mapping[str, object], key: str) -> int | None:
    """Return ``data[key]`` when it is an int (bools excluded)."""
    value = data.get(key)
    return value if isinstance(value, int) and not isinstance(value, bool) else None


def get_str_list(data: Mapping[str, object], key: str) -> list[str]:
    """Return ``data[key]`` as a list of strings (empty when absent)."""
    value = data.get(key)
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]


__all__: list[str] = ["decode_text", "get_int", "get_str", "get_str_list"]
