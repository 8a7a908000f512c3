# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Envelope field extraction mixin.

Request envelopes arrive as plain dicts, possibly decoded from JSON, so
UUID fields may be UUID objects, strings, or missing altogether.
"""

from __future__ import annotations

from collections.abc import Mapping
from uuid import UUID, uuid4


class MixinEnvelopeExtraction:
    """Extract correlation and envelope IDs from request envelopes."""

    @staticmethod
    def _extract_uuid(envelope: Mapping[str, object], field: str) -> UUID:
        raw = envelope.get(field)
        if isinstance(raw, UUID):
            return raw
        if isinstance(raw, str):
            try:
                return UUID(raw)
            except ValueError:
                pass
        return uuid4()

    def _extract_correlation_id(self, envelope: Mapping[str, object]) -> UUID:
        """Return the envelope's correlation ID, generating one when absent or invalid."""
        return self._extract_uuid(envelope, "correlation_id")

    def _extract_envelope_id(self, envelope: Mapping[str, object]) -> UUID:
        """Return the envelope's ID for causality tracking, generating one when absent."""
        return self._extract_uuid(envelope, "envelope_id")


__all__: list[str] = ["MixinEnvelopeExtraction"]
