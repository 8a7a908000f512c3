# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Health check definition model.

A check is one of three kinds, selected by which field is set:

- ``ttl``: the check must be refreshed (pass/warn/fail) within the window
- ``http``: the agent polls the URL every ``interval``
- ``script``: the agent runs the script every ``interval``
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from omnibase_consul.enums import EnumCheckStatus


class ModelCheckOptions(BaseModel):
    """Definition of a health check to register with the local agent.

    Example:
        >>> check = ModelCheckOptions.ttl_check("10s").model_copy(
        ...     update={"id": "checkId", "name": "checkName"}
        ... )
        >>> check.to_consul()
        {'TTL': '10s'}
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str | None = Field(default=None, description="Check ID (defaults to name)")
    name: str | None = Field(default=None, description="Check name")
    ttl: str | None = Field(default=None, description="TTL window, e.g. '10s'")
    http: str | None = Field(default=None, description="URL polled by the agent")
    script: str | None = Field(default=None, description="Script run by the agent")
    interval: str | None = Field(default=None, description="Polling interval")
    timeout: str | None = Field(default=None, description="HTTP check timeout")
    notes: str | None = Field(default=None, description="Human-readable notes")
    service_id: str | None = Field(
        default=None, description="Service the check is bound to"
    )
    status: EnumCheckStatus | None = Field(
        default=None, description="Initial status (agent default is critical)"
    )

    @model_validator(mode="after")
    def validate_check_kind(self) -> ModelCheckOptions:
        """Reject definitions mixing check kinds or missing an interval."""
        kinds = [kind for kind in (self.ttl, self.http, self.script) if kind]
        if len(kinds) > 1:
            raise ValueError("Only one of 'ttl', 'http' or 'script' may be set")
        if (self.http or self.script) and not self.interval:
            raise ValueError("'interval' is required for http and script checks")
        return self

    @property
    def has_definition(self) -> bool:
        """Whether a check kind has been selected."""
        return bool(self.ttl or self.http or self.script)

    @classmethod
    def ttl_check(cls, ttl: str) -> ModelCheckOptions:
        """Create a TTL check definition."""
        return cls(ttl=ttl)

    @classmethod
    def http_check(
        cls, url: str, interval: str, timeout: str | None = None
    ) -> ModelCheckOptions:
        """Create an HTTP check definition."""
        return cls(http=url, interval=interval, timeout=timeout)

    @classmethod
    def script_check(cls, script: str, interval: str) -> ModelCheckOptions:
        """Create a script check definition."""
        return cls(script=script, interval=interval)

    def to_consul(self) -> dict[str, str]:
        """Return the check-kind part of the Consul check definition."""
        definition: dict[str, str] = {}
        if self.ttl:
            definition["TTL"] = self.ttl
        if self.http:
            definition["HTTP"] = self.http
        if self.script:
            definition["Script"] = self.script
        if self.interval:
            definition["Interval"] = self.interval
        if self.timeout:
            definition["Timeout"] = self.timeout
        if self.status is not None:
            definition["Status"] = self.status.value
        return definition


__all__: list[str] = ["ModelCheckOptions"]
