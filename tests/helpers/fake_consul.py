# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""In-memory stand-in for the python-consul ``consul.Consul`` surface.

FakeConsul keeps KV entries, events, services, checks and ACL tokens in
dicts and answers with the same shapes python-consul returns:

    - ``kv.get`` returns ``(index, item | list | None)`` with bytes values
    - ``event.fire`` returns the event with a base64 ``Payload``
    - ``event.list`` returns events with decoded bytes ``Payload``
    - bool endpoints return False where the agent answers 404

Any method can be replaced with a MagicMock to inject failures:

    >>> fake = FakeConsul()
    >>> fake.kv.get = MagicMock(side_effect=consul.Timeout("timed out"))
"""

from __future__ import annotations

import base64
from typing import Any
from unittest.mock import MagicMock
from uuid import uuid4

FAKE_NODE = "fake-node"
FAKE_LEADER = "127.0.0.1:8300"

# Patch target replacing python-consul inside ConsulClient
CONSUL_FACTORY_PATH = "omnibase_consul.clients.client_consul.consul.Consul"


class FakeKV:
    def __init__(self) -> None:
        self.entries: dict[str, bytes] = {}
        self.index = 0

    def _item(self, key: str) -> dict[str, Any]:
        return {"Key": key, "Value": self.entries[key], "ModifyIndex": self.index}

    def get(self, key: str, recurse: bool = False, **_: Any) -> tuple[int, Any]:
        if recurse:
            keys = sorted(k for k in self.entries if k.startswith(key))
            return self.index, [self._item(k) for k in keys] or None
        if key not in self.entries:
            return self.index, None
        return self.index, self._item(key)

    def put(self, key: str, value: str, **_: Any) -> bool:
        self.index += 1
        self.entries[key] = value.encode("utf-8")
        return True

    def delete(self, key: str, recurse: bool = False, **_: Any) -> bool:
        self.index += 1
        if recurse:
            for k in [k for k in self.entries if k.startswith(key)]:
                del self.entries[k]
        else:
            self.entries.pop(key, None)
        return True


class FakeEvent:
    def __init__(self) -> None:
        self.events: list[dict[str, Any]] = []

    def fire(
        self,
        name: str,
        body: str = "",
        node: str | None = None,
        service: str | None = None,
        tag: str | None = None,
        **_: Any,
    ) -> dict[str, Any]:
        event = {
            "ID": str(uuid4()),
            "Name": name,
            "Payload": body.encode("utf-8") if body else None,
            "NodeFilter": node or "",
            "ServiceFilter": service or "",
            "TagFilter": tag or "",
            "Version": 1,
            "LTime": len(self.events) + 1,
        }
        self.events.append(event)
        fired = dict(event)
        fired["Payload"] = base64.b64encode(body.encode("utf-8")).decode() if body else None
        return fired

    def list(self, name: str | None = None, **_: Any) -> tuple[int, list[dict[str, Any]]]:
        events = [dict(e) for e in self.events if name is None or e["Name"] == name]
        return len(self.events), events


class FakeAgentService:
    def __init__(self, agent: FakeAgent) -> None:
        self._agent = agent

    def register(
        self,
        name: str,
        service_id: str | None = None,
        address: str | None = None,
        port: int | None = None,
        tags: list[str] | None = None,
        check: dict[str, Any] | None = None,
        **_: Any,
    ) -> bool:
        sid = service_id or name
        self._agent.services_by_id[sid] = {
            "ID": sid,
            "Service": name,
            "Tags": list(tags or []),
            "Address": address or "",
            "Port": port or 0,
        }
        if check is not None:
            self._agent.register_check_entry(
                check_id=f"service:{sid}",
                name=f"Service '{name}' check",
                definition=check,
                notes=check.get("Notes"),
                service_id=sid,
            )
        return True

    def deregister(self, service_id: str, **_: Any) -> bool:
        if service_id not in self._agent.services_by_id:
            return False
        del self._agent.services_by_id[service_id]
        for cid in [
            cid
            for cid, entry in self._agent.checks_by_id.items()
            if entry["ServiceID"] == service_id
        ]:
            del self._agent.checks_by_id[cid]
        return True


class FakeAgentCheck:
    def __init__(self, agent: FakeAgent) -> None:
        self._agent = agent

    def register(
        self,
        name: str,
        check: dict[str, Any] | None = None,
        check_id: str | None = None,
        notes: str | None = None,
        service_id: str | None = None,
        **_: Any,
    ) -> bool:
        self._agent.register_check_entry(
            check_id=check_id or name,
            name=name,
            definition=check or {},
            notes=notes,
            service_id=service_id,
        )
        return True

    def deregister(self, check_id: str, **_: Any) -> bool:
        return self._agent.checks_by_id.pop(check_id, None) is not None

    def _ttl(self, check_id: str, status: str, notes: str | None) -> bool:
        entry = self._agent.checks_by_id.get(check_id)
        if entry is None:
            return False
        entry["Status"] = status
        entry["Output"] = notes or ""
        return True

    def ttl_pass(self, check_id: str, notes: str | None = None) -> bool:
        return self._ttl(check_id, "passing", notes)

    def ttl_warn(self, check_id: str, notes: str | None = None) -> bool:
        return self._ttl(check_id, "warning", notes)

    def ttl_fail(self, check_id: str, notes: str | None = None) -> bool:
        return self._ttl(check_id, "critical", notes)


class FakeAgent:
    def __init__(self) -> None:
        self.services_by_id: dict[str, dict[str, Any]] = {}
        self.checks_by_id: dict[str, dict[str, Any]] = {}
        self.service = FakeAgentService(self)
        self.check = FakeAgentCheck(self)

    def register_check_entry(
        self,
        check_id: str,
        name: str,
        definition: dict[str, Any],
        notes: str | None,
        service_id: str | None,
    ) -> None:
        service = self.services_by_id.get(service_id or "", {})
        self.checks_by_id[check_id] = {
            "Node": FAKE_NODE,
            "CheckID": check_id,
            "Name": name,
            "Status": definition.get("Status", "critical"),
            "Notes": notes or "",
            "Output": "",
            "ServiceID": service_id or "",
            "ServiceName": service.get("Service", ""),
        }

    def services(self) -> dict[str, dict[str, Any]]:
        return {sid: dict(entry) for sid, entry in self.services_by_id.items()}

    def checks(self) -> dict[str, dict[str, Any]]:
        return {cid: dict(entry) for cid, entry in self.checks_by_id.items()}


class FakeCatalog:
    def __init__(self, agent: FakeAgent) -> None:
        self._agent = agent

    def service(self, service: str, **_: Any) -> tuple[int, list[dict[str, Any]]]:
        nodes = [
            {
                "Node": FAKE_NODE,
                "Address": "10.0.0.1",
                "ServiceID": entry["ID"],
                "ServiceName": entry["Service"],
                "ServiceTags": list(entry["Tags"]),
                "ServiceAddress": entry["Address"],
                "ServicePort": entry["Port"],
            }
            for entry in self._agent.services_by_id.values()
            if entry["Service"] == service
        ]
        return 1, nodes


class FakeACL:
    def __init__(self) -> None:
        self.tokens: dict[str, dict[str, Any]] = {}

    def create(
        self,
        name: str | None = None,
        type: str = "client",
        rules: str | None = None,
        acl_id: str | None = None,
        **_: Any,
    ) -> str:
        token_id = acl_id or str(uuid4())
        self.tokens[token_id] = {
            "ID": token_id,
            "Name": name or "",
            "Type": type,
            "Rules": rules or "",
        }
        return token_id

    def info(self, acl_id: str, **_: Any) -> dict[str, Any] | None:
        token = self.tokens.get(acl_id)
        return dict(token) if token is not None else None

    def destroy(self, acl_id: str, **_: Any) -> bool:
        self.tokens.pop(acl_id, None)
        return True

    def list(self, **_: Any) -> list[dict[str, Any]]:
        return [dict(token) for token in self.tokens.values()]


class FakeStatus:
    def __init__(self) -> None:
        self.leader_address = FAKE_LEADER

    def leader(self) -> str:
        return self.leader_address


class FakeConsul:
    """Stateful replacement for ``consul.Consul``."""

    def __init__(self, **kwargs: Any) -> None:
        self.init_kwargs = kwargs
        self.kv = FakeKV()
        self.event = FakeEvent()
        self.agent = FakeAgent()
        self.catalog = FakeCatalog(self.agent)
        self.acl = FakeACL()
        self.status = FakeStatus()
        self.http = MagicMock()


__all__: list[str] = ["CONSUL_FACTORY_PATH", "FAKE_LEADER", "FAKE_NODE", "FakeConsul"]
