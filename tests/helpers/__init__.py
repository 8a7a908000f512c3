# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Test helpers for omnibase_consul tests.

Available Utilities:
    FakeConsul: In-memory stand-in for ``consul.Consul`` with the same
        response shapes python-consul returns
"""

from tests.helpers.fake_consul import (
    CONSUL_FACTORY_PATH,
    FAKE_LEADER,
    FAKE_NODE,
    FakeConsul,
)

__all__: list[str] = ["CONSUL_FACTORY_PATH", "FAKE_LEADER", "FAKE_NODE", "FakeConsul"]
