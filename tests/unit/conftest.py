# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Shared pytest configuration for omnibase_consul unit tests.

Every test collected under tests/unit/ gets the ``unit`` marker, so the
suite can be selected with ``pytest -m unit`` without each module setting
pytestmark.
"""

import pytest


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Add the unit marker to tests under tests/unit.

    pytestmark in a conftest.py does not propagate to other modules, so the
    marker is applied after collection.
    """
    unit_marker = pytest.mark.unit
    for item in items:
        if "tests/unit" in str(item.path) and item.get_closest_marker("unit") is None:
            item.add_marker(unit_marker)
