# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Command line interface for omnibase_consul."""

from omnibase_consul.cli.commands import cli

__all__: list[str] = ["cli"]
