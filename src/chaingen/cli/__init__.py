# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Command-line interface."""

from chaingen.cli.commands import cli

__all__: list[str] = ["cli"]
