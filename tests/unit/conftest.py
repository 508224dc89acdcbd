# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Shared pytest configuration for all unit tests.

Applies the ``unit`` marker to every test under tests/unit/, so files do
not need to set ``pytestmark`` themselves. ``pytestmark`` in a conftest
does not propagate to other files, hence the collection hook.

Usage:
    pytest -m unit
"""

import pytest


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Add the unit marker to every test collected from tests/unit."""
    unit_marker = pytest.mark.unit

    for item in items:
        if "tests/unit" in item.path.as_posix():
            if not any(marker.name == "unit" for marker in item.iter_markers()):
                item.add_marker(unit_marker)
