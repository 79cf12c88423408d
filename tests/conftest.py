"""Shared test fixtures for modelkit.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
model-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

import pytest

from modelkit.schema.registry import SchemaRegistry


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "modelkit"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def registry() -> SchemaRegistry:
    """Return an isolated, empty schema registry."""
    return SchemaRegistry("test")
