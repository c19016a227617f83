"""Shared pytest fixtures for the SWQL inventory tool.

Provides reusable fixtures for the field registry, query builder,
sample node rows, and connection settings used across the test suite.
"""

from __future__ import annotations

from typing import Any

import pytest

from swql_inventory.client.settings import SwisSettings
from swql_inventory.core.fields import FieldRegistry
from swql_inventory.core.query_builder import QueryBuilder

# ---------------------------------------------------------------------------
# Query construction fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def registry() -> FieldRegistry:
    """The standard field registry."""
    return FieldRegistry()


@pytest.fixture
def builder(registry: FieldRegistry) -> QueryBuilder:
    """A QueryBuilder over the standard registry."""
    return QueryBuilder(registry)


# ---------------------------------------------------------------------------
# Sample row fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def cisco_row() -> dict[str, Any]:
    """A Cisco router row as returned by the information service."""
    return {
        "NodeID": 101,
        "Caption": "wan-router",
        "IPAddress": "10.0.0.1",
        "Vendor": "Cisco",
        "MachineType": "Cisco ISR 4331",
        "NodeDescription": (
            "Cisco IOS Software, ISR Software (X86_64_LINUX_IOSD-UNIVERSALK9-M), "
            "Version 15.2(4)M7, RELEASE SOFTWARE (fc2) "
            "Technical Support: http://www.cisco.com/techsupport "
            "Compiled Wed 03-Mar-21 09:12 by prod_rel_team"
        ),
        "Status": 1,
        "Serial": "FOC1234X0AB",
        "ModelName": "ISR4331/K9",
    }


@pytest.fixture
def juniper_row() -> dict[str, Any]:
    """A Juniper switch row with a serial that is not Cisco-encoded."""
    return {
        "NodeID": 102,
        "Caption": "spine1",
        "IPAddress": "10.0.0.2",
        "Vendor": "Juniper Networks, Inc.",
        "MachineType": "Juniper QFX5100",
        "NodeDescription": "Juniper Networks, Inc. qfx5100-48s-6q Ethernet Switch, kernel JUNOS 18.4R2",
        "Status": 1,
        "Serial": "WS3718350066",
        "ModelName": "QFX5100-48S-6Q",
    }


@pytest.fixture
def sample_rows(cisco_row: dict[str, Any], juniper_row: dict[str, Any]) -> list[dict[str, Any]]:
    """Mixed-vendor result rows."""
    return [cisco_row, juniper_row]


# ---------------------------------------------------------------------------
# Settings fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def swis_settings() -> SwisSettings:
    """Settings for a lab Orion server."""
    return SwisSettings(
        host="orion.lab.local",
        username="admin",
        password="admin123",
        verify_ssl=False,
        timeout=15,
    )


# ---------------------------------------------------------------------------
# Pytest configuration
# ---------------------------------------------------------------------------


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "slow: mark test as slow-running")
