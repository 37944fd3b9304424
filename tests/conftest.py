"""Pytest fixtures for conf-mesh tests."""

import pytest

from confmesh.config import ServiceOptions
from confmesh.providers.mock import MockConfigProvider
from confmesh.service import ConfigService


@pytest.fixture
def base_provider():
    """Provider registered first (wins collisions)."""
    return MockConfigProvider("base", {"app": {"name": "base"}, "shared": "base"})


@pytest.fixture
def override_provider():
    """Provider registered last (applied first)."""
    return MockConfigProvider("override", {"shared": "override", "extra": True})


@pytest.fixture
def service(base_provider, override_provider):
    """Service over the two mock providers."""
    return ConfigService(
        [base_provider, override_provider],
        options=ServiceOptions(trace=True),
    )
