"""Shared fixtures for recap tests."""

from __future__ import annotations

import pytest

from recap import Registry, RegistryBuilder, register_core_destinations


@pytest.fixture(scope="session")
def core_registry() -> Registry:
    """Registry with every built-in destination type."""
    return register_core_destinations(RegistryBuilder()).build()
