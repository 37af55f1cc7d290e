"""Pytest configuration and shared fixtures."""

import pytest

from sample_services import Clock, FileLogger, Logger
from servicebox import Container, ContainerSettings, TypeRegistry


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")


@pytest.fixture
def settings():
    return ContainerSettings()


@pytest.fixture
def type_registry():
    types = TypeRegistry()
    types.add(Logger, name="Logger")
    types.add(FileLogger, name="FileLogger")
    types.add(Clock, name="Clock")
    return types


@pytest.fixture
def container(type_registry, settings):
    return Container(type_oracle=type_registry, settings=settings)
