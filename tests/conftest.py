"""Shared pytest fixtures."""

import pytest

from apigee_builder.core.config import Settings
from apigee_builder.strategies.url import UrlVariabilizer


@pytest.fixture
def settings(tmp_path):
    """Settings isolated from the process environment and .env files."""
    return Settings(_env_file=None, log_dir=tmp_path / "logs")


@pytest.fixture
def variabilizer(settings):
    """A default URL variabilizer."""
    return UrlVariabilizer(settings=settings)
