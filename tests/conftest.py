"""Shared fixtures for the cncbuilder test suite."""

import pytest

from cncbuilder.config import load_config
from cncbuilder.config import settings
from cncbuilder.models import CutConfig, Sheet


@pytest.fixture
def sheet():
    return Sheet(width=1000.0, height=1000.0, thickness=15.0)


@pytest.fixture
def cut():
    """12 mm deep in three 4 mm passes, 10 mm spacing, no ramp."""
    return CutConfig(depth=12.0, depth_per_pass=4.0, spacing=10.0)


@pytest.fixture
def default_config():
    return load_config()


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Tests never depend on the developer's .env."""
    monkeypatch.setattr(settings, "LOG_LEVEL", "INFO")
    monkeypatch.setattr(settings, "CONFIG_PATH", None)
    monkeypatch.setattr(settings, "DEFAULT_NESTING_METHOD", None)
    monkeypatch.setattr(settings, "OUTPUT_EXTENSION", ".nc")
