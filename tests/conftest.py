"""Pytest configuration and shared fixtures for PathCat tests."""

import os
import sys
from dataclasses import dataclass
from pathlib import Path

import pytest


sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pathcat.buffer import BufferPool
from pathcat.config import PathCatConfig
from pathcat.settings import get_default_config, get_settings


# ==================== Settings Isolation ====================


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Drop PATHCAT_* environment variables and cached settings around each test."""
    for name in list(os.environ):
        if name.startswith("PATHCAT_"):
            monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    get_default_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_default_config.cache_clear()


# ==================== Configuration Fixtures ====================


@pytest.fixture
def default_config() -> PathCatConfig:
    """Create default build configuration."""
    return PathCatConfig()


@pytest.fixture
def small_pool() -> BufferPool:
    """Buffer pool with a tiny capacity for overflow tests."""
    return BufferPool(capacity=16)


# ==================== Parameter Fixtures ====================


@dataclass
class NestedParams:
    sub_filter: str | None = None
    depth: int = 0


@dataclass
class RequestParams:
    version: str | None = None
    id: int = 0
    filter: str | None = None
    nested: NestedParams | None = None


@pytest.fixture
def request_params() -> RequestParams:
    """Typed request parameters with a nested object."""
    return RequestParams(
        version="v1",
        id=789,
        filter="active",
        nested=NestedParams(sub_filter="sub", depth=2),
    )
