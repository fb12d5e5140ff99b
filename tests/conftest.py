"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from layerkit.core.models.config import LayerkitConfig
from layerkit.core.services.generators.names import NameResolver
from layerkit.core.services.generators.stubs import StubStore


@pytest.fixture
def config(tmp_path: Path) -> LayerkitConfig:
    """Default configuration rooted at a temporary project."""
    return LayerkitConfig(project_root=tmp_path)


@pytest.fixture
def resolver(config: LayerkitConfig) -> NameResolver:
    """Name resolver for the temporary project."""
    return NameResolver.from_config(config)


@pytest.fixture
def stubs() -> StubStore:
    """The packaged stubs, without overrides."""
    return StubStore.load()
