"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from toolcfg.core.settings import build_settings
from toolcfg.schemas import CMOCK_2_6, GCOVR_7_0


@pytest.fixture
def cmock_settings() -> dict:
    """Fully populated cmock 2.6 settings at their defaults."""
    return build_settings(CMOCK_2_6)


@pytest.fixture
def gcovr_settings() -> dict:
    """Fully populated gcovr 7.0 settings at their defaults."""
    return build_settings(GCOVR_7_0)


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    """Return a not-yet-existing nested output directory."""
    return tmp_path / "build" / "config"
