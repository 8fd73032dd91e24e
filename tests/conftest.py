"""Pytest configuration and fixtures."""

import shutil
from pathlib import Path

import pytest

from contractlint.config import Config, load_config
from contractlint.signals.registry import SetterRegistry


@pytest.fixture
def fixture_repo_path() -> Path:
    """Path to the minimal fixture repository."""
    return Path(__file__).parent / "fixtures" / "minimal_repo"


@pytest.fixture
def repo_copy(fixture_repo_path: Path, tmp_path: Path) -> Path:
    """Writable copy of the fixture repository."""
    target = tmp_path / "repo"
    shutil.copytree(fixture_repo_path, target)
    return target


@pytest.fixture
def fixture_config(fixture_repo_path: Path) -> Config:
    """Configuration loaded from the fixture repository."""
    return load_config(fixture_repo_path)


@pytest.fixture
def voice_registry() -> SetterRegistry:
    """Registry with three setters, as a state module would export them."""
    return SetterRegistry.from_names(["setVoiceIndex", "setSpeed", "setTheme"])
