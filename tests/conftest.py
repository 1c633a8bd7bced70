"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from coffeebrew.core.data import get_registry
from coffeebrew.core.models import EnvironmentRules


def write_files(root: Path, files: dict[str, str]) -> None:
    """Create ``files`` (relative path → content) under ``root``."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)


@pytest.fixture
def library(tmp_path: Path) -> Path:
    """An empty Library directory with a Taps/ subdirectory."""
    lib = tmp_path / "Library"
    (lib / "Taps").mkdir(parents=True)
    return lib


@pytest.fixture
def make_tap(library: Path):
    """Create a tap: ``make_tap("acme/homebrew-extra", {"Formula/baz.rb": ""})``."""

    def _make(tap_dir: str, files: dict[str, str]) -> Path:
        root = library / "Taps" / tap_dir
        root.mkdir(parents=True, exist_ok=True)
        write_files(root, files)
        return root

    return _make


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """A HOMEBREW_CACHE directory with an empty api/ subdirectory."""
    cache = tmp_path / "cache"
    (cache / "api").mkdir(parents=True)
    return cache


@pytest.fixture
def rules() -> EnvironmentRules:
    """The packaged environment filter rules."""
    return get_registry().env_rules
