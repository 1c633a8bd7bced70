"""
Tests for layout resolution — prefix and repository from the entrypoint.
"""

import os
from pathlib import Path

import pytest

from coffeebrew.core.services.layout import (
    default_cache_dir,
    resolve_layout,
    symlink_target_directory,
)


@pytest.fixture
def root(tmp_path: Path) -> Path:
    return tmp_path.resolve()


@pytest.fixture
def no_usr_local(root: Path) -> Path:
    """An alternate-install entrypoint that doesn't exist."""
    return root / "usr-local" / "bin" / "brew"


def _entrypoint(directory: Path) -> Path:
    bin_dir = directory / "bin"
    bin_dir.mkdir(parents=True, exist_ok=True)
    brew = bin_dir / "brew"
    brew.write_text("#!/bin/sh\n")
    return brew


class TestResolveLayout:
    def test_plain_file(self, root, no_usr_local):
        brew = _entrypoint(root / "opt")
        layout = resolve_layout(brew, root, usr_local_brew_file=no_usr_local)
        assert layout.brew_file == brew
        assert layout.prefix == root / "opt"
        assert layout.repository == root / "opt"
        assert layout.library == root / "opt" / "Library"

    def test_relative_invocation(self, root, no_usr_local):
        _entrypoint(root / "opt")
        layout = resolve_layout("bin/brew", root / "opt", usr_local_brew_file=no_usr_local)
        assert layout.prefix == root / "opt"

    def test_relative_symlink(self, root, no_usr_local):
        _entrypoint(root / "opt" / "Homebrew")
        (root / "opt" / "bin").mkdir(parents=True)
        link = root / "opt" / "bin" / "brew"
        os.symlink("../Homebrew/bin/brew", link)

        layout = resolve_layout(link, root, usr_local_brew_file=no_usr_local)
        assert layout.prefix == root / "opt"
        assert layout.repository == root / "opt" / "Homebrew"

    def test_absolute_symlink(self, root, no_usr_local):
        real = _entrypoint(root / "checkout")
        (root / "prefix" / "bin").mkdir(parents=True)
        link = root / "prefix" / "bin" / "brew"
        os.symlink(real, link)

        layout = resolve_layout(link, root, usr_local_brew_file=no_usr_local)
        assert layout.prefix == root / "prefix"
        assert layout.repository == root / "checkout"

    def test_dangling_symlink_degrades(self, root, no_usr_local):
        (root / "opt" / "bin").mkdir(parents=True)
        link = root / "opt" / "bin" / "brew"
        os.symlink("../gone/bin/brew", link)

        layout = resolve_layout(link, root, usr_local_brew_file=no_usr_local)
        assert layout.repository == root / "opt"
        assert layout.prefix == root / "opt"

    def test_usr_local_prefix_preferred(self, root):
        real = _entrypoint(root / "repo")
        (root / "other" / "bin").mkdir(parents=True)
        (root / "usr-local" / "bin").mkdir(parents=True)
        invoked = root / "other" / "bin" / "brew"
        usr_local = root / "usr-local" / "bin" / "brew"
        os.symlink(real, invoked)
        os.symlink(real, usr_local)

        layout = resolve_layout(invoked, root, usr_local_brew_file=usr_local)
        assert layout.repository == root / "repo"
        assert layout.prefix == root / "usr-local"

    def test_usr_local_other_checkout_ignored(self, root):
        real = _entrypoint(root / "repo")
        elsewhere = _entrypoint(root / "elsewhere")
        (root / "usr-local" / "bin").mkdir(parents=True)
        usr_local = root / "usr-local" / "bin" / "brew"
        os.symlink(elsewhere, usr_local)

        layout = resolve_layout(real, root, usr_local_brew_file=usr_local)
        assert layout.prefix == root / "repo"


class TestSymlinkTargetDirectory:
    def test_not_a_link(self, root):
        brew = _entrypoint(root / "opt")
        assert symlink_target_directory(brew, brew.parent) is None


class TestDefaultCacheDir:
    def test_linux_xdg(self):
        env = {"HOME": "/home/u", "XDG_CACHE_HOME": "/xdg"}
        assert default_cache_dir(env, platform="linux") == Path("/xdg/Homebrew")

    def test_linux_fallback(self):
        assert default_cache_dir({"HOME": "/home/u"}, platform="linux") == Path("/home/u/.cache/Homebrew")

    def test_macos(self):
        assert default_cache_dir({"HOME": "/Users/u"}, platform="darwin") == Path(
            "/Users/u/Library/Caches/Homebrew"
        )
