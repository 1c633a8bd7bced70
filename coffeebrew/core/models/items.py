"""
Item models — taps and the kinds of package definitions they hold.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict

# Repository-name prefixes stripped to obtain a tap's short repo name.
TAP_REPO_PREFIXES = ("homebrew-", "linuxbrew-", "coffeebrew-")


class Tap(BaseModel):
    """A package registry cloned under ``Library/Taps/<owner>/<repo>``."""

    model_config = ConfigDict(frozen=True)

    owner: str
    repo: str
    path: Path

    @property
    def name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @classmethod
    def from_path(cls, path: Path) -> Tap:
        """Build a Tap from its directory (``.../<owner>/<prefix>-<repo>``)."""
        return cls(owner=path.parent.name, repo=strip_repo_prefix(path.name), path=path)


def strip_repo_prefix(dirname: str) -> str:
    for prefix in TAP_REPO_PREFIXES:
        if dirname.startswith(prefix):
            return dirname[len(prefix):]
    return dirname


class ItemKind(BaseModel):
    """A kind of package definition (formula or cask).

    ``includes`` and ``excludes`` are independent predicates over a path
    relative to the Taps root; the walker composes them.
    """

    model_config = ConfigDict(frozen=True)

    name: Literal["formula", "cask"]
    subdir: str
    # Directory of the core tap relative to the Taps root (``<owner>/<repo dir>``).
    core_tap_dir: str
    cache_file: str
    suffix: str = ".rb"
    # Definitions must live under ``subdir`` (casks) or may live anywhere (formulae).
    require_subdir: bool = False
    excluded_dirs: tuple[str, ...] = ()

    def includes(self, rel: Path) -> bool:
        if rel.suffix != self.suffix:
            return False
        if self.require_subdir:
            return self.subdir in rel.parts[:-1]
        return True

    def excludes(self, rel: Path) -> bool:
        return any(part in self.excluded_dirs for part in rel.parts[:-1])

    def in_core_tap(self, rel: Path) -> bool:
        return "/".join(rel.parts[:2]) == self.core_tap_dir

    def rewrite(self, qualified: str) -> str:
        """Drop the ``<subdir>/`` component and any shard directories under it."""
        return re.sub(rf"/{re.escape(self.subdir)}/(.+/)?", "/", qualified, count=1)


FORMULA = ItemKind(
    name="formula",
    subdir="Formula",
    core_tap_dir="LUSDbrew/coffeebrew-core",
    cache_file="formula_names.txt",
    excluded_dirs=("Casks",),
)

CASK = ItemKind(
    name="cask",
    subdir="Casks",
    core_tap_dir="LUSDbrew/coffeebrew-cask",
    cache_file="cask_names.txt",
    require_subdir=True,
)
