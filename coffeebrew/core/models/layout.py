"""
Installation layout — where the tool lives on disk.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict


class InstallLayout(BaseModel):
    """Directories derived from the entrypoint's location.

    ``prefix`` is where packages get linked; ``repository`` is the checkout
    the entrypoint belongs to (they differ when ``bin/brew`` is a symlink).
    """

    model_config = ConfigDict(frozen=True)

    brew_file: Path
    prefix: Path
    repository: Path

    @property
    def library(self) -> Path:
        """The library root holding ``Taps/``."""
        return self.repository / "Library"

    def to_env(self) -> dict[str, str]:
        """Variables the core relies on to find the installation."""
        return {
            "HOMEBREW_BREW_FILE": str(self.brew_file),
            "HOMEBREW_PREFIX": str(self.prefix),
            "HOMEBREW_REPOSITORY": str(self.repository),
            "HOMEBREW_LIBRARY": str(self.library),
        }
