"""
Core settings — what the interpreted core reads from its (filtered) environment.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict


class CoreSettings(BaseModel):
    """Runtime settings of the core process, built from an env snapshot."""

    model_config = ConfigDict(frozen=True)

    library: Path
    cache: Path | None = None
    no_install_from_api: bool = False

    @property
    def taps_dir(self) -> Path:
        return self.library / "Taps"

    @property
    def api_cache_dir(self) -> Path | None:
        return self.cache / "api" if self.cache else None

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> CoreSettings:
        """Build settings from an environment mapping.

        Raises:
            ValueError: If HOMEBREW_LIBRARY is missing.
        """
        library = env.get("HOMEBREW_LIBRARY", "")
        if not library:
            raise ValueError("HOMEBREW_LIBRARY is not set")
        cache = env.get("HOMEBREW_CACHE", "")
        return cls(
            library=Path(library),
            cache=Path(cache) if cache else None,
            no_install_from_api=bool(env.get("HOMEBREW_NO_INSTALL_FROM_API")),
        )
