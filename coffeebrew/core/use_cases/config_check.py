"""
Config check use case — report what the core sees in its environment.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from coffeebrew.core.config.loader import ConfigError, load_settings
from coffeebrew.core.models.items import CASK, FORMULA
from coffeebrew.core.models.settings import CoreSettings
from coffeebrew.core.services.items import cache_path, discover_taps


@dataclass
class ConfigCheckResult:
    """Result of inspecting the core's settings."""

    valid: bool = False
    settings: CoreSettings | None = None
    taps: list[str] = field(default_factory=list)
    caches: dict[str, bool] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        s = self.settings
        return {
            "valid": self.valid,
            "library": str(s.library) if s else None,
            "cache": str(s.cache) if s and s.cache else None,
            "no_install_from_api": s.no_install_from_api if s else False,
            "taps": self.taps,
            "caches": self.caches,
            "errors": self.errors,
            "warnings": self.warnings,
        }


def check_config(env: Mapping[str, str] | None = None) -> ConfigCheckResult:
    """Load the core settings and flag anything that will empty a listing."""
    result = ConfigCheckResult()

    try:
        settings = load_settings(os.environ if env is None else env)
    except ConfigError as e:
        result.errors.append(str(e))
        return result
    result.settings = settings

    if not settings.library.is_dir():
        result.errors.append(f"Library directory does not exist: {settings.library}")
        return result

    if not settings.taps_dir.is_dir():
        result.warnings.append(f"No taps directory at {settings.taps_dir}")
    result.taps = [tap.name for tap in discover_taps(settings.taps_dir)]

    for kind in (FORMULA, CASK):
        path = cache_path(settings, kind)
        result.caches[kind.name] = bool(path and path.is_file())

    if settings.no_install_from_api:
        result.warnings.append("HOMEBREW_NO_INSTALL_FROM_API is set: cached names are ignored.")
    elif settings.cache is None:
        result.warnings.append("HOMEBREW_CACHE is not set: cached names are unavailable.")

    result.valid = not result.errors
    return result
