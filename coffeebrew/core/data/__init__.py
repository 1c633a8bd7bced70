"""
Central data registry for static catalogs.

Loads catalogs from ``coffeebrew/core/data/`` once at first access and
caches them for the process lifetime.

Usage::

    from coffeebrew.core.data import get_registry

    rules = get_registry().env_rules   # EnvironmentRules
"""

from __future__ import annotations

import logging
from functools import cached_property
from pathlib import Path

import yaml

from coffeebrew.core.models.environment import EnvironmentRules

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent


def _load_yaml(relative_path: str) -> dict:
    """Load a YAML mapping relative to the data directory."""
    path = _DATA_DIR / relative_path
    if not path.exists():
        logger.warning("Data file not found: %s", path)
        return {}
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        logger.warning("Data file %s is not a mapping, ignoring", path)
        return {}
    return data


class DataRegistry:
    """Registry for static data catalogs.

    Each property lazily loads its file on first access and caches the
    result for the lifetime of the instance.
    """

    @cached_property
    def env_rules(self) -> EnvironmentRules:
        """Allow-list, promotion and CI rules for the environment filter."""
        rules = EnvironmentRules.model_validate(_load_yaml("env_rules.yml"))
        logger.debug(
            "Loaded env rules: %d allowed, %d passthrough, %d tool-owned",
            len(rules.allowed), len(rules.passthrough), len(rules.tool_owned),
        )
        return rules


_registry: DataRegistry | None = None


def get_registry() -> DataRegistry:
    """Return the process-wide DataRegistry singleton."""
    global _registry
    if _registry is None:
        _registry = DataRegistry()
    return _registry
