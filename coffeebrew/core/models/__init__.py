"""
Domain models — Pydantic types for the bootstrap and the item lister.

    from coffeebrew.core.models import EnvironmentRules, InstallLayout, ItemKind, Tap
"""

from coffeebrew.core.models.environment import (
    ENV_PREFIX,
    ConfigLayer,
    ConfigLineError,
    EnvironmentRules,
    HandoffPlan,
)
from coffeebrew.core.models.items import CASK, FORMULA, ItemKind, Tap
from coffeebrew.core.models.layout import InstallLayout
from coffeebrew.core.models.settings import CoreSettings

__all__ = [
    "CASK",
    "ConfigLayer",
    "ConfigLineError",
    "CoreSettings",
    "ENV_PREFIX",
    "EnvironmentRules",
    "FORMULA",
    "HandoffPlan",
    "InstallLayout",
    "ItemKind",
    "Tap",
]
