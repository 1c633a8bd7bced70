"""
Listing use case — the ``formulae`` and ``casks`` commands.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from coffeebrew.core.config.loader import ConfigError, load_settings
from coffeebrew.core.models.items import ItemKind
from coffeebrew.core.services.items import list_items


@dataclass
class ListingResult:
    """Installable items of one kind."""

    kind: str
    items: list[str] = field(default_factory=list)
    used_cache: bool = False
    error: str | None = None

    @property
    def count(self) -> int:
        return len(self.items)

    def to_dict(self) -> dict:
        if self.error:
            return {"kind": self.kind, "error": self.error}
        return {
            "kind": self.kind,
            "count": self.count,
            "items": self.items,
            "source": "api+taps" if self.used_cache else "taps",
        }


def run_listing(kind: ItemKind, env: Mapping[str, str] | None = None) -> ListingResult:
    """List locally installable items of ``kind``.

    Args:
        kind: FORMULA or CASK.
        env: Environment snapshot (default: the process environment).
    """
    result = ListingResult(kind=kind.name)

    try:
        settings = load_settings(os.environ if env is None else env)
    except ConfigError as e:
        result.error = str(e)
        return result

    result.items, result.used_cache = list_items(settings, kind)
    return result
