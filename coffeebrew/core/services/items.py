"""
Item listing — locally installable formulae and casks.

Names come from two places:

- the cached API name index (``<cache>/api/<kind>_names.txt``), a snapshot
  of everything the core tap offers;
- a walk of ``Library/Taps`` for definition files.

When the index is usable it stands in for the core tap entirely, so the
walk skips that tap. Otherwise every tap is walked. A core-tap definition
that is newer than the index is therefore not listed until the index is
refreshed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from coffeebrew.adapters.filesystem import DefinitionWalker, read_lines
from coffeebrew.core.models.items import ItemKind, Tap, strip_repo_prefix
from coffeebrew.core.models.settings import CoreSettings

logger = logging.getLogger(__name__)


# ── Taps ────────────────────────────────────────────────────────


def discover_taps(taps_dir: Path) -> list[Tap]:
    """List tap directories (``<owner>/<repo>``) under ``taps_dir``."""
    taps: list[Tap] = []
    try:
        owners = sorted(p for p in taps_dir.iterdir() if p.is_dir())
    except OSError as e:
        logger.debug("No taps at %s: %s", taps_dir, e)
        return taps

    for owner in owners:
        try:
            repos = sorted(p for p in owner.iterdir() if p.is_dir())
        except OSError as e:
            logger.debug("Skipping unreadable tap owner %s: %s", owner, e)
            continue
        taps.extend(Tap.from_path(repo) for repo in repos)

    return taps


# ── Naming ──────────────────────────────────────────────────────


def qualified_name(rel: Path, kind: ItemKind) -> tuple[str, str] | None:
    """Turn a definition path relative to the Taps root into a name.

    ``acme/homebrew-extra/Formula/b/baz.rb`` → ``("acme/extra", "acme/extra/baz")``.

    Returns:
        (tap name, qualified item name), or None for files outside a tap.
    """
    parts = rel.parts
    if len(parts) < 3:
        return None

    tap = f"{parts[0]}/{strip_repo_prefix(parts[1])}"
    inner = [*parts[2:-1], Path(parts[-1]).stem]
    return tap, kind.rewrite("/".join([tap, *inner]))


def item_name(rel: Path, kind: ItemKind) -> str | None:
    """Listing name for a definition: short inside the core tap, qualified elsewhere."""
    named = qualified_name(rel, kind)
    return _display_name(rel, *named, kind) if named else None


def _display_name(rel: Path, tap: str, qualified: str, kind: ItemKind) -> str:
    if kind.in_core_tap(rel):
        return qualified[len(tap) + 1:]
    return qualified


# ── Sources ─────────────────────────────────────────────────────


def scan_items(taps_dir: Path, kind: ItemKind, skip_core_tap: bool = False) -> Iterator[str]:
    """Yield names of all ``kind`` definitions found under ``taps_dir``.

    Args:
        taps_dir: ``Library/Taps``.
        kind: Formula or cask.
        skip_core_tap: Ignore definitions inside ``kind``'s core tap.
    """
    walker = DefinitionWalker(taps_dir, include=kind.includes, exclude=kind.excludes)

    for path in walker:
        rel = path.relative_to(taps_dir)
        if skip_core_tap and kind.in_core_tap(rel):
            continue
        named = qualified_name(rel, kind)
        if named is None:
            continue
        yield _display_name(rel, *named, kind)


def cache_path(settings: CoreSettings, kind: ItemKind) -> Path | None:
    api_dir = settings.api_cache_dir
    return api_dir / kind.cache_file if api_dir else None


def read_cached_names(settings: CoreSettings, kind: ItemKind) -> list[str] | None:
    """Names from the cached API index, or None when it must not be used."""
    if settings.no_install_from_api:
        logger.debug("HOMEBREW_NO_INSTALL_FROM_API set: ignoring cached %s names", kind.name)
        return None
    path = cache_path(settings, kind)
    if path is None or not path.is_file():
        return None
    names = read_lines(path)
    if names is not None:
        logger.debug("Read %d cached %s names from %s", len(names), kind.name, path)
    return names


# ── Merge ───────────────────────────────────────────────────────


def merge_names(*streams: Iterable[str]) -> list[str]:
    """Union of name streams, sorted and deduplicated ignoring case.

    When two names differ only in case, the first one seen is kept, so
    earlier streams take precedence.
    """
    seen: dict[str, str] = {}
    for stream in streams:
        for raw in stream:
            name = raw.strip()
            if name:
                seen.setdefault(name.casefold(), name)
    return sorted(seen.values(), key=lambda n: (n.casefold(), n))


def list_items(settings: CoreSettings, kind: ItemKind) -> tuple[list[str], bool]:
    """List installable items of ``kind``.

    Returns:
        (names, used_cache).
    """
    cached = read_cached_names(settings, kind)
    if cached is not None:
        scanned = scan_items(settings.taps_dir, kind, skip_core_tap=True)
        return merge_names(cached, scanned), True
    return merge_names(scan_items(settings.taps_dir, kind)), False
