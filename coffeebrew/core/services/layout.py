"""
Layout resolution — find the installation from the entrypoint's location.

``bin/brew`` may be the real file inside the repository checkout or a
symlink into it from a prefix (``/usr/local/bin/brew`` → ``../Homebrew/bin/brew``).
The prefix is always derived from where the entrypoint was invoked;
the repository follows one level of symlink.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from pathlib import Path

from coffeebrew.core.models.layout import InstallLayout

logger = logging.getLogger(__name__)

# A system-wide prefix that is preferred when it points at the same checkout.
USR_LOCAL_PREFIX = Path("/usr/local")
USR_LOCAL_BREW_FILE = USR_LOCAL_PREFIX / "bin" / "brew"


def physical_dir(path: Path) -> Path | None:
    """Return the symlink-free path of a directory, or None if it is gone."""
    try:
        resolved = Path(os.path.realpath(path, strict=True))
    except OSError:
        return None
    return resolved if resolved.is_dir() else None


def symlink_target_directory(link: Path, link_dir: Path) -> Path | None:
    """Physical directory of a symlink's target.

    Relative targets are taken relative to ``link_dir``. Returns None when
    the link cannot be read or its target directory no longer exists.
    """
    try:
        target = Path(os.readlink(link))
    except OSError as e:
        logger.debug("Cannot read symlink %s: %s", link, e)
        return None
    return physical_dir(link_dir / target.parent)


def resolve_layout(
    entrypoint: str | Path,
    cwd: Path,
    usr_local_brew_file: Path = USR_LOCAL_BREW_FILE,
) -> InstallLayout:
    """Resolve prefix and repository from the entrypoint's invocation path.

    Args:
        entrypoint: How the entrypoint was invoked (``sys.argv[0]``).
        cwd: Working directory, for relative invocation paths.
        usr_local_brew_file: The alternate installation's entrypoint.
    """
    invoked = Path(entrypoint)
    if not invoked.is_absolute():
        invoked = cwd / invoked

    brew_file_dir = physical_dir(invoked.parent) or invoked.parent
    brew_file = brew_file_dir / invoked.name

    # bin/brew at the filesystem root still yields "/".
    prefix = brew_file.parent.parent
    repository = prefix

    if brew_file.is_symlink():
        target_dir = symlink_target_directory(brew_file, brew_file_dir)
        if target_dir is None:
            logger.warning(
                "Cannot resolve %s: symlink target is missing; using %s",
                brew_file, repository,
            )
        else:
            repository = target_dir.parent

    if usr_local_brew_file.is_symlink() and not (prefix / "Cellar").is_symlink():
        usr_local_dir = symlink_target_directory(usr_local_brew_file, usr_local_brew_file.parent)
        if usr_local_dir is not None and usr_local_dir.parent == repository:
            prefix = usr_local_brew_file.parent.parent

    layout = InstallLayout(brew_file=brew_file, prefix=prefix, repository=repository)
    logger.debug("Resolved layout: prefix=%s repository=%s", layout.prefix, layout.repository)
    return layout


def default_cache_dir(env: Mapping[str, str], platform: str = sys.platform) -> Path:
    """Cache root used when HOMEBREW_CACHE is unset."""
    home = Path(env.get("HOME", ""))
    if platform == "darwin":
        return home / "Library" / "Caches" / "Homebrew"
    xdg = env.get("XDG_CACHE_HOME", "")
    base = Path(xdg) if xdg else home / ".cache"
    return base / "Homebrew"
