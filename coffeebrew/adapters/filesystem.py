"""
Filesystem adapter — directory walks and flat text files.

The walker is a plain iterable: every ``iter()`` starts a fresh walk, so
the same walker can be consumed more than once and always reflects the
tree as it is at that moment.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator
from pathlib import Path

logger = logging.getLogger(__name__)

PathPredicate = Callable[[Path], bool]

# Tap directories that never hold package definitions.
PRUNED_DIRS = frozenset({"cmd", ".github", "lib", "spec", "vendor"})


def _never(_: Path) -> bool:
    return False


class DefinitionWalker:
    """Lazily yield files under ``root`` accepted by two predicates.

    Both predicates receive the path relative to ``root``. A file is
    yielded when ``include`` accepts it and ``exclude`` does not.
    Symlinked directories are not followed; unreadable directories are
    skipped.
    """

    def __init__(
        self,
        root: Path,
        include: PathPredicate,
        exclude: PathPredicate | None = None,
        pruned: frozenset[str] = PRUNED_DIRS,
    ) -> None:
        self.root = root
        self.include = include
        self.exclude = exclude or _never
        self.pruned = pruned

    def __iter__(self) -> Iterator[Path]:
        if not self.root.is_dir():
            logger.debug("Nothing to walk: %s is not a directory", self.root)
            return

        for dirpath, dirnames, filenames in os.walk(self.root, onerror=self._on_error):
            dirnames[:] = sorted(d for d in dirnames if d not in self.pruned)
            base = Path(dirpath)
            for filename in sorted(filenames):
                path = base / filename
                rel = path.relative_to(self.root)
                if self.include(rel) and not self.exclude(rel):
                    yield path

    @staticmethod
    def _on_error(error: OSError) -> None:
        logger.debug("Skipping unreadable directory %s: %s", error.filename, error.strerror)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} root={str(self.root)!r}>"


def read_lines(path: Path) -> list[str] | None:
    """Read a one-entry-per-line text file.

    Returns the stripped, non-empty lines, or None if the file is absent
    or unreadable.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot read %s: %s", path, e)
        return None
    return [line.strip() for line in content.splitlines() if line.strip()]
