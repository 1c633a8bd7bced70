"""Adapters — the bootstrap's and lister's only contact with the OS.

Public re-exports for convenient access.
"""

from coffeebrew.adapters.filesystem import DefinitionWalker, read_lines
from coffeebrew.adapters.process import exec_handoff

__all__ = [
    "DefinitionWalker",
    "exec_handoff",
    "read_lines",
]
