"""
Environment models — filter rules, configuration layers, and the handoff plan.

The bootstrap builds these once per process from a snapshot of the
inherited environment. Nothing downstream reads ``os.environ`` again:
the ``HandoffPlan`` is the complete description of the process that
replaces the bootstrap.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

# Prefix shared by every variable (and env-file key) owned by the tool.
ENV_PREFIX = "HOMEBREW_"


class EnvironmentRules(BaseModel):
    """Which variables survive into the core process, and how they get there.

    Loaded from ``core/data/env_rules.yml`` through the DataRegistry.
    """

    model_config = ConfigDict(frozen=True)

    prefix: str = ENV_PREFIX

    # General-purpose variables kept verbatim (when non-empty).
    allowed: tuple[str, ...] = ()

    # Copied to PREFIX_<NAME> only when the namespaced form is unset.
    passthrough: tuple[str, ...] = ()

    # Always copied to PREFIX_<NAME>; user-set namespaced values are dropped.
    tool_owned: tuple[str, ...] = ()

    # Extra namespace admitted only when CI is set.
    ci_prefix: str = "GITHUB_"
    secret_markers: tuple[str, ...] = ("TOKEN",)

    # Indicators that mean "this is a CI run" even when CI itself is unset.
    ci_indicators: tuple[str, ...] = ()

    sanitized_path: str = "/usr/bin:/bin:/usr/sbin:/sbin"

    def namespaced(self, name: str) -> str:
        """Return the namespaced form of a bare variable name."""
        return f"{self.prefix}{name}"

    def is_secret(self, name: str) -> bool:
        """Whether a variable name looks like it carries a credential."""
        upper = name.upper()
        return any(marker in upper for marker in self.secret_markers)


class ConfigLayer(BaseModel):
    """One ``brew.env`` file in the layered configuration."""

    model_config = ConfigDict(frozen=True)

    name: str        # system | prefix | user
    path: Path


class ConfigLineError(BaseModel):
    """A line in an env file that could not be exported."""

    path: Path
    line_number: int
    line: str
    reason: str

    def __str__(self) -> str:
        return f"{self.path}:{self.line_number}: {self.reason}: {self.line!r}"


class HandoffPlan(BaseModel):
    """The process that replaces the bootstrap.

    ``env`` is the entire environment of the new process; nothing is
    inherited beyond what was explicitly selected.
    """

    model_config = ConfigDict(frozen=True)

    interpreter: str
    argv: tuple[str, ...]
    env: dict[str, str] = Field(default_factory=dict)
