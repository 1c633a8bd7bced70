"""
Bootstrap use case — turn the inherited environment into a handoff plan.

Runs once per invocation, before anything else:

    preconditions → layout → brew.env layers → promotion → filter → plan

The result is an immutable ``HandoffPlan``; the entrypoint passes it to
the process adapter, which replaces the bootstrap with the core.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from coffeebrew.core.config.loader import SYSTEM_CONFIG_DIR, config_layers, load_layered_config
from coffeebrew.core.data import get_registry
from coffeebrew.core.models.environment import ConfigLineError, EnvironmentRules, HandoffPlan
from coffeebrew.core.models.layout import InstallLayout
from coffeebrew.core.services.env_filter import filter_environment, mark_ci, promote_variables
from coffeebrew.core.services.layout import USR_LOCAL_BREW_FILE, default_cache_dir, resolve_layout

logger = logging.getLogger(__name__)

MIN_PYTHON = (3, 10)
CORE_MODULE = "coffeebrew.main"
INTERPRETER_OVERRIDE = "HOMEBREW_PYTHON_PATH"


class BootstrapError(Exception):
    """A precondition for running the core is not met."""


def _readable(path: Path) -> bool:
    return os.access(path, os.R_OK)


@dataclass
class BootstrapResult:
    """Outcome of preparing the handoff."""

    plan: HandoffPlan | None = None
    layout: InstallLayout | None = None
    config_errors: list[ConfigLineError] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        result: dict = {
            "config_errors": [str(e) for e in self.config_errors],
        }
        if self.layout:
            result["layout"] = {k.lower(): v for k, v in self.layout.to_env().items()}
        if self.plan:
            result["interpreter"] = self.plan.interpreter
            result["argv"] = list(self.plan.argv)
            result["env"] = dict(sorted(self.plan.env.items()))
        return result


def check_preconditions(
    env: Mapping[str, str],
    version_info: Sequence[int] = sys.version_info,
    getcwd: Callable[[], str] = os.getcwd,
    readable: Callable[[Path], bool] = _readable,
) -> Path:
    """Fail fast, in order, on anything that makes running the core pointless.

    Returns:
        The current working directory.

    Raises:
        BootstrapError: With a one-line message for the first failed check.
    """
    if tuple(version_info[:2]) < MIN_PYTHON:
        required = ".".join(str(n) for n in MIN_PYTHON)
        raise BootstrapError(f"Python {required} or newer is required to run brew.")

    try:
        cwd = Path(getcwd())
    except OSError as e:
        raise BootstrapError(
            "The current working directory doesn't exist, cannot proceed."
        ) from e

    if not cwd.is_dir():
        raise BootstrapError(f"The current working directory {cwd} doesn't exist, cannot proceed.")
    if not readable(cwd):
        raise BootstrapError("The current working directory must be readable to run brew.")

    if not env.get("HOME"):
        raise BootstrapError("$HOME must be set to run brew.")

    return cwd


def resolve_interpreter(env: Mapping[str, str]) -> str:
    """The interpreter that runs the core (HOMEBREW_PYTHON_PATH overrides)."""
    return env.get(INTERPRETER_OVERRIDE) or sys.executable


def prepare_handoff(
    args: Sequence[str],
    entrypoint: str | Path,
    env: Mapping[str, str],
    *,
    rules: EnvironmentRules | None = None,
    system_config_dir: Path = SYSTEM_CONFIG_DIR,
    usr_local_brew_file: Path = USR_LOCAL_BREW_FILE,
    version_info: Sequence[int] = sys.version_info,
    getcwd: Callable[[], str] = os.getcwd,
    readable: Callable[[Path], bool] = _readable,
) -> BootstrapResult:
    """Build the handoff plan from a snapshot of the inherited environment.

    Args:
        args: Command-line arguments, forwarded to the core unchanged.
        entrypoint: How the entrypoint was invoked (``sys.argv[0]``).
        env: Inherited environment snapshot. Not modified.
        rules: Filter rules (default: the packaged catalog).
    """
    result = BootstrapResult()
    rules = rules or get_registry().env_rules

    try:
        cwd = check_preconditions(
            env, version_info=version_info, getcwd=getcwd, readable=readable,
        )
    except BootstrapError as e:
        result.error = str(e)
        return result

    layout = resolve_layout(entrypoint, cwd, usr_local_brew_file=usr_local_brew_file)
    result.layout = layout

    layers = config_layers(layout.prefix, env, system_dir=system_config_dir)
    merged, result.config_errors = load_layered_config(layers, env)

    # Layout always comes from the entrypoint, never from config.
    merged.update(layout.to_env())
    if not merged.get("HOMEBREW_CACHE"):
        merged["HOMEBREW_CACHE"] = str(default_cache_dir(merged))

    merged = mark_ci(merged, rules)
    merged = promote_variables(merged, rules)
    filtered = filter_environment(merged, rules)

    result.plan = HandoffPlan(
        interpreter=resolve_interpreter(merged),
        argv=("-m", CORE_MODULE, *args),
        env=filtered,
    )
    logger.info(
        "Handing off to %s with %d variables", result.plan.interpreter, len(filtered),
    )
    return result
