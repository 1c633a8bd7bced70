"""
Environment filtering — pure functions over an environment snapshot.

The bootstrap never hands its inherited environment to the core.
Instead it:

1. marks CI runs that don't set ``CI`` themselves,
2. promotes selected bare variables into the ``HOMEBREW_`` namespace,
3. keeps only allow-listed, namespaced and (on CI) ``GITHUB_`` variables.

Every function takes a mapping and returns a new dict; none of them
touch ``os.environ``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from coffeebrew.core.models.environment import EnvironmentRules

logger = logging.getLogger(__name__)


def mark_ci(env: Mapping[str, str], rules: EnvironmentRules) -> dict[str, str]:
    """Set CI=1 for CI systems that only announce themselves otherwise."""
    result = dict(env)
    if not result.get("CI") and any(result.get(name) for name in rules.ci_indicators):
        result["CI"] = "1"

    if result.get("GITHUB_ACTIONS") and result.get("ImageOS") and result.get("ImageVersion"):
        result[rules.namespaced("GITHUB_HOSTED_RUNNER")] = "1"

    return result


def promote_variables(env: Mapping[str, str], rules: EnvironmentRules) -> dict[str, str]:
    """Copy bare variables into their namespaced form.

    Pass-through names only fill in a namespaced value the user left unset.
    Tool-owned names always replace it; when the bare variable is unset the
    namespaced one is removed so a user-set value can't leak through.
    """
    result = dict(env)

    for name in rules.passthrough:
        value = env.get(name)
        if not value:
            continue
        namespaced = rules.namespaced(name)
        if result.get(namespaced):
            continue
        result[namespaced] = value

    for name in rules.tool_owned:
        namespaced = rules.namespaced(name)
        value = env.get(name)
        if value:
            result[namespaced] = value
        elif result.pop(namespaced, None) is not None:
            logger.debug("Dropped user-set %s", namespaced)

    return result


def filter_environment(env: Mapping[str, str], rules: EnvironmentRules) -> dict[str, str]:
    """Return the environment the core process runs with.

    Keeps, when non-empty: allow-listed names, every namespaced name, and
    with CI set, CI-platform names that don't look like secrets. PATH is
    always the sanitized system path.
    """
    source = dict(env)
    source["PATH"] = rules.sanitized_path

    filtered: dict[str, str] = {}

    for name in rules.allowed:
        value = source.get(name)
        if value:
            filtered[name] = value

    for name, value in source.items():
        if value and name.startswith(rules.prefix):
            filtered[name] = value

    if source.get("CI"):
        for name, value in source.items():
            if not value or not name.startswith(rules.ci_prefix):
                continue
            if rules.is_secret(name):
                logger.debug("Not passing %s to the core", name)
                continue
            filtered[name] = value

    logger.debug("Filtered environment: %d of %d variables kept", len(filtered), len(env))
    return filtered


def is_permitted(name: str, env: Mapping[str, str], rules: EnvironmentRules) -> bool:
    """Whether ``name`` may appear in a filtered environment built from ``env``."""
    if name in rules.allowed or name.startswith(rules.prefix):
        return True
    return bool(env.get("CI")) and name.startswith(rules.ci_prefix) and not rules.is_secret(name)
